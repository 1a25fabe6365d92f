"""Treatment protocol lookup and assembly."""

from __future__ import annotations

import logging
import re
from typing import Mapping, Optional, Sequence, TypeVar, Union

from scribe_engine.models import (
    ComplicationManagement,
    FollowUpPlan,
    MonitoringParameter,
    ProtocolSeverity,
    Treatment,
    TreatmentProtocol,
)
from scribe_engine.treatment.templates import (
    GENERIC_TEMPLATE,
    PROTOCOL_TEMPLATES,
    Intervention,
    ProtocolTemplate,
    is_essential,
)

log = logging.getLogger(__name__)

_V = TypeVar("_V")


def _for_severity(table: Mapping[ProtocolSeverity, _V], severity: ProtocolSeverity) -> _V:
    if severity in table:
        return table[severity]
    if ProtocolSeverity.MODERATE in table:
        return table[ProtocolSeverity.MODERATE]
    return next(iter(table.values()))


def parse_severity(severity: Union[str, ProtocolSeverity, None]) -> ProtocolSeverity:
    """Coerce a severity string, defaulting to moderate when unrecognised."""
    if isinstance(severity, ProtocolSeverity):
        return severity
    try:
        return ProtocolSeverity((severity or "").strip().lower())
    except ValueError:
        log.warning("Unknown protocol severity %r, using moderate", severity)
        return ProtocolSeverity.MODERATE


class TreatmentProtocolGenerator:
    """Builds a ``TreatmentProtocol`` for a named condition and severity."""

    def __init__(self, templates: Sequence[ProtocolTemplate] = PROTOCOL_TEMPLATES) -> None:
        self._templates = tuple(templates)

    @property
    def templates(self) -> tuple[ProtocolTemplate, ...]:
        return self._templates

    def find_template(self, condition: str) -> Optional[ProtocolTemplate]:
        """Exact name/alias/ICD-10 match first, then the longest alias
        found as a whole word inside ``condition``."""
        query = (condition or "").strip().lower()
        if not query:
            return None
        for template in self._templates:
            if query in template.keys:
                return template

        best: Optional[ProtocolTemplate] = None
        best_len = 0
        for template in self._templates:
            for key in template.keys:
                if len(key) > best_len and re.search(rf"\b{re.escape(key)}\b", query):
                    best, best_len = template, len(key)
        return best

    def protocol(
        self,
        condition: str,
        severity: Union[str, ProtocolSeverity, None] = ProtocolSeverity.MODERATE,
    ) -> TreatmentProtocol:
        level = parse_severity(severity)
        template = self.find_template(condition)
        if template is None:
            log.debug("No protocol template for %r, using generic supportive care", condition)
            name = (condition or "").strip() or "Unspecified condition"
            return self._build(GENERIC_TEMPLATE, level, condition=name, generic=True)
        return self._build(template, level, condition=template.condition, generic=False)

    def _build(
        self,
        template: ProtocolTemplate,
        severity: ProtocolSeverity,
        *,
        condition: str,
        generic: bool,
    ) -> TreatmentProtocol:
        return TreatmentProtocol(
            condition=condition,
            severity=severity,
            setting=_for_severity(template.settings, severity),
            primary_treatment=self._treatments(template.primary, severity),
            alternative_treatment=self._treatments(template.alternative, severity),
            monitoring=[
                MonitoringParameter(
                    parameter=m.parameter, method=m.method, frequency=m.frequency, target=m.target,
                )
                for m in template.monitoring
            ],
            follow_up=FollowUpPlan(
                interval=_for_severity(template.follow_up_interval, severity),
                assessment=list(template.assessment),
                red_flags=list(template.red_flags),
            ),
            complications=[
                ComplicationManagement(
                    complication=c.complication,
                    recognition=list(c.recognition),
                    management=c.management,
                    escalation=c.escalation,
                )
                for c in template.complications
            ],
            patient_education=list(template.education),
            is_generic=generic,
        )

    @staticmethod
    def _treatments(interventions: Sequence[Intervention], severity: ProtocolSeverity) -> list[Treatment]:
        treatments: list[Treatment] = []
        for item in interventions:
            if severity not in item.severities:
                continue
            dosing = _for_severity(item.dosing, severity)
            treatments.append(Treatment(
                intervention=item.name,
                type=item.type,
                dosage=dosing.dosage,
                duration=dosing.duration,
                instructions=item.instructions,
                contraindications=list(item.contraindications),
                evidence_level=item.evidence,
                essential_list=is_essential(item.name),
                side_effects=list(item.side_effects),
            ))
        return treatments
