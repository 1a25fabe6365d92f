"""Risk factor analysis over consolidated patient content.

Rules come from an ``IRiskRulesBackend`` (the built-in tables by default)
plus an optional rules file.  Every rule whose triggers all hold yields a
risk factor; rules sharing a factor name are merged so each factor is
reported once with the highest severity any of its rules assigned.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

from scribe_engine.classification.entities import extract_medications
from scribe_engine.core.config import RiskConfig
from scribe_engine.core.negation import first_affirmed
from scribe_engine.core.types import Clock, utc_now
from scribe_engine.models import (
    AlertSeverity,
    AlertType,
    ComplianceStatus,
    ContraindicationAlert,
    GuidelineCompliance,
    MedicationDetails,
    PatientProfile,
    QualityMetrics,
    RiskFactor,
    RiskSeverity,
    SessionRecord,
    UrgencyAssessment,
    UrgencyLevel,
)
from scribe_engine.risk.backends.file_backend import FileRiskRulesBackend
from scribe_engine.risk.backends.memory_backend import MemoryRiskRulesBackend
from scribe_engine.risk.backends.protocol import IRiskRulesBackend
from scribe_engine.risk.rules import (
    CONDITION_CONTRAINDICATIONS,
    DRUG_INTERACTIONS,
    ELDERLY_INAPPROPRIATE,
    EMERGENCY_KEYWORDS,
    EVIDENCE_CUES,
    EVIDENCE_SATURATION,
    GUIDELINE_RULES,
    NOTE_ELEMENTS,
    REASONING_CUES,
    REASONING_SATURATION,
    RISK_RULES,
    URGENT_KEYWORDS,
    GuidelineRule,
    RiskRule,
)

log = logging.getLogger(__name__)

MedicationInput = Union[str, MedicationDetails]


def _matches(pattern: str, name: str) -> bool:
    return re.search(pattern, name, re.IGNORECASE) is not None


def _cue_share(text: str, cues: Sequence[str], saturation: int) -> float:
    hits = sum(1 for cue in cues if re.search(rf"\b{re.escape(cue)}", text, re.IGNORECASE))
    return round(min(hits / saturation, 1.0), 4)


@dataclass
class _Merged:
    rule: RiskRule
    severity: RiskSeverity
    description: str
    recommendations: list[str] = field(default_factory=list)
    evidence: list[str] = field(default_factory=list)

    def absorb(self, rule: RiskRule, evidence: Sequence[str]) -> None:
        if rule.severity.rank > self.severity.rank:
            self.rule = rule
            self.severity = rule.severity
            self.description = rule.description
        for rec in rule.recommendations:
            if rec not in self.recommendations:
                self.recommendations.append(rec)
        for item in evidence:
            if item not in self.evidence:
                self.evidence.append(item)

    def to_factor(self) -> RiskFactor:
        return RiskFactor(
            factor=self.rule.factor,
            category=self.rule.category,
            severity=self.severity,
            description=self.description,
            recommendations=self.recommendations,
            evidence=self.evidence,
        )


class RiskFactorAnalyzer:
    """Applies risk rules to note content, history and medications."""

    def __init__(
        self,
        config: Optional[RiskConfig] = None,
        backend: Optional[IRiskRulesBackend] = None,
        clock: Clock = utc_now,
    ) -> None:
        self._config = config or RiskConfig()
        self._clock = clock
        sources: list[tuple[str, IRiskRulesBackend]] = [
            ("built-in rules" if backend is None else "rules backend",
             backend or MemoryRiskRulesBackend(RISK_RULES)),
        ]
        if self._config.rules_file is not None:
            sources.append((str(self._config.rules_file), FileRiskRulesBackend(self._config.rules_file)))

        rules: list[RiskRule] = []
        versions: list[int] = []
        for label, source in sources:
            loaded = source.list_rules(categories=self._config.categories)
            version = source.get_version()
            log.debug("Using %d risk rule(s) from %s, version %d", len(loaded), label, version)
            rules.extend(loaded)
            versions.append(version)
        self._rules: tuple[RiskRule, ...] = tuple(rules)
        self._versions: tuple[int, ...] = tuple(versions)

    @property
    def rules(self) -> tuple[RiskRule, ...]:
        return self._rules

    @property
    def ruleset_versions(self) -> tuple[int, ...]:
        """Version of each rule source; the backend first, then any rules file."""
        return self._versions

    # ── Risk factors ─────────────────────────────────────────────────

    def analyze_risk(
        self,
        content: str,
        patient: Optional[PatientProfile] = None,
        sessions: Sequence[SessionRecord] = (),
        medications: Sequence[MedicationInput] = (),
    ) -> list[RiskFactor]:
        """Return merged risk factors, most severe first."""
        corpus = self._corpus(content, patient, sessions)
        med_names = self._medication_names(medications, corpus)
        age = self._age(patient)

        merged: dict[str, _Merged] = {}
        for rule in self._rules:
            evidence = self._evaluate(rule, corpus, med_names, age)
            if evidence is None:
                continue
            log.debug("Risk rule %s fired", rule.rule_id)
            entry = merged.get(rule.factor)
            if entry is None:
                entry = _Merged(rule=rule, severity=rule.severity, description=rule.description)
                merged[rule.factor] = entry
            entry.absorb(rule, evidence)

        factors = [m.to_factor() for m in merged.values()]
        # sorted() is stable, so equal severities keep first-seen order
        return sorted(factors, key=lambda f: f.severity.rank, reverse=True)

    def _evaluate(
        self,
        rule: RiskRule,
        corpus: str,
        med_names: Sequence[str],
        age: Optional[int],
    ) -> Optional[list[str]]:
        """Return the evidence list when every trigger holds, else None."""
        if not rule.has_trigger:
            return None
        evidence: list[str] = []

        for pattern in rule.required_patterns:
            hit = first_affirmed(pattern, corpus)
            if hit is None:
                return None
            evidence.append(f"Documented: {hit}")

        if rule.condition_patterns:
            hits = [h for p in rule.condition_patterns if (h := first_affirmed(p, corpus))]
            if len(hits) < rule.min_condition_matches:
                return None
            evidence.append(f"Documented: {', '.join(hits)}")

        if rule.medication_patterns:
            primary = [n for n in med_names if any(_matches(p, n) for p in rule.medication_patterns)]
            if not primary:
                return None
            if rule.co_medication_patterns:
                pair = self._find_pair(primary, med_names, rule.co_medication_patterns)
                if pair is None:
                    return None
                evidence.append(f"Medications: {pair[0]} with {pair[1]}")
            else:
                evidence.append(f"Medication: {', '.join(primary)}")

        if rule.min_age is not None:
            if age is None or age < rule.min_age:
                return None
            evidence.append(f"Patient age: {age} years")

        if rule.min_medications is not None:
            if len(med_names) < rule.min_medications:
                return None
            evidence.append(f"{len(med_names)} medications listed")

        return evidence

    @staticmethod
    def _find_pair(
        primary: Sequence[str],
        med_names: Sequence[str],
        co_patterns: Sequence[str],
    ) -> Optional[tuple[str, str]]:
        for first in primary:
            for other in med_names:
                if other.lower() == first.lower():
                    continue
                if any(_matches(p, other) for p in co_patterns):
                    return first, other
        return None

    # ── Contraindications ────────────────────────────────────────────

    def check_contraindications(
        self,
        medications: Sequence[MedicationInput],
        patient: Optional[PatientProfile] = None,
        sessions: Sequence[SessionRecord] = (),
    ) -> list[ContraindicationAlert]:
        """Flag drug-age, drug-condition and drug-drug conflicts."""
        names = self._medication_names(medications, "")
        alerts: list[ContraindicationAlert] = []

        def find(needle: str) -> Optional[str]:
            return next((n for n in names if needle in n.lower()), None)

        age = self._age(patient)
        if age is not None and age > self._config.elderly_age:
            for entry in ELDERLY_INAPPROPRIATE:
                found = find(entry.medication)
                if found:
                    alerts.append(ContraindicationAlert(
                        type=AlertType.DRUG_AGE,
                        severity=AlertSeverity.CAUTION,
                        medication=found,
                        conflict_with=f"Advanced age (>{self._config.elderly_age} years)",
                        description=entry.reason,
                        alternatives=list(entry.alternatives),
                    ))

        history = self._corpus("", patient, sessions)
        for cc in CONDITION_CONTRAINDICATIONS:
            if first_affirmed(rf"\b{re.escape(cc.condition)}", history) is None:
                continue
            for med in cc.medications:
                found = find(med)
                if found:
                    alerts.append(ContraindicationAlert(
                        type=AlertType.DRUG_CONDITION,
                        severity=cc.severity,
                        medication=found,
                        conflict_with=cc.condition,
                        description=cc.description,
                        alternatives=list(cc.alternatives),
                    ))

        for interaction in DRUG_INTERACTIONS:
            first = find(interaction.drug)
            second = find(interaction.interacts_with)
            if first and second:
                alerts.append(ContraindicationAlert(
                    type=AlertType.DRUG_DRUG,
                    severity=interaction.severity,
                    medication=first,
                    conflict_with=second,
                    description=interaction.description,
                    alternatives=list(interaction.alternatives),
                ))

        return alerts

    # ── Urgency ──────────────────────────────────────────────────────

    @staticmethod
    def assess_urgency(
        content: str,
        risk_factors: Sequence[RiskFactor] = (),
    ) -> UrgencyAssessment:
        """Grade overall urgency from keywords and risk factor severities."""
        text = content or ""
        critical = sum(1 for rf in risk_factors if rf.severity is RiskSeverity.CRITICAL)
        high = sum(1 for rf in risk_factors if rf.severity is RiskSeverity.HIGH)

        emergency = [k for k in EMERGENCY_KEYWORDS if first_affirmed(rf"\b{re.escape(k)}", text)]
        if emergency or critical:
            return UrgencyAssessment(
                level=UrgencyLevel.EMERGENCY,
                reasoning=f"Emergency indicators: {len(emergency)}, critical risk factors: {critical}",
                required_actions=[
                    "Immediate medical attention required",
                    "Consider hospital admission",
                    "Vital signs monitoring",
                    "Senior clinician review",
                ],
            )

        urgent = [k for k in URGENT_KEYWORDS if first_affirmed(rf"\b{re.escape(k)}", text)]
        if urgent or high > 1:
            return UrgencyAssessment(
                level=UrgencyLevel.URGENT,
                reasoning=f"Urgent indicators: {len(urgent)}, high risk factors: {high}",
                required_actions=[
                    "Follow-up within 24-48 hours",
                    "Safety netting advice provided",
                    "Clear instructions for deterioration",
                ],
            )

        return UrgencyAssessment(
            level=UrgencyLevel.ROUTINE,
            reasoning="No urgent indicators identified",
            required_actions=[
                "Routine follow-up as scheduled",
                "Patient education provided",
                "Clear management plan documented",
            ],
        )

    # ── Guidelines and documentation quality ─────────────────────────

    def assess_guideline_compliance(self, content: str) -> list[GuidelineCompliance]:
        """Check the note against each guideline whose trigger it documents."""
        text = content or ""
        results: list[GuidelineCompliance] = []
        for rule in GUIDELINE_RULES:
            if not first_affirmed(rule.trigger, text):
                continue
            results.append(self._grade_guideline(rule, text))
        return results

    @staticmethod
    def _grade_guideline(rule: GuidelineRule, text: str) -> GuidelineCompliance:
        met = [first_affirmed(check.pattern, text) is not None for check in rule.checks]
        if all(met):
            status = ComplianceStatus.COMPLIANT
        elif any(met):
            status = ComplianceStatus.PARTIAL
        else:
            status = ComplianceStatus.NON_COMPLIANT
        log.debug("Guideline %r: %d/%d check(s) met", rule.guideline, sum(met), len(met))
        return GuidelineCompliance(
            guideline=rule.guideline,
            compliance=status,
            recommendations=list(rule.recommendations),
            evidence=", ".join(
                f"{check.label}: {'Yes' if ok else 'No'}" for check, ok in zip(rule.checks, met)
            ),
        )

    @staticmethod
    def quality_metrics(content: str) -> QualityMetrics:
        """Score documentation completeness, reasoning and evidence use."""
        text = content or ""
        if not text.strip():
            return QualityMetrics()
        present = sum(
            1 for element in NOTE_ELEMENTS if re.search(rf"\b{element}", text, re.IGNORECASE)
        )
        return QualityMetrics(
            documentation_completeness=round(present / len(NOTE_ELEMENTS), 4),
            clinical_reasoning_score=_cue_share(text, REASONING_CUES, REASONING_SATURATION),
            evidence_based_score=_cue_share(text, EVIDENCE_CUES, EVIDENCE_SATURATION),
        )

    # ── Helpers ──────────────────────────────────────────────────────

    @staticmethod
    def _corpus(
        content: str,
        patient: Optional[PatientProfile],
        sessions: Sequence[SessionRecord],
    ) -> str:
        parts: list[str] = [content or ""]
        for session in sessions:
            parts.append(session.content)
            parts.extend(session.diagnosis)
        if patient is not None:
            parts.extend(patient.medical_history)
        return "\n".join(p for p in parts if p)

    def _medication_names(self, medications: Sequence[MedicationInput], corpus: str) -> list[str]:
        names: list[str] = []
        seen: set[str] = set()

        def add(name: str) -> None:
            name = name.strip()
            if name and name.lower() not in seen:
                seen.add(name.lower())
                names.append(name)

        for med in medications:
            add(med.name if isinstance(med, MedicationDetails) else str(med))
        if corpus and self._config.extract_medications_from_content:
            for med in extract_medications(corpus):
                add(med.name)
        return names

    def _age(self, patient: Optional[PatientProfile]) -> Optional[int]:
        if patient is None:
            return None
        return patient.age_on(self._clock().date())
