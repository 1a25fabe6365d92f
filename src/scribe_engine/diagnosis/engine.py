"""Differential diagnosis: weighted feature scoring over condition profiles.

For every profile the engine sums the weights of supporting features found
in the evidence, subtracts the weights of opposing features, adds the
demographic prior, and normalises by the profile's total supporting
weight::

    probability = clamp01((supporting - opposing + prior) / max_support)

A profile only becomes a candidate when at least one supporting feature
matched.  Candidates below ``DiagnosisConfig.min_score`` are dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from scribe_engine.core.config import DiagnosisConfig
from scribe_engine.core.negation import is_negated
from scribe_engine.core.types import Clock, utc_now
from scribe_engine.diagnosis.profiles import CONDITION_PROFILES, ConditionProfile, Feature
from scribe_engine.models import (
    ClinicalPriority,
    ClinicalReasoningResult,
    DifferentialDiagnosis,
    EmergencyLevel,
    Likelihood,
    PatientProfile,
)

log = logging.getLogger(__name__)

# (lower bound, band), checked top-down
LIKELIHOOD_BANDS: tuple[tuple[float, Likelihood], ...] = (
    (0.8, Likelihood.VERY_HIGH),
    (0.6, Likelihood.HIGH),
    (0.4, Likelihood.MODERATE),
    (0.2, Likelihood.LOW),
)

PRIORITY_BY_EMERGENCY: dict[EmergencyLevel, ClinicalPriority] = {
    EmergencyLevel.IMMEDIATE: ClinicalPriority.CRITICAL,
    EmergencyLevel.URGENT: ClinicalPriority.HIGH,
    EmergencyLevel.SOON: ClinicalPriority.MEDIUM,
    EmergencyLevel.ROUTINE: ClinicalPriority.LOW,
}


def likelihood_for(probability: float) -> Likelihood:
    """Map a probability onto its fixed likelihood band."""
    for lower, band in LIKELIHOOD_BANDS:
        if probability >= lower:
            return band
    return Likelihood.VERY_LOW


def _matching_item(feature: Feature, evidence: Sequence[str]) -> Optional[str]:
    for item in evidence:
        for match in feature.finditer(item):
            if not is_negated(item, match.start()):
                return item
    return None


@dataclass
class _Scored:
    profile: ConditionProfile
    probability: float
    supporting: list[tuple[Feature, str]] = field(default_factory=list)
    opposing: list[tuple[Feature, str]] = field(default_factory=list)
    prior: float = 0.0


class DifferentialDiagnosisEngine:
    """Scores and ranks candidate conditions for a presentation.

    Stateless apart from the profile registry it was built with; safe to
    share between threads.
    """

    def __init__(
        self,
        config: Optional[DiagnosisConfig] = None,
        profiles: Sequence[ConditionProfile] = CONDITION_PROFILES,
        clock: Clock = utc_now,
    ) -> None:
        self._config = config or DiagnosisConfig()
        self._profiles = tuple(profiles)
        self._clock = clock

    @property
    def profiles(self) -> tuple[ConditionProfile, ...]:
        return self._profiles

    def reason(
        self,
        complaint: str,
        symptoms: Sequence[str],
        patient: Optional[PatientProfile],
        findings: Sequence[str],
        prior_conditions: Sequence[str] = (),
        *,
        ordered_investigations: Iterable[str] = (),
    ) -> ClinicalReasoningResult:
        presenting = [t.strip() for t in (complaint, *symptoms, *findings) if t and t.strip()]
        if not presenting:
            log.debug("No complaint, symptoms or findings; returning empty reasoning")
            return ClinicalReasoningResult()

        history = [t.strip() for t in prior_conditions if t and t.strip()]
        if patient is not None:
            history.extend(t.strip() for t in patient.medical_history if t and t.strip())
        evidence = presenting + history

        age = patient.age_on(self._clock().date()) if patient is not None else None
        sex = patient.sex if patient is not None else None

        scored: list[_Scored] = []
        for profile in self._profiles:
            result = self._score(profile, evidence, age, sex)
            if result is None:
                continue
            if result.probability < self._config.min_score:
                log.debug(
                    "Dropping %s (score %.3f < %.3f)",
                    profile.name, result.probability, self._config.min_score,
                )
                continue
            scored.append(result)

        scored.sort(
            key=lambda s: (
                -s.probability,
                -s.profile.emergency_level.severity,
                s.profile.name,
            )
        )
        scored = scored[: self._config.max_diagnoses]

        diagnoses = [self._to_diagnosis(s) for s in scored]
        priority = self._priority(diagnoses)

        log.debug(
            "Ranked %d candidate(s) from %d evidence item(s), priority=%s",
            len(diagnoses), len(evidence), priority.value,
        )

        ordered = {t.strip().lower() for t in ordered_investigations}
        return ClinicalReasoningResult(
            differential_diagnoses=diagnoses,
            clinical_priority=priority,
            reasoning_steps=self._reasoning_steps(scored, age, sex),
            uncertainty_factors=self._uncertainty_factors(scored),
            next_steps=self._next_steps(scored, ordered),
        )

    # ── Scoring ──────────────────────────────────────────────────────

    def _score(
        self,
        profile: ConditionProfile,
        evidence: Sequence[str],
        age: Optional[int],
        sex: Optional[str],
    ) -> Optional[_Scored]:
        supporting = [
            (f, item) for f in profile.supporting
            if (item := _matching_item(f, evidence)) is not None
        ]
        if not supporting:
            return None
        opposing = [
            (f, item) for f in profile.opposing
            if (item := _matching_item(f, evidence)) is not None
        ]
        prior = profile.prior.adjustment(age, sex)

        total = profile.max_support
        raw = sum(f.weight for f, _ in supporting) - sum(f.weight for f, _ in opposing) + prior
        probability = min(max(raw / total, 0.0), 1.0) if total > 0 else 0.0

        return _Scored(
            profile=profile,
            probability=round(probability, 4),
            supporting=supporting,
            opposing=opposing,
            prior=prior,
        )

    def _to_diagnosis(self, s: _Scored) -> DifferentialDiagnosis:
        p = s.profile
        return DifferentialDiagnosis(
            condition=p.name,
            icd10_code=p.icd10_code,
            probability=s.probability,
            likelihood=likelihood_for(s.probability),
            emergency_level=p.emergency_level,
            supporting_features=[f.label for f, _ in s.supporting],
            opposing_features=[f.label for f, _ in s.opposing],
            required_investigations=list(p.investigations),
            key_questions=list(p.key_questions),
            specialty_referral=p.specialty_referral,
        )

    def _priority(self, diagnoses: Sequence[DifferentialDiagnosis]) -> ClinicalPriority:
        top = diagnoses[: self._config.top_n_for_priority]
        if not top:
            return ClinicalPriority.LOW
        worst = max(top, key=lambda d: d.emergency_level.severity)
        return PRIORITY_BY_EMERGENCY[worst.emergency_level]

    # ── Explanations ─────────────────────────────────────────────────

    @staticmethod
    def _reasoning_steps(
        scored: Sequence[_Scored],
        age: Optional[int],
        sex: Optional[str],
    ) -> list[str]:
        steps: list[str] = []
        for s in scored:
            name = s.profile.name
            weight = sum(f.weight for f, _ in s.supporting)
            labels = ", ".join(f.label for f, _ in s.supporting)
            steps.append(f"{name}: supported by {labels} (+{weight:g})")
            if s.opposing:
                weight = sum(f.weight for f, _ in s.opposing)
                labels = ", ".join(f.label for f, _ in s.opposing)
                steps.append(f"{name}: argued against by {labels} (-{weight:g})")
            if s.prior:
                who = ", ".join(
                    part for part in (f"age {age}" if age is not None else "", sex or "") if part
                )
                steps.append(f"{name}: demographic prior {s.prior:+g} ({who})")
        return steps

    def _uncertainty_factors(self, scored: Sequence[_Scored]) -> list[str]:
        factors: list[str] = []
        if not scored:
            return factors

        supports: dict[str, list[str]] = {}
        opposes: dict[str, list[str]] = {}
        for s in scored:
            for _, item in s.supporting:
                supports.setdefault(item, []).append(s.profile.name)
            for _, item in s.opposing:
                opposes.setdefault(item, []).append(s.profile.name)
        for item, against in opposes.items():
            backers = [n for n in supports.get(item, []) if n not in against]
            if backers:
                factors.append(
                    f"'{item}' supports {', '.join(backers)} but argues against {', '.join(against)}"
                )

        top = scored[0]
        matched = {f.label for f, _ in top.supporting}
        for label in top.profile.key_discriminators:
            if label not in matched:
                factors.append(f"Key discriminator for {top.profile.name} not documented: {label}")

        if len(scored) > 1:
            margin = top.probability - scored[1].probability
            if margin <= self._config.close_rank_margin:
                factors.append(
                    f"{top.profile.name} and {scored[1].profile.name} are closely ranked "
                    f"({top.probability:.2f} vs {scored[1].probability:.2f})"
                )
        return factors

    @staticmethod
    def _next_steps(scored: Sequence[_Scored], ordered: set[str]) -> list[str]:
        if not scored:
            return []
        top = scored[0].profile
        steps = list(top.key_questions)
        for inv in top.investigations:
            if inv.test.lower() not in ordered:
                steps.append(f"Obtain {inv.test} to evaluate {top.name}")
        if top.specialty_referral:
            steps.append(f"Consider {top.specialty_referral} referral")
        return steps
