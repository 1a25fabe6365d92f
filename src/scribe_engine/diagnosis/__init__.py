"""Differential diagnosis engine and its condition profile registry."""

from __future__ import annotations

from scribe_engine.diagnosis.engine import (
    LIKELIHOOD_BANDS,
    PRIORITY_BY_EMERGENCY,
    DifferentialDiagnosisEngine,
    likelihood_for,
)
from scribe_engine.diagnosis.profiles import (
    CONDITION_PROFILES,
    AgeBand,
    ConditionProfile,
    DemographicPrior,
    Feature,
    find_profile,
)

__all__ = [
    "LIKELIHOOD_BANDS",
    "PRIORITY_BY_EMERGENCY",
    "DifferentialDiagnosisEngine",
    "likelihood_for",
    "CONDITION_PROFILES",
    "AgeBand",
    "ConditionProfile",
    "DemographicPrior",
    "Feature",
    "find_profile",
]
