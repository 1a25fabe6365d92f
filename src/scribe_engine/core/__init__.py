"""Framework layer: configuration, logging, clock and sequencing helpers."""

from __future__ import annotations

from scribe_engine.core.config import (
    ClassifierConfig,
    DiagnosisConfig,
    EngineSettings,
    EnhancementConfig,
    ObservabilityConfig,
    RiskConfig,
    TaskConfig,
)
from scribe_engine.core.logging_config import setup_logging
from scribe_engine.core.negation import first_affirmed, is_negated
from scribe_engine.core.sequencing import LatestResultGate
from scribe_engine.core.types import Clock, utc_now

__all__ = [
    "ClassifierConfig",
    "DiagnosisConfig",
    "EngineSettings",
    "EnhancementConfig",
    "ObservabilityConfig",
    "RiskConfig",
    "TaskConfig",
    "setup_logging",
    "first_affirmed",
    "is_negated",
    "LatestResultGate",
    "Clock",
    "utc_now",
]
