"""scribe-engine: rule-based clinical decision support for consultation transcripts.

Public API::

    from scribe_engine import (
        ClinicalEngine, EngineSettings,
        SectionClassifier, DifferentialDiagnosisEngine, RiskFactorAnalyzer,
        TaskSuggestionGenerator, TreatmentProtocolGenerator,
        classify, reason, analyze_risk, analyze_transcription,
        assess_guideline_compliance,
        regional_suggestions, protocol,
    )
"""

from __future__ import annotations

from scribe_engine.classification import (
    DEFAULT_TEMPLATE,
    EnhancedSectionClassifier,
    SectionClassifier,
    merge_into_note,
)
from scribe_engine.core.config import EngineSettings
from scribe_engine.core.logging_config import setup_logging
from scribe_engine.core.sequencing import LatestResultGate
from scribe_engine.diagnosis import DifferentialDiagnosisEngine
from scribe_engine.engine import (
    ClinicalEngine,
    analyze_risk,
    analyze_transcription,
    assess_guideline_compliance,
    classify,
    protocol,
    reason,
    reason_from_transcript,
    regional_suggestions,
)
from scribe_engine.exceptions import EnhancementError, RulesFileError, ScribeEngineError
from scribe_engine.risk import RiskFactorAnalyzer
from scribe_engine.tasks import TaskSuggestionGenerator, merge_task_suggestions
from scribe_engine.treatment import TreatmentProtocolGenerator

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_TEMPLATE",
    "EnhancedSectionClassifier",
    "SectionClassifier",
    "merge_into_note",
    "EngineSettings",
    "setup_logging",
    "LatestResultGate",
    "DifferentialDiagnosisEngine",
    "ClinicalEngine",
    "analyze_risk",
    "analyze_transcription",
    "assess_guideline_compliance",
    "classify",
    "protocol",
    "reason",
    "reason_from_transcript",
    "regional_suggestions",
    "EnhancementError",
    "RulesFileError",
    "ScribeEngineError",
    "RiskFactorAnalyzer",
    "TaskSuggestionGenerator",
    "merge_task_suggestions",
    "TreatmentProtocolGenerator",
]
