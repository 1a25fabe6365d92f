"""Facade wiring the five engine components from one settings object.

Usage::

    from scribe_engine import ClinicalEngine, EngineSettings

    engine = ClinicalEngine(EngineSettings())
    cats = engine.classify(transcript, DEFAULT_TEMPLATE.sections)
    result = engine.reason("cough", ["dry cough", "wheeze"], patient, [])

The module-level functions build a default-configured engine per call so
they can be used without any setup.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence, Union

from scribe_engine.classification.classifier import SectionClassifier
from scribe_engine.classification.enhanced import EnhancedSectionClassifier, ICategorizationClient
from scribe_engine.classification.entities import assess_symptom_severity, extract_clinical_terms
from scribe_engine.core.config import EngineSettings
from scribe_engine.core.types import Clock, utc_now
from scribe_engine.diagnosis.engine import DifferentialDiagnosisEngine
from scribe_engine.models import (
    Categorization,
    ClinicalReasoningResult,
    ContraindicationAlert,
    GuidelineCompliance,
    NoteTemplate,
    PatientProfile,
    ProtocolSeverity,
    QualityMetrics,
    RiskFactor,
    SessionRecord,
    SymptomAssessment,
    TaskSuggestion,
    TemplateSection,
    TemplateSuggestion,
    TranscriptionAnalysis,
    TreatmentProtocol,
    UrgencyAssessment,
)
from scribe_engine.risk.analyzer import MedicationInput, RiskFactorAnalyzer
from scribe_engine.risk.backends.protocol import IRiskRulesBackend
from scribe_engine.tasks.generator import TaskSuggestionGenerator
from scribe_engine.treatment.generator import TreatmentProtocolGenerator

log = logging.getLogger(__name__)


class ClinicalEngine:
    """All five components, configured from one ``EngineSettings``."""

    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        *,
        clock: Clock = utc_now,
        enhancement_client: Optional[ICategorizationClient] = None,
        rules_backend: Optional[IRiskRulesBackend] = None,
    ) -> None:
        self._settings = settings or EngineSettings()
        self._classifier = SectionClassifier(self._settings.classifier)
        self._enhanced = EnhancedSectionClassifier(
            client=enhancement_client,
            config=self._settings.enhancement,
            classifier=self._classifier,
        )
        self._diagnosis = DifferentialDiagnosisEngine(self._settings.diagnosis, clock=clock)
        self._risk = RiskFactorAnalyzer(self._settings.risk, backend=rules_backend, clock=clock)
        self._tasks = TaskSuggestionGenerator(self._settings.tasks, clock=clock)
        self._treatment = TreatmentProtocolGenerator()

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    # ── Classification ───────────────────────────────────────────────

    def classify(self, transcript: str, sections: Sequence[TemplateSection]) -> list[Categorization]:
        return self._classifier.classify(transcript, sections)

    async def classify_enhanced(
        self,
        transcript: str,
        sections: Sequence[TemplateSection],
    ) -> list[Categorization]:
        """Classify through the enhancement client, falling back to the rules."""
        return await self._enhanced.classify(transcript, sections)

    def suggest_template(
        self,
        transcript: str,
        templates: Sequence[NoteTemplate],
    ) -> Optional[TemplateSuggestion]:
        return self._classifier.suggest_template(transcript, templates)

    # ── Diagnosis ────────────────────────────────────────────────────

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
        return self._diagnosis.reason(
            complaint, symptoms, patient, findings, prior_conditions,
            ordered_investigations=ordered_investigations,
        )

    def reason_from_transcript(
        self,
        transcript: str,
        patient: Optional[PatientProfile] = None,
        prior_conditions: Sequence[str] = (),
        *,
        complaint: str = "",
    ) -> ClinicalReasoningResult:
        """Derive symptoms and findings from free text, then reason over them."""
        symptoms, findings = extract_clinical_terms(transcript)
        log.debug("Extracted %d symptom(s) and %d finding(s)", len(symptoms), len(findings))
        return self._diagnosis.reason(complaint, symptoms, patient, findings, prior_conditions)

    def assess_symptom_severity(self, transcript: str) -> list[SymptomAssessment]:
        return assess_symptom_severity(transcript)

    # ── Risk ─────────────────────────────────────────────────────────

    def analyze_risk(
        self,
        content: str,
        patient: Optional[PatientProfile] = None,
        sessions: Sequence[SessionRecord] = (),
        medications: Sequence[MedicationInput] = (),
    ) -> list[RiskFactor]:
        return self._risk.analyze_risk(content, patient, sessions, medications)

    def check_contraindications(
        self,
        medications: Sequence[MedicationInput],
        patient: Optional[PatientProfile] = None,
        sessions: Sequence[SessionRecord] = (),
    ) -> list[ContraindicationAlert]:
        return self._risk.check_contraindications(medications, patient, sessions)

    def assess_urgency(
        self,
        content: str,
        risk_factors: Sequence[RiskFactor] = (),
    ) -> UrgencyAssessment:
        return self._risk.assess_urgency(content, risk_factors)

    def assess_guideline_compliance(self, content: str) -> list[GuidelineCompliance]:
        return self._risk.assess_guideline_compliance(content)

    def quality_metrics(self, content: str) -> QualityMetrics:
        return self._risk.quality_metrics(content)

    # ── Tasks ────────────────────────────────────────────────────────

    def analyze_transcription(self, content: str) -> list[TaskSuggestion]:
        return self._tasks.analyze_transcription(content)

    def analyze(self, content: str) -> TranscriptionAnalysis:
        return self._tasks.analyze(content)

    def regional_suggestions(self, content: str, region: Optional[str] = None) -> list[TaskSuggestion]:
        return self._tasks.regional_suggestions(content, region)

    def suggestions_for_sessions(self, sessions: Sequence[SessionRecord]) -> list[TaskSuggestion]:
        return self._tasks.suggestions_for_sessions(sessions)

    # ── Treatment ────────────────────────────────────────────────────

    def protocol(
        self,
        condition: str,
        severity: Union[str, ProtocolSeverity, None] = ProtocolSeverity.MODERATE,
    ) -> TreatmentProtocol:
        return self._treatment.protocol(condition, severity)


# ── Module-level surface ─────────────────────────────────────────────


def classify(
    transcript: str,
    sections: Sequence[TemplateSection],
    settings: Optional[EngineSettings] = None,
) -> list[Categorization]:
    return ClinicalEngine(settings).classify(transcript, sections)


def reason(
    complaint: str,
    symptoms: Sequence[str],
    patient: Optional[PatientProfile],
    findings: Sequence[str],
    prior_conditions: Sequence[str] = (),
    settings: Optional[EngineSettings] = None,
) -> ClinicalReasoningResult:
    return ClinicalEngine(settings).reason(complaint, symptoms, patient, findings, prior_conditions)


def reason_from_transcript(
    transcript: str,
    patient: Optional[PatientProfile] = None,
    prior_conditions: Sequence[str] = (),
    settings: Optional[EngineSettings] = None,
) -> ClinicalReasoningResult:
    return ClinicalEngine(settings).reason_from_transcript(transcript, patient, prior_conditions)


def analyze_risk(
    content: str,
    patient: Optional[PatientProfile] = None,
    sessions: Sequence[SessionRecord] = (),
    medications: Sequence[MedicationInput] = (),
    settings: Optional[EngineSettings] = None,
) -> list[RiskFactor]:
    return ClinicalEngine(settings).analyze_risk(content, patient, sessions, medications)


def assess_guideline_compliance(content: str, settings: Optional[EngineSettings] = None) -> list[GuidelineCompliance]:
    return ClinicalEngine(settings).assess_guideline_compliance(content)


def analyze_transcription(content: str, settings: Optional[EngineSettings] = None) -> list[TaskSuggestion]:
    return ClinicalEngine(settings).analyze_transcription(content)


def regional_suggestions(
    content: str,
    region: Optional[str] = None,
    settings: Optional[EngineSettings] = None,
) -> list[TaskSuggestion]:
    return ClinicalEngine(settings).regional_suggestions(content, region)


def protocol(
    condition: str,
    severity: Union[str, ProtocolSeverity, None] = ProtocolSeverity.MODERATE,
) -> TreatmentProtocol:
    return TreatmentProtocolGenerator().protocol(condition, severity)
