"""Pydantic data models and closed enums for scribe-engine.

Every entity here is a transient computation output: created on each
engine call, owned by the caller, and persisted (or not) by the caller's
session/patient store.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field

# ── Enums ────────────────────────────────────────────────────────────


class SectionType(str, Enum):
    """Template section types recognised by the section classifier."""

    TEXT = "text"
    SYMPTOMS = "symptoms"
    DIAGNOSIS = "diagnosis"
    TREATMENT = "treatment"
    NOTES = "notes"
    VITALS = "vitals"
    HISTORY = "history"
    EXAMINATION = "examination"
    PLAN = "plan"


class Likelihood(str, Enum):
    VERY_HIGH = "very-high"
    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"
    VERY_LOW = "very-low"


class EmergencyLevel(str, Enum):
    """Urgency of a diagnosis or test, most severe first."""

    IMMEDIATE = "immediate"
    URGENT = "urgent"
    SOON = "soon"
    ROUTINE = "routine"

    @property
    def severity(self) -> int:
        """Numeric rank: higher is more severe."""
        return _EMERGENCY_SEVERITY[self]


_EMERGENCY_SEVERITY = {
    EmergencyLevel.IMMEDIATE: 3,
    EmergencyLevel.URGENT: 2,
    EmergencyLevel.SOON: 1,
    EmergencyLevel.ROUTINE: 0,
}


class ClinicalPriority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RiskSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _RISK_RANK[self]


_RISK_RANK = {
    RiskSeverity.LOW: 0,
    RiskSeverity.MEDIUM: 1,
    RiskSeverity.HIGH: 2,
    RiskSeverity.CRITICAL: 3,
}


class RiskCategory(str, Enum):
    CARDIOVASCULAR = "cardiovascular"
    METABOLIC = "metabolic"
    INFECTIOUS = "infectious"
    RESPIRATORY = "respiratory"
    NEUROLOGICAL = "neurological"
    MEDICATION = "medication"
    OTHER = "other"


class TaskType(str, Enum):
    FOLLOW_UP = "follow-up"
    LAB_TEST = "lab-test"
    REFERRAL = "referral"
    MEDICATION = "medication"
    LIFESTYLE = "lifestyle"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        return _TASK_PRIORITY_RANK[self]


_TASK_PRIORITY_RANK = {
    TaskPriority.LOW: 0,
    TaskPriority.MEDIUM: 1,
    TaskPriority.HIGH: 2,
    TaskPriority.URGENT: 3,
}


class ProtocolSeverity(str, Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


class CareSetting(str, Enum):
    OUTPATIENT = "outpatient"
    INPATIENT = "inpatient"
    ICU = "icu"


class EvidenceLevel(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"


class InvestigationType(str, Enum):
    LABORATORY = "laboratory"
    IMAGING = "imaging"
    PROCEDURE = "procedure"
    BEDSIDE = "bedside"


class InvestigationUrgency(str, Enum):
    STAT = "stat"
    URGENT = "urgent"
    ROUTINE = "routine"


class CostCategory(str, Enum):
    BASIC = "basic"
    MODERATE = "moderate"
    EXPENSIVE = "expensive"


class Availability(str, Enum):
    PRIMARY_CARE = "primary-care"
    DISTRICT_HOSPITAL = "district-hospital"
    TERTIARY_CARE = "tertiary-care"


class TreatmentType(str, Enum):
    MEDICATION = "medication"
    PROCEDURE = "procedure"
    LIFESTYLE = "lifestyle"
    SUPPORTIVE = "supportive"


class UrgencyLevel(str, Enum):
    ROUTINE = "routine"
    URGENT = "urgent"
    EMERGENCY = "emergency"


class AlertType(str, Enum):
    DRUG_CONDITION = "drug-condition"
    DRUG_DRUG = "drug-drug"
    DRUG_AGE = "drug-age"


class AlertSeverity(str, Enum):
    CAUTION = "caution"
    WARNING = "warning"
    CONTRAINDICATED = "contraindicated"


class ComplianceStatus(str, Enum):
    COMPLIANT = "compliant"
    PARTIAL = "partial"
    NON_COMPLIANT = "non-compliant"


class SymptomSeverity(str, Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


# ── Templates and categorization ─────────────────────────────────────


class TemplateSection(BaseModel):
    """A note section defined by template configuration."""

    model_config = {"frozen": True}

    id: str
    title: str
    type: SectionType = SectionType.TEXT
    required: bool = False
    placeholder: str = ""
    order: int = 0
    keywords: list[str] = Field(default_factory=list)


class NoteTemplate(BaseModel):
    """A named collection of sections (consultation, follow-up, ...)."""

    id: str
    name: str
    category: str = "general"
    sections: list[TemplateSection] = Field(default_factory=list)


class Categorization(BaseModel):
    """A transcript fragment mapped onto a template section."""

    section_id: str
    confidence: float = Field(ge=0.0, le=1.0)
    suggested_content: str


class TemplateSuggestion(BaseModel):
    template_id: str
    confidence: float = Field(ge=0.0)
    reasoning: str = ""


# ── Patient context ──────────────────────────────────────────────────


class PatientProfile(BaseModel):
    """Structured patient context supplied by the caller's store."""

    id: str = ""
    age: Optional[int] = Field(default=None, ge=0, le=130)
    sex: Optional[Literal["male", "female", "other"]] = None
    date_of_birth: Optional[date] = None
    medical_history: list[str] = Field(default_factory=list)
    allergies: list[str] = Field(default_factory=list)
    medical_aid: Optional[str] = None

    def age_on(self, reference: date) -> Optional[int]:
        """Return the explicit age, or derive it from the date of birth."""
        if self.age is not None:
            return self.age
        if self.date_of_birth is None:
            return None
        dob = self.date_of_birth
        years = reference.year - dob.year
        if (reference.month, reference.day) < (dob.month, dob.day):
            years -= 1
        return max(years, 0)


class SessionRecord(BaseModel):
    """A previously recorded consultation for the same patient."""

    id: str
    title: str = ""
    content: str = ""
    diagnosis: list[str] = Field(default_factory=list)
    visit_date: Optional[datetime] = None


class MedicationDetails(BaseModel):
    name: str
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    confidence: float = Field(default=0.7, ge=0.0, le=1.0)


class SymptomAssessment(BaseModel):
    """A symptom mention graded from the words around it."""

    symptom: str
    severity: SymptomSeverity = SymptomSeverity.MODERATE
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)


# ── Differential diagnosis ───────────────────────────────────────────


class Investigation(BaseModel):
    test: str
    type: InvestigationType
    urgency: InvestigationUrgency
    cost_category: CostCategory
    availability: Availability
    expected_result: str = ""


class DifferentialDiagnosis(BaseModel):
    """One ranked candidate condition with its evidence."""

    condition: str
    icd10_code: str
    probability: float = Field(ge=0.0, le=1.0)
    likelihood: Likelihood
    emergency_level: EmergencyLevel
    supporting_features: list[str] = Field(default_factory=list)
    opposing_features: list[str] = Field(default_factory=list)
    required_investigations: list[Investigation] = Field(default_factory=list)
    key_questions: list[str] = Field(default_factory=list)
    specialty_referral: Optional[str] = None


class ClinicalReasoningResult(BaseModel):
    model_config = {"frozen": True}

    differential_diagnoses: list[DifferentialDiagnosis] = Field(default_factory=list)
    clinical_priority: ClinicalPriority = ClinicalPriority.LOW
    reasoning_steps: list[str] = Field(default_factory=list)
    uncertainty_factors: list[str] = Field(default_factory=list)
    next_steps: list[str] = Field(default_factory=list)


# ── Risk ─────────────────────────────────────────────────────────────


class RiskFactor(BaseModel):
    model_config = {"frozen": True}

    factor: str
    category: RiskCategory = RiskCategory.OTHER
    severity: RiskSeverity
    description: str = ""
    recommendations: list[str] = Field(default_factory=list)
    evidence: list[str] = Field(default_factory=list)


class ContraindicationAlert(BaseModel):
    type: AlertType
    severity: AlertSeverity
    medication: str
    conflict_with: str
    description: str
    alternatives: list[str] = Field(default_factory=list)


class UrgencyAssessment(BaseModel):
    level: UrgencyLevel
    reasoning: str
    required_actions: list[str] = Field(default_factory=list)


class GuidelineCompliance(BaseModel):
    guideline: str
    compliance: ComplianceStatus
    recommendations: list[str] = Field(default_factory=list)
    evidence: str = ""


class QualityMetrics(BaseModel):
    """Documentation quality scores, each in [0, 1]."""

    documentation_completeness: float = Field(default=0.0, ge=0.0, le=1.0)
    clinical_reasoning_score: float = Field(default=0.0, ge=0.0, le=1.0)
    evidence_based_score: float = Field(default=0.0, ge=0.0, le=1.0)


# ── Tasks ────────────────────────────────────────────────────────────


class TaskSuggestion(BaseModel):
    """A follow-up task suggested from transcript content.

    ``is_completed`` is the only field callers are expected to change.
    """

    id: str
    type: TaskType
    description: str
    priority: TaskPriority
    due_date: datetime
    is_completed: bool = False
    created_at: datetime
    session_id: Optional[str] = None
    session_title: Optional[str] = None


class TranscriptionAnalysis(BaseModel):
    suggested_tasks: list[TaskSuggestion] = Field(default_factory=list)
    extracted_conditions: list[str] = Field(default_factory=list)
    urgency: TaskPriority = TaskPriority.LOW


# ── Treatment protocols ──────────────────────────────────────────────


class Treatment(BaseModel):
    intervention: str
    type: TreatmentType
    dosage: Optional[str] = None
    duration: str
    instructions: str = ""
    contraindications: list[str] = Field(default_factory=list)
    evidence_level: EvidenceLevel
    essential_list: bool = False
    side_effects: list[str] = Field(default_factory=list)


class MonitoringParameter(BaseModel):
    parameter: str
    method: str
    frequency: str
    target: str


class FollowUpPlan(BaseModel):
    interval: str
    assessment: list[str] = Field(default_factory=list)
    red_flags: list[str] = Field(default_factory=list)


class ComplicationManagement(BaseModel):
    complication: str
    recognition: list[str] = Field(default_factory=list)
    management: str
    escalation: str


class TreatmentProtocol(BaseModel):
    condition: str
    severity: ProtocolSeverity
    setting: CareSetting
    primary_treatment: list[Treatment] = Field(default_factory=list)
    alternative_treatment: list[Treatment] = Field(default_factory=list)
    monitoring: list[MonitoringParameter] = Field(default_factory=list)
    follow_up: FollowUpPlan
    complications: list[ComplicationManagement] = Field(default_factory=list)
    patient_education: list[str] = Field(default_factory=list)
    is_generic: bool = False
