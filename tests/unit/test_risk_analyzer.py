"""Tests for risk factor analysis, contraindications and urgency grading."""

from __future__ import annotations

import pytest

from scribe_engine.core.config import RiskConfig
from scribe_engine.core.types import Clock
from scribe_engine.models import (
    AlertSeverity,
    AlertType,
    ComplianceStatus,
    MedicationDetails,
    PatientProfile,
    QualityMetrics,
    RiskCategory,
    RiskFactor,
    RiskSeverity,
    SessionRecord,
    UrgencyLevel,
)
from scribe_engine.risk.analyzer import RiskFactorAnalyzer
from scribe_engine.risk.backends.memory_backend import MemoryRiskRulesBackend
from scribe_engine.risk.rules import RISK_RULES

INTERACTING = ["warfarin", "aspirin", "enalapril", "spironolactone"]


@pytest.fixture()
def analyzer(fixed_clock: Clock) -> RiskFactorAnalyzer:
    return RiskFactorAnalyzer(RiskConfig(), clock=fixed_clock)


# ---------------------------------------------------------------------------
# analyze_risk
# ---------------------------------------------------------------------------


class TestAnalyzeRisk:
    def test_history_driven_factors(self, analyzer: RiskFactorAnalyzer, older_man: PatientProfile) -> None:
        factors = analyzer.analyze_risk("", older_man)

        assert [f.factor for f in factors] == [
            "Advanced age",
            "High cardiovascular risk",
            "Diabetes mellitus",
        ]
        assert all(f.severity is RiskSeverity.MEDIUM for f in factors)
        assert "Patient age: 72 years" in factors[0].evidence

    def test_interactions_merged_into_one_factor(self, analyzer: RiskFactorAnalyzer) -> None:
        factors = analyzer.analyze_risk("", medications=INTERACTING)

        assert len(factors) == 1
        factor = factors[0]
        assert factor.factor == "Drug Interaction"
        assert factor.category is RiskCategory.MEDICATION
        assert factor.severity is RiskSeverity.HIGH
        assert factor.description == "Anticoagulant combined with an antiplatelet or NSAID increases bleeding risk"
        assert factor.recommendations == [
            "Review the need for combined anticoagulant and antiplatelet therapy",
            "Monitor INR closely",
            "Counsel patient on signs of bleeding",
            "Check serum potassium and renal function",
            "Review diuretic choice",
        ]
        assert factor.evidence == [
            "Medications: warfarin with aspirin",
            "Medications: enalapril with spironolactone",
        ]

    def test_merge_keeps_highest_severity_regardless_of_order(self, fixed_clock: Clock) -> None:
        backend = MemoryRiskRulesBackend(reversed(RISK_RULES))
        analyzer = RiskFactorAnalyzer(RiskConfig(), backend=backend, clock=fixed_clock)

        factors = analyzer.analyze_risk("", medications=INTERACTING)

        assert len(factors) == 1
        assert factors[0].severity is RiskSeverity.HIGH
        assert factors[0].description.startswith("Anticoagulant")

    def test_sorted_most_severe_first(self, analyzer: RiskFactorAnalyzer, older_man: PatientProfile) -> None:
        factors = analyzer.analyze_risk("", older_man, medications=["warfarin", "ibuprofen"])

        assert factors[0].severity is RiskSeverity.HIGH
        ranks = [f.severity.rank for f in factors]
        assert ranks == sorted(ranks, reverse=True)
        names = {f.factor for f in factors}
        assert {"Drug Interaction", "Nephrotoxicity"} <= names

    def test_medications_extracted_from_content(self, analyzer: RiskFactorAnalyzer) -> None:
        factors = analyzer.analyze_risk("Takes warfarin 5 mg daily and aspirin 81 mg daily.")
        assert [f.factor for f in factors] == ["Drug Interaction"]

    def test_content_extraction_can_be_disabled(self, fixed_clock: Clock) -> None:
        analyzer = RiskFactorAnalyzer(RiskConfig(extract_medications_from_content=False), clock=fixed_clock)
        assert analyzer.analyze_risk("Takes warfarin 5 mg daily and aspirin 81 mg daily.") == []

    def test_medication_details_accepted(self, analyzer: RiskFactorAnalyzer) -> None:
        meds = [MedicationDetails(name="Warfarin", dosage="5 mg"), MedicationDetails(name="Ibuprofen")]
        factors = analyzer.analyze_risk("", medications=meds)
        assert factors[0].evidence == ["Medications: Warfarin with Ibuprofen"]

    def test_negated_history_ignored(self, analyzer: RiskFactorAnalyzer) -> None:
        assert analyzer.analyze_risk("No history of diabetes or hypertension.") == []

    def test_session_content_searched(self, analyzer: RiskFactorAnalyzer) -> None:
        sessions = [SessionRecord(id="s1", content="Completed TB treatment in 2019.")]
        factors = analyzer.analyze_risk("", sessions=sessions)

        assert [f.factor for f in factors] == ["Tuberculosis history/exposure"]
        assert factors[0].severity is RiskSeverity.HIGH

    def test_polypharmacy(self, analyzer: RiskFactorAnalyzer) -> None:
        meds = ["metformin", "amlodipine", "atorvastatin", "omeprazole", "paracetamol"]
        factors = analyzer.analyze_risk("", medications=meds)
        assert [f.factor for f in factors] == ["Polypharmacy"]
        assert factors[0].evidence == ["5 medications listed"]

    def test_empty_input(self, analyzer: RiskFactorAnalyzer) -> None:
        assert analyzer.analyze_risk("") == []


# ---------------------------------------------------------------------------
# check_contraindications
# ---------------------------------------------------------------------------


class TestContraindications:
    def test_age_and_condition_alerts(self, analyzer: RiskFactorAnalyzer, older_man: PatientProfile) -> None:
        alerts = analyzer.check_contraindications(["ibuprofen", "diazepam"], older_man)

        assert [(a.type, a.medication) for a in alerts] == [
            (AlertType.DRUG_AGE, "diazepam"),
            (AlertType.DRUG_CONDITION, "ibuprofen"),
        ]
        assert alerts[0].conflict_with == "Advanced age (>65 years)"
        assert alerts[1].conflict_with == "kidney disease"
        assert alerts[1].severity is AlertSeverity.CAUTION

    def test_drug_drug_interaction(self, analyzer: RiskFactorAnalyzer) -> None:
        alerts = analyzer.check_contraindications(["Warfarin 5mg", "Aspirin"])

        assert len(alerts) == 1
        assert alerts[0].type is AlertType.DRUG_DRUG
        assert alerts[0].severity is AlertSeverity.CONTRAINDICATED
        assert alerts[0].medication == "Warfarin 5mg"
        assert alerts[0].conflict_with == "Aspirin"

    def test_condition_from_sessions(self, analyzer: RiskFactorAnalyzer) -> None:
        sessions = [SessionRecord(id="s1", diagnosis=["Asthma"])]
        alerts = analyzer.check_contraindications(["atenolol"], sessions=sessions)

        assert len(alerts) == 1
        assert alerts[0].severity is AlertSeverity.CONTRAINDICATED
        assert "amlodipine" in alerts[0].alternatives

    def test_younger_patient_no_age_alert(self, analyzer: RiskFactorAnalyzer) -> None:
        patient = PatientProfile(age=65)
        assert analyzer.check_contraindications(["diazepam"], patient) == []

    def test_no_medications(self, analyzer: RiskFactorAnalyzer, older_man: PatientProfile) -> None:
        assert analyzer.check_contraindications([], older_man) == []


# ---------------------------------------------------------------------------
# assess_urgency
# ---------------------------------------------------------------------------


class TestAssessUrgency:
    def test_emergency_keyword(self, analyzer: RiskFactorAnalyzer) -> None:
        result = analyzer.assess_urgency("Patient presents with severe chest pain.")
        assert result.level is UrgencyLevel.EMERGENCY
        assert "Immediate medical attention required" in result.required_actions

    def test_critical_factor_is_emergency(self, analyzer: RiskFactorAnalyzer) -> None:
        factor = RiskFactor(factor="Sepsis", severity=RiskSeverity.CRITICAL)
        assert analyzer.assess_urgency("", [factor]).level is UrgencyLevel.EMERGENCY

    def test_urgent_keyword(self, analyzer: RiskFactorAnalyzer) -> None:
        assert analyzer.assess_urgency("Cough is worsening despite treatment.").level is UrgencyLevel.URGENT

    def test_two_high_factors_urgent(self, analyzer: RiskFactorAnalyzer) -> None:
        factors = [
            RiskFactor(factor="HIV infection", severity=RiskSeverity.HIGH),
            RiskFactor(factor="Nephrotoxicity", severity=RiskSeverity.HIGH),
        ]
        result = analyzer.assess_urgency("Routine review.", factors)
        assert result.level is UrgencyLevel.URGENT
        assert result.reasoning == "Urgent indicators: 0, high risk factors: 2"

    def test_single_high_factor_routine(self, analyzer: RiskFactorAnalyzer) -> None:
        factor = RiskFactor(factor="HIV infection", severity=RiskSeverity.HIGH)
        assert analyzer.assess_urgency("Routine review.", [factor]).level is UrgencyLevel.ROUTINE

    def test_negated_keyword_routine(self, analyzer: RiskFactorAnalyzer) -> None:
        result = analyzer.assess_urgency("No chest pain today.")
        assert result.level is UrgencyLevel.ROUTINE
        assert result.reasoning == "No urgent indicators identified"


# ---------------------------------------------------------------------------
# assess_guideline_compliance
# ---------------------------------------------------------------------------


class TestGuidelineCompliance:
    def test_compliant(self, analyzer: RiskFactorAnalyzer) -> None:
        results = analyzer.assess_guideline_compliance(
            "Known hypertension. BP 152/94 today. Advised low salt diet and exercise."
        )

        assert len(results) == 1
        result = results[0]
        assert result.guideline == "Hypertension Management (SEMDSA Guidelines)"
        assert result.compliance is ComplianceStatus.COMPLIANT
        assert result.evidence == "Lifestyle advice: Yes, BP reading documented: Yes"
        assert "Regular monitoring schedule" in result.recommendations

    def test_partial(self, analyzer: RiskFactorAnalyzer) -> None:
        results = analyzer.assess_guideline_compliance("Type 2 diabetes, HbA1c 8.1% last month.")

        assert [r.compliance for r in results] == [ComplianceStatus.PARTIAL]
        assert results[0].evidence == "HbA1c mentioned: Yes, Patient education: No"

    def test_non_compliant(self, analyzer: RiskFactorAnalyzer) -> None:
        results = analyzer.assess_guideline_compliance("High blood pressure noted.")
        assert [r.compliance for r in results] == [ComplianceStatus.NON_COMPLIANT]

    def test_both_guidelines_in_table_order(self, analyzer: RiskFactorAnalyzer) -> None:
        results = analyzer.assess_guideline_compliance(
            "Hypertension and diabetes. BP 140/90, HbA1c 7.2. "
            "Glucose monitoring discussed. Exercise advised."
        )

        assert [r.guideline for r in results] == [
            "Hypertension Management (SEMDSA Guidelines)",
            "Diabetes Management (SEMDSA Guidelines)",
        ]
        assert all(r.compliance is ComplianceStatus.COMPLIANT for r in results)

    @pytest.mark.parametrize("content", ["Sprained ankle.", "No history of diabetes.", ""])
    def test_no_applicable_guideline(self, analyzer: RiskFactorAnalyzer, content: str) -> None:
        assert analyzer.assess_guideline_compliance(content) == []


# ---------------------------------------------------------------------------
# quality_metrics
# ---------------------------------------------------------------------------


class TestQualityMetrics:
    def test_structured_note(self, analyzer: RiskFactorAnalyzer) -> None:
        metrics = analyzer.quality_metrics(
            "History: cough. Examination: clear chest. "
            "Assessment: likely viral because afebrile. Plan: fluids per guideline."
        )

        assert metrics.documentation_completeness == 1.0
        assert metrics.clinical_reasoning_score == pytest.approx(0.6667)
        assert metrics.evidence_based_score == 0.5

    def test_scores_saturate(self, analyzer: RiskFactorAnalyzer) -> None:
        metrics = analyzer.quality_metrics(
            "Likely asthma because of wheeze, therefore inhaler; differential includes COPD. "
            "Treated per protocol and current evidence."
        )
        assert metrics.clinical_reasoning_score == 1.0
        assert metrics.evidence_based_score == 1.0

    def test_sparse_note(self, analyzer: RiskFactorAnalyzer) -> None:
        metrics = analyzer.quality_metrics("Plan: rest.")
        assert metrics == QualityMetrics(documentation_completeness=0.25)

    @pytest.mark.parametrize("content", ["", "   "])
    def test_empty_note(self, analyzer: RiskFactorAnalyzer, content: str) -> None:
        assert analyzer.quality_metrics(content) == QualityMetrics()
