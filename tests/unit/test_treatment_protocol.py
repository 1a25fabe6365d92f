"""Tests for treatment protocol lookup and assembly."""

from __future__ import annotations

import logging

import pytest

from scribe_engine.models import CareSetting, EvidenceLevel, ProtocolSeverity, TreatmentType
from scribe_engine.treatment.generator import TreatmentProtocolGenerator, parse_severity
from scribe_engine.treatment.templates import PROTOCOL_TEMPLATES, is_essential


@pytest.fixture()
def generator() -> TreatmentProtocolGenerator:
    return TreatmentProtocolGenerator()


class TestLookup:
    def test_exact_name(self, generator: TreatmentProtocolGenerator) -> None:
        template = generator.find_template("Community-acquired Pneumonia")
        assert template is not None
        assert template.condition == "Community-acquired Pneumonia"

    def test_icd10_code(self, generator: TreatmentProtocolGenerator) -> None:
        template = generator.find_template("j18.9")
        assert template is not None
        assert template.condition == "Community-acquired Pneumonia"

    def test_alias_inside_phrase(self, generator: TreatmentProtocolGenerator) -> None:
        template = generator.find_template("suspected pneumonia")
        assert template is not None
        assert template.condition == "Community-acquired Pneumonia"

    def test_longest_alias_wins(self, generator: TreatmentProtocolGenerator) -> None:
        template = generator.find_template("acute heart failure with fluid overload")
        assert template is not None
        assert template.condition == "Heart Failure"

    def test_partial_word_not_matched(self, generator: TreatmentProtocolGenerator) -> None:
        # "cap" must not match inside "capsulitis"
        assert generator.find_template("adhesive capsulitis") is None

    def test_unknown(self, generator: TreatmentProtocolGenerator) -> None:
        assert generator.find_template("Xyzzy syndrome") is None
        assert generator.find_template("") is None


class TestProtocol:
    def test_mild_pneumonia(self, generator: TreatmentProtocolGenerator) -> None:
        protocol = generator.protocol("Community-acquired Pneumonia", "mild")

        assert protocol.severity is ProtocolSeverity.MILD
        assert protocol.setting is CareSetting.OUTPATIENT
        assert [t.intervention for t in protocol.primary_treatment] == ["Amoxicillin", "Supportive care"]
        amoxicillin = protocol.primary_treatment[0]
        assert amoxicillin.dosage == "1g TDS orally"
        assert amoxicillin.duration == "5 days"
        assert amoxicillin.essential_list is True
        assert amoxicillin.evidence_level is EvidenceLevel.A
        assert protocol.primary_treatment[1].essential_list is False
        assert protocol.primary_treatment[1].type is TreatmentType.SUPPORTIVE
        assert protocol.is_generic is False

    def test_severe_pneumonia(self, generator: TreatmentProtocolGenerator) -> None:
        protocol = generator.protocol("J18.9", ProtocolSeverity.SEVERE)

        assert protocol.setting is CareSetting.INPATIENT
        assert [t.intervention for t in protocol.primary_treatment] == ["Ceftriaxone", "Supportive care"]

    def test_severity_gated_procedure(self, generator: TreatmentProtocolGenerator) -> None:
        severe = generator.protocol("STEMI", "severe")
        moderate = generator.protocol("STEMI", "moderate")

        assert severe.setting is CareSetting.ICU
        assert "Primary PCI" in [t.intervention for t in severe.primary_treatment]
        assert "Primary PCI" not in [t.intervention for t in moderate.primary_treatment]
        assert moderate.setting is CareSetting.INPATIENT

    def test_dosing_per_severity(self, generator: TreatmentProtocolGenerator) -> None:
        mild = generator.protocol("heart failure", "mild")
        furosemide = mild.primary_treatment[0]

        assert furosemide.intervention == "Furosemide"
        assert furosemide.dosage == "20-40mg orally daily"
        assert mild.setting is CareSetting.OUTPATIENT

    def test_follow_up_interval_falls_back_to_moderate(self, generator: TreatmentProtocolGenerator) -> None:
        assert generator.protocol("migraine", "severe").follow_up.interval == "3 months"

    def test_alternatives_and_monitoring(self, generator: TreatmentProtocolGenerator) -> None:
        protocol = generator.protocol("type 2 diabetes")

        assert protocol.condition == "Type 2 Diabetes Mellitus"
        assert [t.intervention for t in protocol.alternative_treatment] == ["Gliclazide"]
        assert protocol.monitoring
        assert protocol.patient_education
        assert protocol.follow_up.red_flags

    def test_generic_fallback(self, generator: TreatmentProtocolGenerator) -> None:
        protocol = generator.protocol("Xyzzy syndrome", "mild")

        assert protocol.is_generic is True
        assert protocol.condition == "Xyzzy syndrome"
        assert protocol.follow_up.interval == "1-2 weeks"
        assert "Paracetamol" in [t.intervention for t in protocol.primary_treatment]

    def test_generic_for_condition_without_template(self, generator: TreatmentProtocolGenerator) -> None:
        assert generator.protocol("Gastro-oesophageal Reflux Disease").is_generic is True

    def test_blank_condition(self, generator: TreatmentProtocolGenerator) -> None:
        protocol = generator.protocol("  ")
        assert protocol.condition == "Unspecified condition"
        assert protocol.is_generic is True

    def test_unknown_severity_defaults_to_moderate(
        self, generator: TreatmentProtocolGenerator, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="scribe_engine.treatment.generator"):
            protocol = generator.protocol("pneumonia", "catastrophic")

        assert protocol.severity is ProtocolSeverity.MODERATE
        assert "Unknown protocol severity" in caplog.text

    def test_side_effects_carried_onto_treatments(self, generator: TreatmentProtocolGenerator) -> None:
        result = generator.protocol("ACS", "moderate")

        aspirin = next(t for t in result.primary_treatment if t.intervention == "Aspirin")
        assert aspirin.side_effects == ["GI bleeding", "Tinnitus"]

    def test_complications_listed(self, generator: TreatmentProtocolGenerator) -> None:
        result = generator.protocol("Type 2 Diabetes Mellitus")

        assert [c.complication for c in result.complications] == [
            "Diabetic ketoacidosis",
            "Severe hypoglycaemia",
        ]
        dka = result.complications[0]
        assert "Ketones" in dka.recognition
        assert dka.management.startswith("IV fluids")
        assert dka.escalation

    def test_generic_protocol_has_no_complications(self, generator: TreatmentProtocolGenerator) -> None:
        assert generator.protocol("Xyzzy syndrome").complications == []

    def test_deterministic(self, generator: TreatmentProtocolGenerator) -> None:
        assert generator.protocol("asthma", "moderate") == generator.protocol("asthma", "moderate")


class TestHelpers:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("mild", ProtocolSeverity.MILD),
            (" SEVERE ", ProtocolSeverity.SEVERE),
            (ProtocolSeverity.MODERATE, ProtocolSeverity.MODERATE),
            (None, ProtocolSeverity.MODERATE),
        ],
    )
    def test_parse_severity(self, value: object, expected: ProtocolSeverity) -> None:
        assert parse_severity(value) is expected

    def test_is_essential_prefix(self) -> None:
        assert is_essential("Oral rehydration solution")
        assert is_essential("Insulin (basal)")
        assert not is_essential("Primary PCI")

    def test_templates_have_primary_and_follow_up(self) -> None:
        for template in PROTOCOL_TEMPLATES:
            assert template.primary
            assert template.follow_up_interval
