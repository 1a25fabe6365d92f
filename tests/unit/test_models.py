"""Tests for data models and enum helpers."""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from scribe_engine.models import (
    Categorization,
    ClinicalReasoningResult,
    EmergencyLevel,
    PatientProfile,
    RiskFactor,
    RiskSeverity,
    TaskPriority,
    TaskType,
)


class TestEnumRanks:
    def test_emergency_severity_order(self) -> None:
        levels = sorted(EmergencyLevel, key=lambda e: e.severity, reverse=True)
        assert levels == [
            EmergencyLevel.IMMEDIATE,
            EmergencyLevel.URGENT,
            EmergencyLevel.SOON,
            EmergencyLevel.ROUTINE,
        ]

    def test_risk_severity_rank(self) -> None:
        assert RiskSeverity.CRITICAL.rank > RiskSeverity.HIGH.rank > RiskSeverity.MEDIUM.rank
        assert RiskSeverity.LOW.rank == 0

    def test_task_priority_rank(self) -> None:
        assert TaskPriority.URGENT.rank == 3
        assert TaskPriority.LOW.rank == 0

    def test_task_type_values(self) -> None:
        assert TaskType.LAB_TEST.value == "lab-test"
        assert TaskType("follow-up") is TaskType.FOLLOW_UP


class TestPatientProfile:
    def test_explicit_age_wins(self) -> None:
        patient = PatientProfile(age=50, date_of_birth=date(1990, 1, 1))
        assert patient.age_on(date(2025, 3, 1)) == 50

    def test_age_from_birthday_not_yet_reached(self) -> None:
        patient = PatientProfile(date_of_birth=date(1990, 6, 15))
        assert patient.age_on(date(2025, 3, 1)) == 34

    def test_age_on_birthday(self) -> None:
        patient = PatientProfile(date_of_birth=date(1990, 6, 15))
        assert patient.age_on(date(2025, 6, 15)) == 35

    def test_age_unknown(self) -> None:
        assert PatientProfile().age_on(date(2025, 3, 1)) is None

    def test_invalid_sex_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PatientProfile(sex="unknown")

    def test_negative_age_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PatientProfile(age=-1)


class TestOutputModels:
    def test_confidence_bounds(self) -> None:
        with pytest.raises(ValidationError):
            Categorization(section_id="symptoms_1", confidence=1.5, suggested_content="x")

    def test_reasoning_result_is_frozen(self) -> None:
        result = ClinicalReasoningResult()
        with pytest.raises(ValidationError):
            result.next_steps = ["x"]

    def test_risk_factor_is_frozen(self) -> None:
        factor = RiskFactor(factor="Advanced age", severity=RiskSeverity.MEDIUM)
        with pytest.raises(ValidationError):
            factor.severity = RiskSeverity.HIGH
