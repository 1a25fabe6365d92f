"""Shared fixtures for scribe-engine tests."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from scribe_engine.core.types import Clock
from scribe_engine.models import PatientProfile, SessionRecord

FIXED_NOW = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock() -> Clock:
    """Clock pinned to 2025-03-01 09:00 UTC."""
    return lambda: FIXED_NOW


@pytest.fixture
def young_woman() -> PatientProfile:
    """34 years old on the fixed clock date (born 1990-06-15)."""
    return PatientProfile(id="p-001", sex="female", date_of_birth=date(1990, 6, 15))


@pytest.fixture
def older_man() -> PatientProfile:
    return PatientProfile(
        id="p-002",
        age=72,
        sex="male",
        medical_history=["Hypertension", "Type 2 diabetes", "Chronic kidney disease"],
    )


@pytest.fixture
def cough_transcript() -> str:
    return (
        "Patient complains of a dry cough for three weeks, worse at night. "
        "No fever and no weight loss. "
        "On examination the chest is clear and she is afebrile. "
        "Blood pressure 118/76 mmHg, pulse 72 bpm. "
        "Plan to review in 2 weeks if symptoms persist."
    )


@pytest.fixture
def prior_sessions() -> list[SessionRecord]:
    return [
        SessionRecord(
            id="s-100",
            title="Annual review",
            content="Known with hypertension. Started enalapril 10 mg once daily.",
            diagnosis=["Essential hypertension"],
        ),
        SessionRecord(
            id="s-101",
            title="Diabetes follow-up",
            content="HbA1c 8.1%. Continue metformin 500 mg twice daily.",
            diagnosis=["Type 2 diabetes mellitus"],
        ),
    ]
