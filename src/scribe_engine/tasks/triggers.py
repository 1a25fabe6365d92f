"""Trigger tables for follow-up task suggestions.

A ``TaskTrigger`` fires when any of its keyword patterns appears in the
content without being negated, and contributes its task templates.
Clinical groups also name the condition group they indicate, which is
reported by ``TaskSuggestionGenerator.analyze``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from scribe_engine.models import TaskPriority, TaskType


@dataclass(frozen=True)
class TaskTemplate:
    type: TaskType
    description: str
    priority: TaskPriority


@dataclass(frozen=True)
class TaskTrigger:
    name: str
    patterns: tuple[str, ...]
    tasks: tuple[TaskTemplate, ...]
    condition: Optional[str] = None


def _t(type_: TaskType, description: str, priority: TaskPriority) -> TaskTemplate:
    return TaskTemplate(type=type_, description=description, priority=priority)


_FOLLOW_UP = TaskType.FOLLOW_UP
_LAB = TaskType.LAB_TEST
_REFERRAL = TaskType.REFERRAL
_MEDICATION = TaskType.MEDICATION
_LIFESTYLE = TaskType.LIFESTYLE
_LOW = TaskPriority.LOW
_MEDIUM = TaskPriority.MEDIUM
_HIGH = TaskPriority.HIGH
_URGENT = TaskPriority.URGENT


URGENT_TRIGGER = TaskTrigger(
    name="urgent",
    patterns=(
        r"\bchest pain", r"\bheart attack", r"\bstroke\b", r"\bseizure", r"\bunconscious",
        r"\bemergency", r"\bsevere pain", r"\bbleeding", r"\bdifficulty breathing",
        r"\ballergic reaction", r"\banaphyla",
    ),
    tasks=(_t(_FOLLOW_UP, "Urgent follow-up required within 24 hours", _URGENT),),
)

CLINICAL_TRIGGERS: tuple[TaskTrigger, ...] = (
    TaskTrigger(
        name="cardiology",
        condition="cardiology",
        patterns=(
            r"\bheart\b", r"\bcardiac", r"\bchest pain", r"\bpalpitations", r"\barrhythmia",
            r"\bhypertension", r"\bblood pressure",
        ),
        tasks=(
            _t(_LAB, "ECG (Electrocardiogram)", _MEDIUM),
            _t(_LAB, "Cardiac enzymes blood test", _MEDIUM),
        ),
    ),
    TaskTrigger(
        name="diabetes",
        condition="diabetes",
        patterns=(r"\bdiabet", r"\bblood sugar", r"\bglucose", r"\binsulin", r"\bhba1c"),
        tasks=(
            _t(_LAB, "HbA1c blood test", _MEDIUM),
            _t(_LAB, "Fasting glucose test", _MEDIUM),
            _t(_FOLLOW_UP, "3-month diabetes follow-up", _MEDIUM),
        ),
    ),
    TaskTrigger(
        name="respiratory",
        condition="respiratory",
        patterns=(
            r"\bcough", r"\bshortness of breath", r"\basthma", r"\bpneumonia", r"\bbronchitis",
            r"\bchest infection", r"\bwheez",
        ),
        tasks=(
            _t(_LAB, "Chest X-ray", _MEDIUM),
            _t(_LAB, "Sputum culture", _LOW),
        ),
    ),
    TaskTrigger(
        name="hypertension",
        condition="hypertension",
        patterns=(r"\bhigh blood pressure", r"\bhypertension", r"\bbp\b", r"\bsystolic", r"\bdiastolic"),
        tasks=(
            _t(_FOLLOW_UP, "Blood pressure monitoring follow-up in 2 weeks", _MEDIUM),
            _t(_LAB, "Kidney function tests", _LOW),
        ),
    ),
    TaskTrigger(
        name="mental_health",
        condition="mental health",
        patterns=(r"\bdepress", r"\banxiety", r"\bstress\b", r"\bmental health", r"\bmood\b", r"\bpsychiatr"),
        tasks=(
            _t(_REFERRAL, "Psychiatrist referral", _MEDIUM),
            _t(_FOLLOW_UP, "Mental health follow-up in 2 weeks", _HIGH),
        ),
    ),
    TaskTrigger(
        name="pain",
        condition="pain",
        patterns=(r"\bpain\b", r"\bchronic pain", r"\barthritis", r"\bjoint pain", r"\bback pain", r"\bheadache"),
        tasks=(
            _t(_LAB, "MRI or X-ray for pain assessment", _LOW),
            _t(_REFERRAL, "Physiotherapy referral", _LOW),
        ),
    ),
    TaskTrigger(
        name="smoking",
        patterns=(r"\bsmok", r"\bcigarette", r"\btobacco"),
        tasks=(_t(_LIFESTYLE, "Smoking cessation counselling", _MEDIUM),),
    ),
    TaskTrigger(
        name="weight",
        patterns=(r"\bobes", r"\boverweight", r"\bweight management", r"\bdiet\b", r"\bsedentary"),
        tasks=(_t(_LIFESTYLE, "Diet and exercise counselling", _LOW),),
    ),
)

MEDICATION_TRIGGER = TaskTrigger(
    name="medication",
    patterns=(r"\bmedication", r"\bprescription", r"\bprescribed?\b", r"\bpills\b", r"\btablets?\b"),
    tasks=(_t(_MEDICATION, "Medication review and prescription", _MEDIUM),),
)

REFERRAL_TRIGGER = TaskTrigger(
    name="referral",
    patterns=(r"\brefer", r"\bspecialist", r"\bcardiologist", r"\bneurologist", r"\bsurgeon\b"),
    tasks=(_t(_REFERRAL, "Specialist referral", _MEDIUM),),
)

# Phrases that mark a sentence as talking about a follow-up visit.
FOLLOW_UP_CUES = re.compile(
    r"\bfollow[\s-]?up|\bcome back|\breturn|\bsee (?:you|him|her|them)|\bnext visit|"
    r"\bmonitor|\brecheck|\breview|\bcheck[\s-]?up",
    re.IGNORECASE,
)

REGIONAL_TRIGGERS: dict[str, tuple[TaskTrigger, ...]] = {
    "za": (
        TaskTrigger(
            name="medical_aid",
            patterns=(r"\bdiscovery\b", r"\bvitality\b"),
            tasks=(_t(_LIFESTYLE, "Check Discovery Vitality benefits and rewards", _LOW),),
        ),
        TaskTrigger(
            name="public_referral",
            patterns=(r"\bstate hospital", r"\bclinic\b", r"\bpublic hospital"),
            tasks=(_t(_REFERRAL, "Public healthcare referral letter needed", _MEDIUM),),
        ),
        TaskTrigger(
            name="tb",
            condition="tuberculosis",
            patterns=(r"\btb\b", r"\btubercul"),
            tasks=(_t(_LAB, "TB screening and sputum test", _HIGH),),
        ),
        TaskTrigger(
            name="hiv",
            condition="hiv",
            patterns=(r"\bhiv\b", r"\baids\b"),
            tasks=(_t(_LAB, "HIV/AIDS monitoring blood tests", _HIGH),),
        ),
    ),
}
