"""Built-in note templates."""

from __future__ import annotations

from scribe_engine.models import NoteTemplate, SectionType, TemplateSection


def _section(
    type_: SectionType,
    title: str,
    order: int,
    required: bool = False,
    placeholder: str = "",
) -> TemplateSection:
    return TemplateSection(
        id=f"{type_.value}_{order}",
        title=title,
        type=type_,
        required=required,
        placeholder=placeholder or f"Enter {title.lower()}...",
        order=order,
    )


DEFAULT_TEMPLATE = NoteTemplate(
    id="general-consultation",
    name="General Consultation",
    category="consultation",
    sections=[
        _section(SectionType.SYMPTOMS, "Chief Complaint & Symptoms", 1, True,
                 "What brings the patient in today?"),
        _section(SectionType.HISTORY, "Medical History", 2, False,
                 "Relevant history, allergies, current medications..."),
        _section(SectionType.VITALS, "Vital Signs", 3, False,
                 "Blood pressure, heart rate, temperature, weight..."),
        _section(SectionType.EXAMINATION, "Physical Examination", 4),
        _section(SectionType.DIAGNOSIS, "Assessment & Diagnosis", 5, True),
        _section(SectionType.TREATMENT, "Treatment Plan", 6, True),
        _section(SectionType.PLAN, "Follow-up Plan", 7),
    ],
)

FOLLOW_UP_TEMPLATE = NoteTemplate(
    id="follow-up",
    name="Follow-up Visit",
    category="follow-up",
    sections=[
        _section(SectionType.SYMPTOMS, "Interval History", 1, True,
                 "Changes since the last visit..."),
        _section(SectionType.VITALS, "Vital Signs", 2),
        _section(SectionType.EXAMINATION, "Focused Examination", 3),
        _section(SectionType.DIAGNOSIS, "Progress Assessment", 4, True),
        _section(SectionType.PLAN, "Plan", 5, True),
    ],
)

EMERGENCY_TEMPLATE = NoteTemplate(
    id="emergency-assessment",
    name="Emergency Assessment",
    category="emergency",
    sections=[
        _section(SectionType.SYMPTOMS, "Presenting Complaint", 1, True),
        _section(SectionType.VITALS, "Vital Signs", 2, True),
        _section(SectionType.EXAMINATION, "Primary Survey", 3, True),
        _section(SectionType.DIAGNOSIS, "Working Diagnosis", 4, True),
        _section(SectionType.TREATMENT, "Immediate Management", 5, True),
        _section(SectionType.PLAN, "Disposition", 6),
    ],
)

BUILTIN_TEMPLATES: tuple[NoteTemplate, ...] = (
    DEFAULT_TEMPLATE,
    FOLLOW_UP_TEMPLATE,
    EMERGENCY_TEMPLATE,
)
