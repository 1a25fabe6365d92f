"""Lightweight entity extraction from transcript text.

Medications are picked up from dosage patterns ("amlodipine 5 mg once
daily") and from a vocabulary of commonly dictated drug names.  Clinical
terms (symptoms and examination findings) feed the differential
diagnosis engine when only a raw transcript is available, and symptom
mentions can be graded mild, moderate or severe from the words around them.
"""

from __future__ import annotations

import re

from scribe_engine.classification.classifier import split_sentences
from scribe_engine.classification.keywords import SECTION_KEYWORDS
from scribe_engine.core.negation import is_negated
from scribe_engine.models import MedicationDetails, SectionType, SymptomAssessment, SymptomSeverity

KNOWN_MEDICATIONS: tuple[str, ...] = (
    "amlodipine", "amoxicillin", "aspirin", "atenolol", "atorvastatin",
    "azithromycin", "beclomethasone", "budesonide", "captopril", "ciprofloxacin",
    "clopidogrel", "co-amoxiclav", "codeine", "dexamethasone", "diclofenac",
    "digoxin", "doxycycline", "efavirenz", "enalapril", "ethambutol",
    "fluoxetine", "furosemide", "gliclazide", "hydrochlorothiazide",
    "ibuprofen", "insulin", "isoniazid", "lamivudine", "levothyroxine",
    "lisinopril", "loratadine", "metformin", "metoclopramide", "metronidazole",
    "morphine", "naproxen", "nifedipine", "nitrofurantoin", "omeprazole",
    "paracetamol", "prednisone", "prednisolone", "pyrazinamide", "ranitidine",
    "rifampicin", "salbutamol", "simvastatin", "spironolactone", "tenofovir",
    "tramadol", "warfarin",
)

_UNIT = r"(?:mg|mcg|g|ml|units?|tablets?|puffs?)"
_FREQUENCY = (
    r"(?:once|twice|three times|four times|bd|od|tds|qds|nocte|prn)"
    r"(?:\s+(?:daily|a day|per day|at night|in the morning|as needed))?"
)

_DOSED = re.compile(
    rf"\b(?P<name>[a-z][a-z\-]{{2,}})\s+(?P<dose>\d+(?:\.\d+)?)\s*(?P<unit>{_UNIT})\b"
    rf"(?:\s+(?P<freq>{_FREQUENCY}))?",
    re.IGNORECASE,
)
_PRESCRIBED = re.compile(
    r"\b(?:take|taking|give|prescribe|prescribed|start|started|on)\s+(?P<name>[a-z][a-z\-]{3,})\b",
    re.IGNORECASE,
)
_KNOWN = re.compile(
    r"\b(?:" + "|".join(re.escape(m) for m in KNOWN_MEDICATIONS) + r")\b",
    re.IGNORECASE,
)

# Words that can precede a dose without being a drug name.
_NOT_MEDICATIONS = frozenset({
    "weight", "about", "around", "approximately", "then", "and", "with", "from",
    "dose", "dosage", "take", "takes", "taking", "give", "start", "increase",
    "reduce", "daily", "total", "extra",
})

# Narrative lead-ins that mark a symptom sentence but are not symptoms.
_LEAD_IN_PHRASES = frozenset({"complains of", "presenting with"})
_UNGRADED = frozenset({"worse at night"})

# Checked in order; the first level with a cue in the sentence wins.
_SEVERITY_CUES: tuple[tuple[SymptomSeverity, re.Pattern[str]], ...] = (
    (SymptomSeverity.SEVERE, re.compile(
        r"\b(?:severe|excruciating|unbearable|intense|agoni[sz]ing|worst)\b|\b(?:[89]|10)/10\b",
        re.IGNORECASE,
    )),
    (SymptomSeverity.MODERATE, re.compile(
        r"\b(?:moderate|significant|noticeable)\b|\b[5-7]/10\b",
        re.IGNORECASE,
    )),
    (SymptomSeverity.MILD, re.compile(
        r"\b(?:mild|slight|minor|minimal)\b|\b[1-4]/10\b",
        re.IGNORECASE,
    )),
)

_FINDING_CUES = re.compile(
    r"\b(?:on examination|exam(?:ination)?|auscultation|palpation|lung fields|"
    r"heart sounds|vitals?|afebrile|febrile|tender|oedema|edema|crackles|"
    r"wheeze|murmur|blood pressure|saturation)",
    re.IGNORECASE,
)


def _symptom_vocabulary() -> list[str]:
    """Symptom keywords, longest first."""
    return sorted(
        (t for t in SECTION_KEYWORDS[SectionType.SYMPTOMS] if t not in _LEAD_IN_PHRASES),
        key=len,
        reverse=True,
    )


def extract_medications(text: str) -> list[MedicationDetails]:
    """Return medications mentioned in ``text``.

    Deduplicated by name (case-insensitive, first mention kept) and
    sorted by confidence, highest first.  Names from the known vocabulary
    score 0.9, anything else that looks dosed scores 0.7.
    """
    if not text:
        return []

    found: list[tuple[int, MedicationDetails]] = []

    for match in _DOSED.finditer(text):
        name = match.group("name")
        if name.lower() in _NOT_MEDICATIONS:
            continue
        known = name.lower() in KNOWN_MEDICATIONS
        found.append((match.start(), MedicationDetails(
            name=name,
            dosage=f"{match.group('dose')} {match.group('unit')}",
            frequency=match.group("freq"),
            confidence=0.9 if known else 0.7,
        )))

    for match in _PRESCRIBED.finditer(text):
        name = match.group("name")
        if name.lower() in KNOWN_MEDICATIONS:
            found.append((match.start("name"), MedicationDetails(name=name, confidence=0.9)))

    for match in _KNOWN.finditer(text):
        found.append((match.start(), MedicationDetails(name=match.group(0), confidence=0.9)))

    # Stable by position so the dosed mention of a drug wins over a bare one.
    found.sort(key=lambda item: item[0])
    unique: dict[str, MedicationDetails] = {}
    for _, med in found:
        key = med.name.lower()
        existing = unique.get(key)
        if existing is None:
            unique[key] = med
        elif existing.dosage is None and med.dosage is not None:
            unique[key] = med.model_copy(update={"name": existing.name})

    return sorted(unique.values(), key=lambda m: m.confidence, reverse=True)


def extract_clinical_terms(text: str) -> tuple[list[str], list[str]]:
    """Split transcript text into (symptoms, findings) for diagnosis input.

    Sentences with examination cues become findings verbatim.  Symptom
    keywords from the other sentences are collected in order of mention
    unless negated ("no fever", "denies chest pain").
    """
    symptoms: list[str] = []
    findings: list[str] = []
    if not text:
        return symptoms, findings

    vocabulary = _symptom_vocabulary()

    for sentence in split_sentences(text, min_chars=3):
        if _FINDING_CUES.search(sentence):
            if sentence not in findings:
                findings.append(sentence)
            continue
        lowered = sentence.lower()
        mentioned: list[tuple[int, str]] = []
        for term in vocabulary:
            for match in re.finditer(rf"\b{re.escape(term)}\b", lowered):
                if is_negated(lowered, match.start()):
                    continue
                # longest first, so "dry cough" shadows a bare "cough"
                if not any(term in s for _, s in mentioned) and not any(term in s for s in symptoms):
                    mentioned.append((match.start(), term))
                break
        for _, term in sorted(mentioned):
            symptoms.append(term)

    return symptoms, findings


def assess_symptom_severity(text: str) -> list[SymptomAssessment]:
    """Grade each affirmed symptom mention by the severity cues in its sentence.

    A cue word ("severe", "mild", ...) or a pain score such as "8/10"
    grades the mention with confidence 0.8.  Without a cue the mention is
    graded moderate with confidence 0.5.  Severe cues win over moderate
    ones, moderate over mild.  Mentions are returned in order of appearance.
    """
    assessments: list[SymptomAssessment] = []
    if not text:
        return assessments

    vocabulary = [t for t in _symptom_vocabulary() if t not in _UNGRADED]

    for sentence in split_sentences(text, min_chars=3):
        grade = next((level for level, cue in _SEVERITY_CUES if cue.search(sentence)), None)
        taken: list[tuple[int, int]] = []
        mentions: list[tuple[int, str]] = []
        for term in vocabulary:
            for match in re.finditer(rf"\b{re.escape(term)}\b", sentence, re.IGNORECASE):
                start, end = match.span()
                if any(start < e and s < end for s, e in taken):
                    continue
                taken.append((start, end))
                if not is_negated(sentence, start):
                    mentions.append((start, match.group(0)))
        for _, symptom in sorted(mentions):
            assessments.append(SymptomAssessment(
                symptom=symptom,
                severity=grade or SymptomSeverity.MODERATE,
                confidence=0.8 if grade else 0.5,
            ))

    return assessments
