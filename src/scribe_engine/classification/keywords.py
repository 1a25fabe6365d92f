"""Keyword tables and contextual cues for transcript section classification.

These tables are used by ``SectionClassifier`` to score each dictated
sentence against each template section type.  Keywords are matched
case-insensitively; multi-word phrases count as more specific than
single words.  Adding a section type or a keyword is a data change only.
"""

from __future__ import annotations

import re
from typing import Pattern

from scribe_engine.models import SectionType

SECTION_KEYWORDS: dict[SectionType, tuple[str, ...]] = {
    SectionType.SYMPTOMS: (
        "pain", "ache", "aching", "hurts", "sore", "tender", "burning", "throbbing",
        "nausea", "vomiting", "fever", "chills", "sweating", "night sweats", "fatigue",
        "tired", "weakness", "headache", "migraine", "dizziness", "dizzy", "lightheaded",
        "cough", "dry cough", "productive cough", "shortness of breath",
        "difficulty breathing", "wheezing", "chest tightness", "rash", "itching",
        "swelling", "numbness", "tingling", "cramping", "constipation", "diarrhoea",
        "diarrhea", "bloating", "heartburn", "indigestion", "blurred vision",
        "palpitations", "insomnia", "weight loss", "appetite loss", "worse at night",
        "complains of", "presenting with",
    ),
    SectionType.DIAGNOSIS: (
        "diagnosis", "diagnosed with", "impression", "assessment", "differential",
        "condition", "disease", "disorder", "syndrome", "infection", "bacterial",
        "viral", "inflammation", "suspected", "confirmed", "probable", "likely",
        "consistent with", "hypertension", "diabetes", "asthma", "pneumonia",
        "bronchitis", "sinusitis", "arthritis", "fracture", "gastritis", "reflux",
        "urinary tract infection", "tuberculosis", "anaemia", "anemia",
    ),
    SectionType.TREATMENT: (
        "prescribe", "prescribed", "prescription", "medication", "tablet", "tablets",
        "capsule", "mg", "mcg", "dose", "dosage", "twice daily", "once daily",
        "three times daily", "antibiotic", "analgesic", "anti-inflammatory", "steroid",
        "inhaler", "nebulizer", "injection", "infusion", "ointment", "cream",
        "physiotherapy", "counselling", "counseling", "surgery", "procedure",
        "paracetamol", "ibuprofen", "amoxicillin", "metformin", "enalapril",
        "amlodipine", "salbutamol", "prednisone", "omeprazole", "start on",
    ),
    SectionType.VITALS: (
        "blood pressure", "bp", "systolic", "diastolic", "mmhg", "heart rate", "pulse",
        "bpm", "temperature", "temp", "respiratory rate", "breaths per minute",
        "oxygen saturation", "sats", "spo2", "weight", "bmi", "height", "vital signs",
        "vitals",
    ),
    SectionType.HISTORY: (
        "history", "previous", "previously", "past medical history", "prior",
        "family history", "surgical history", "allergies", "allergic to",
        "current medications", "chronic", "hospitalised", "hospitalized", "admission",
        "smoker", "smoking", "alcohol", "mother", "father", "sibling", "runs in the family",
        "social history", "years ago",
    ),
    SectionType.EXAMINATION: (
        "examination", "on examination", "exam", "inspection", "palpation", "palpable",
        "auscultation", "percussion", "heart sounds", "breath sounds", "lung fields",
        "bowel sounds", "non-tender", "unremarkable", "clear", "crackles", "wheeze",
        "murmur", "oedema", "edema", "enlarged", "reflexes", "range of motion",
        "afebrile", "appears well",
    ),
    SectionType.PLAN: (
        "plan", "follow-up", "follow up", "return", "come back", "review", "schedule",
        "appointment", "next visit", "recheck", "monitor", "continue", "discontinue",
        "refer", "referral", "blood test", "x-ray", "chest x-ray", "ecg", "bloods",
        "safety net", "if symptoms worsen", "red flags", "in two weeks", "next week",
    ),
    SectionType.NOTES: (
        "note", "noted", "comment", "observation", "additional", "patient education",
        "discussed", "explained",
    ),
    SectionType.TEXT: (),
}

# One contextual cue per match; each adds a flat bonus on top of keyword hits.
CONTEXT_CUES: dict[SectionType, list[Pattern[str]]] = {
    SectionType.SYMPTOMS: [
        re.compile(r"\b(?:complain|report|feel|experienc)", re.IGNORECASE),
    ],
    SectionType.DIAGNOSIS: [
        re.compile(r"\b(?:assess|diagnos|impression|suspect)", re.IGNORECASE),
    ],
    SectionType.TREATMENT: [
        re.compile(r"\b(?:recommend|prescrib|treat|therap|start(?:ed)? on)", re.IGNORECASE),
    ],
    SectionType.VITALS: [
        re.compile(r"\b\d{2,3}\s*/\s*\d{2,3}\b"),
        re.compile(r"\b\d+(?:\.\d+)?\s*(?:bpm|mmhg|degrees|°c|kg|lbs|%)", re.IGNORECASE),
    ],
    SectionType.HISTORY: [
        re.compile(r"\b(?:has a history|known with|since childhood|in the past)\b", re.IGNORECASE),
    ],
    SectionType.EXAMINATION: [
        re.compile(r"\b(?:exam|findings?|appear|normal)", re.IGNORECASE),
    ],
    SectionType.PLAN: [
        re.compile(r"\b(?:follow|return|next|continue|will)\b", re.IGNORECASE),
    ],
}

# Cue words for picking a whole template, keyed by template category.
TEMPLATE_CUES: dict[str, tuple[Pattern[str], str]] = {
    "emergency": (
        re.compile(r"\b(?:emergency|urgent|severe|acute|collapse)\b", re.IGNORECASE),
        "emergency keywords detected",
    ),
    "follow-up": (
        re.compile(r"\b(?:follow[\s-]?up|return visit|progress|better|improved)\b", re.IGNORECASE),
        "follow-up indicators found",
    ),
    "examination": (
        re.compile(r"\b(?:examination|physical|inspect|palpat)", re.IGNORECASE),
        "examination terminology present",
    ),
    "procedure": (
        re.compile(r"\b(?:procedure|surgery|operation|inject|suture)", re.IGNORECASE),
        "procedure-related content",
    ),
}
