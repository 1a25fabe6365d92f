"""Transcript section classification, template suggestion and entity extraction."""

from __future__ import annotations

from scribe_engine.classification.classifier import (
    SectionClassifier,
    merge_into_note,
    split_sentences,
)
from scribe_engine.classification.enhanced import (
    EnhancedSectionClassifier,
    ICategorizationClient,
)
from scribe_engine.classification.entities import (
    assess_symptom_severity,
    extract_clinical_terms,
    extract_medications,
)
from scribe_engine.classification.templates import BUILTIN_TEMPLATES, DEFAULT_TEMPLATE

__all__ = [
    "SectionClassifier",
    "merge_into_note",
    "split_sentences",
    "EnhancedSectionClassifier",
    "ICategorizationClient",
    "assess_symptom_severity",
    "extract_clinical_terms",
    "extract_medications",
    "BUILTIN_TEMPLATES",
    "DEFAULT_TEMPLATE",
]
