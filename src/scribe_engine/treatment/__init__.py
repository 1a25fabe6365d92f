"""Treatment protocol generation."""

from __future__ import annotations

from scribe_engine.treatment.generator import TreatmentProtocolGenerator, parse_severity
from scribe_engine.treatment.templates import (
    ESSENTIAL_MEDICINES,
    GENERIC_TEMPLATE,
    PROTOCOL_TEMPLATES,
    ProtocolTemplate,
    is_essential,
)

__all__ = [
    "TreatmentProtocolGenerator",
    "parse_severity",
    "ESSENTIAL_MEDICINES",
    "GENERIC_TEMPLATE",
    "PROTOCOL_TEMPLATES",
    "ProtocolTemplate",
    "is_essential",
]
