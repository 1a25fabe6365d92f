"""Clause-level negation detection for keyword matching.

A mention is negated when a negation word ("no", "denies", "without", ...)
precedes it in the same clause, so "no fever" and "denies chest pain" do
not count as evidence while "fever, no cough" still affirms fever.
"""

from __future__ import annotations

import re
from typing import Optional

_NEGATION = re.compile(
    r"\b(?:no|not|denies|denied|without|negative for|absent|nil|free of)\b",
    re.IGNORECASE,
)
_CLAUSE_BREAK = re.compile(r"[,;.:\n]|\bbut\b|\bhowever\b", re.IGNORECASE)


def is_negated(text: str, start: int) -> bool:
    """True when a negation word precedes ``start`` within the same clause."""
    clause = _CLAUSE_BREAK.split(text[:start])[-1]
    return _NEGATION.search(clause) is not None


def first_affirmed(pattern: str, text: str) -> Optional[str]:
    """Return the first non-negated match of ``pattern`` in ``text``."""
    for match in re.finditer(pattern, text, re.IGNORECASE):
        if not is_negated(text, match.start()):
            return match.group(0)
    return None
