"""Exception hierarchy for scribe-engine.

The rule-based core never raises for malformed or empty clinical input.
These exceptions cover the two boundaries that can fail: the optional
network-backed enhancement path and loading rule files at startup.
"""

from __future__ import annotations


class ScribeEngineError(Exception):
    """Base exception for all scribe-engine errors."""


class EnhancementError(ScribeEngineError):
    """Raised by an enhancement client when the external call fails.

    Always caught at the enhancement boundary, which falls back to the
    deterministic rule-based result.
    """


class RulesFileError(ScribeEngineError):
    """Raised when a rules file is missing or cannot be parsed."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


__all__ = [
    "ScribeEngineError",
    "EnhancementError",
    "RulesFileError",
]
