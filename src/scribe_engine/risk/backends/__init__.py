"""Risk rule sources."""

from __future__ import annotations

from scribe_engine.risk.backends.file_backend import FileRiskRulesBackend
from scribe_engine.risk.backends.memory_backend import MemoryRiskRulesBackend
from scribe_engine.risk.backends.protocol import IRiskRulesBackend

__all__ = [
    "FileRiskRulesBackend",
    "IRiskRulesBackend",
    "MemoryRiskRulesBackend",
]
