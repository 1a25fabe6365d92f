"""Risk factor analysis, contraindication checks and urgency grading."""

from __future__ import annotations

from scribe_engine.risk.analyzer import RiskFactorAnalyzer
from scribe_engine.risk.backends import (
    FileRiskRulesBackend,
    IRiskRulesBackend,
    MemoryRiskRulesBackend,
)
from scribe_engine.risk.rules import RISK_RULES, RiskRule

__all__ = [
    "RiskFactorAnalyzer",
    "FileRiskRulesBackend",
    "IRiskRulesBackend",
    "MemoryRiskRulesBackend",
    "RISK_RULES",
    "RiskRule",
]
