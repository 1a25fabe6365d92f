"""Rules backend over an in-process rule sequence."""

from __future__ import annotations

from typing import Collection, Iterable, Optional

from scribe_engine.models import RiskCategory
from scribe_engine.risk.rules import RiskRule, select_rules


class MemoryRiskRulesBackend:
    """Serves a fixed sequence of rules, e.g. the built-in ``RISK_RULES``."""

    def __init__(self, rules: Iterable[RiskRule] = (), *, version: int = 1) -> None:
        self._rules = tuple(rules)
        self._version = version

    def list_rules(
        self,
        *,
        categories: Optional[Collection[RiskCategory]] = None,
        enabled_only: bool = True,
    ) -> list[RiskRule]:
        return select_rules(self._rules, categories=categories, enabled_only=enabled_only)

    def get_version(self) -> int:
        return self._version
