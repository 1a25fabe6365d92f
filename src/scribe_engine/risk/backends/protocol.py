"""Risk rules backend protocol."""

from __future__ import annotations

from typing import Collection, Optional, Protocol, runtime_checkable

from scribe_engine.models import RiskCategory
from scribe_engine.risk.rules import RiskRule


@runtime_checkable
class IRiskRulesBackend(Protocol):
    """A source of risk rules: the built-in tables or a rules file."""

    def list_rules(
        self,
        *,
        categories: Optional[Collection[RiskCategory]] = None,
        enabled_only: bool = True,
    ) -> list[RiskRule]:
        """Rules in registry order, limited to ``categories`` when non-empty."""
        ...

    def get_version(self) -> int:
        """Version of the ruleset served."""
        ...
