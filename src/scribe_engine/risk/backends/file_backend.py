"""File-backed risk rules: loads additional rules from YAML or JSON.

Expected layout::

    version: 2
    rules:
      - rule_id: interaction.ssri_tramadol
        factor: Drug Interaction
        category: medication
        severity: high
        description: Serotonin syndrome risk
        recommendations: [Avoid combination]
        medication_patterns: ['\\bfluoxetine']
        co_medication_patterns: ['\\btramadol']
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Collection, Optional

import yaml

from scribe_engine.exceptions import RulesFileError
from scribe_engine.models import RiskCategory, RiskSeverity
from scribe_engine.risk.rules import RiskRule, select_rules

log = logging.getLogger(__name__)

_PATTERN_FIELDS = (
    "required_patterns",
    "condition_patterns",
    "medication_patterns",
    "co_medication_patterns",
)


class FileRiskRulesBackend:
    """Loads risk rules from a YAML or JSON file on disk.

    The file is lazy-loaded on first access.  Any problem with the file
    (missing, unparseable, bad field values, invalid regex) raises
    ``RulesFileError``.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._rules: Optional[tuple[RiskRule, ...]] = None
        self._version: int = 1

    @property
    def path(self) -> Path:
        return self._path

    def list_rules(
        self,
        *,
        categories: Optional[Collection[RiskCategory]] = None,
        enabled_only: bool = True,
    ) -> list[RiskRule]:
        """Rules in file order, limited to ``categories`` when non-empty."""
        self._ensure_loaded()
        assert self._rules is not None
        return select_rules(self._rules, categories=categories, enabled_only=enabled_only)

    def get_version(self) -> int:
        """Return the ruleset version."""
        self._ensure_loaded()
        return self._version

    def _ensure_loaded(self) -> None:
        """Lazy-load the rules file on first access."""
        if self._rules is not None:
            return

        if not self._path.exists():
            raise RulesFileError(f"Rules file not found: {self._path}", path=str(self._path))

        raw_text = self._path.read_text(encoding="utf-8")

        try:
            if self._path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(raw_text)
            else:
                data = json.loads(raw_text)
        except (yaml.YAMLError, json.JSONDecodeError) as exc:
            raise RulesFileError(f"Cannot parse rules file {self._path}: {exc}", path=str(self._path)) from exc

        if not isinstance(data, dict):
            raise RulesFileError(f"Rules file {self._path} must contain a mapping", path=str(self._path))

        self._parse(data)

    def _parse(self, data: dict[str, Any]) -> None:
        """Parse the raw dict into RiskRule objects."""
        try:
            self._version = int(data.get("version", 1))
        except (TypeError, ValueError) as exc:
            raise RulesFileError(f"Invalid version in {self._path}: {exc!r}", path=str(self._path)) from exc
        rules: list[RiskRule] = []
        seen: set[str] = set()

        for index, rule_data in enumerate(data.get("rules") or []):
            try:
                rule = self._build_rule(rule_data)
            except (KeyError, TypeError, ValueError, re.error) as exc:
                raise RulesFileError(
                    f"Invalid rule #{index} in {self._path}: {exc!r}", path=str(self._path)
                ) from exc
            if rule.rule_id in seen:
                raise RulesFileError(
                    f"Duplicate rule_id {rule.rule_id!r} in {self._path}", path=str(self._path)
                )
            seen.add(rule.rule_id)
            rules.append(rule)

        self._rules = tuple(rules)
        log.info("Loaded %d risk rules from %s (version %d)", len(rules), self._path, self._version)

    @staticmethod
    def _build_rule(rule_data: dict[str, Any]) -> RiskRule:
        patterns: dict[str, tuple[str, ...]] = {}
        for name in _PATTERN_FIELDS:
            values = tuple(rule_data.get(name) or ())
            for value in values:
                re.compile(value)
            patterns[name] = values

        min_age = rule_data.get("min_age")
        min_medications = rule_data.get("min_medications")
        rule = RiskRule(
            rule_id=rule_data["rule_id"],
            factor=rule_data["factor"],
            category=RiskCategory(rule_data.get("category", "other")),
            severity=RiskSeverity(rule_data["severity"]),
            description=rule_data.get("description", ""),
            recommendations=tuple(rule_data.get("recommendations") or ()),
            min_condition_matches=int(rule_data.get("min_condition_matches", 1)),
            min_age=int(min_age) if min_age is not None else None,
            min_medications=int(min_medications) if min_medications is not None else None,
            enabled=bool(rule_data.get("enabled", True)),
            **patterns,
        )
        if not rule.has_trigger:
            raise ValueError(f"rule {rule.rule_id!r} has no trigger")
        return rule
