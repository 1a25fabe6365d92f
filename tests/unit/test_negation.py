"""Tests for clause-level negation detection."""

from __future__ import annotations

import pytest

from scribe_engine.core.negation import first_affirmed, is_negated


class TestIsNegated:
    @pytest.mark.parametrize(
        ("text", "term"),
        [
            ("no fever", "fever"),
            ("patient denies chest pain", "chest pain"),
            ("negative for covid", "covid"),
            ("without any wheeze", "wheeze"),
        ],
    )
    def test_negated(self, text: str, term: str) -> None:
        assert is_negated(text, text.index(term)) is True

    @pytest.mark.parametrize(
        ("text", "term"),
        [
            ("fever, no cough", "fever"),
            ("no cough, but fever since monday", "fever"),
            ("no cough.\nfever since monday", "fever"),
            ("notable fever", "fever"),
        ],
    )
    def test_affirmed(self, text: str, term: str) -> None:
        assert is_negated(text, text.index(term)) is False


class TestFirstAffirmed:
    def test_skips_negated_mention(self) -> None:
        text = "No chest pain at rest. Chest pain on exertion."
        assert first_affirmed(r"\bchest pain", text) == "Chest pain"

    def test_all_negated(self) -> None:
        assert first_affirmed(r"\bfever", "Denies fever") is None

    def test_case_insensitive(self) -> None:
        assert first_affirmed(r"\bdiabet", "Type 2 DIABETES") == "DIABET"
