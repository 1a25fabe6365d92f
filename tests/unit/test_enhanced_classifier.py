"""Tests for the enhancement path and its rule-based fallback."""

from __future__ import annotations

import pytest

from scribe_engine.classification.classifier import SectionClassifier
from scribe_engine.classification.enhanced import EnhancedSectionClassifier, ICategorizationClient
from scribe_engine.classification.templates import DEFAULT_TEMPLATE
from scribe_engine.core.config import ClassifierConfig, EnhancementConfig
from scribe_engine.exceptions import EnhancementError
from tests.fakes.fake_enhancer import FakeCategorizationClient

TRANSCRIPT = (
    "Patient complains of a dry cough and fever for two weeks. "
    "Blood pressure 120/80 mmHg, pulse 72 bpm."
)

SECTIONS = DEFAULT_TEMPLATE.sections


def _enhanced(client: FakeCategorizationClient, *, enabled: bool = True, timeout: float = 1.0) -> EnhancedSectionClassifier:
    return EnhancedSectionClassifier(
        client=client,
        config=EnhancementConfig(enabled=enabled, timeout_seconds=timeout),
        classifier=SectionClassifier(ClassifierConfig()),
    )


def _rule_based() -> list:
    return SectionClassifier(ClassifierConfig()).classify(TRANSCRIPT, SECTIONS)


class TestEnhancedSectionClassifier:
    def test_fake_satisfies_protocol(self) -> None:
        assert isinstance(FakeCategorizationClient(), ICategorizationClient)

    @pytest.mark.asyncio
    async def test_disabled_uses_rules(self) -> None:
        client = FakeCategorizationClient([
            {"section_id": "plan_7", "confidence": 0.9, "suggested_content": "Anything"},
        ])
        enhanced = _enhanced(client, enabled=False)

        result = await enhanced.classify(TRANSCRIPT, SECTIONS)

        assert result == _rule_based()
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_no_client_uses_rules(self) -> None:
        enhanced = EnhancedSectionClassifier(config=EnhancementConfig(enabled=True))
        assert enhanced.enabled is False
        assert await enhanced.classify(TRANSCRIPT, SECTIONS) == _rule_based()

    @pytest.mark.asyncio
    async def test_valid_payload_replaces_rules(self) -> None:
        client = FakeCategorizationClient([
            {"section_id": "plan_7", "confidence": 0.8, "suggested_content": "Review in two weeks"},
            {"section_id": "symptoms_1", "confidence": 0.95, "suggested_content": "Dry cough and fever"},
            {"section_id": "no_such_section", "confidence": 0.9, "suggested_content": "Dropped"},
            {"section_id": "history_2", "confidence": 0.3, "suggested_content": "Too uncertain"},
            {"section_id": "vitals_3", "confidence": 0.9, "suggested_content": "   "},
        ])
        enhanced = _enhanced(client)

        result = await enhanced.classify(TRANSCRIPT, SECTIONS)

        # ordered by template section order, unknown and weak items dropped
        assert [c.section_id for c in result] == ["symptoms_1", "plan_7"]
        assert result[0].suggested_content == "Dry cough and fever"
        assert len(client.calls) == 1
        assert client.calls[0]["section_ids"] == [s.id for s in SECTIONS]

    @pytest.mark.asyncio
    async def test_timeout_falls_back(self) -> None:
        client = FakeCategorizationClient([], delay=1.0)
        enhanced = _enhanced(client, timeout=0.05)

        assert await enhanced.classify(TRANSCRIPT, SECTIONS) == _rule_based()

    @pytest.mark.asyncio
    async def test_client_error_falls_back(self) -> None:
        client = FakeCategorizationClient(error=EnhancementError("service unavailable"))
        assert await _enhanced(client).classify(TRANSCRIPT, SECTIONS) == _rule_based()

    @pytest.mark.asyncio
    async def test_unexpected_exception_falls_back(self) -> None:
        client = FakeCategorizationClient(error=RuntimeError("boom"))
        assert await _enhanced(client).classify(TRANSCRIPT, SECTIONS) == _rule_based()

    @pytest.mark.asyncio
    async def test_non_list_payload_falls_back(self) -> None:
        client = FakeCategorizationClient({"symptoms_1": "Dry cough"})
        assert await _enhanced(client).classify(TRANSCRIPT, SECTIONS) == _rule_based()

    @pytest.mark.asyncio
    async def test_malformed_item_falls_back(self) -> None:
        client = FakeCategorizationClient([{"section_id": "symptoms_1", "confidence": 7}])
        assert await _enhanced(client).classify(TRANSCRIPT, SECTIONS) == _rule_based()

    @pytest.mark.asyncio
    async def test_blank_transcript_skips_client(self) -> None:
        client = FakeCategorizationClient([
            {"section_id": "symptoms_1", "confidence": 0.9, "suggested_content": "x"},
        ])
        result = await _enhanced(client).classify("   ", SECTIONS)

        assert result == []
        assert client.calls == []
