"""Optional network-backed categorization with rule-based fallback.

The rule-based ``SectionClassifier`` result is always computed first.  When
an enhancement client is configured, its categorizations replace the
rule-based ones if they arrive within the timeout and validate against the
template sections; any failure falls back to the rule-based result.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from pydantic import ValidationError

from scribe_engine.classification.classifier import SectionClassifier
from scribe_engine.core.config import ClassifierConfig, EnhancementConfig
from scribe_engine.exceptions import EnhancementError
from scribe_engine.models import Categorization, TemplateSection

log = logging.getLogger(__name__)


@runtime_checkable
class ICategorizationClient(Protocol):
    """Contract for an external categorization service."""

    async def categorize(
        self,
        transcript: str,
        sections: Sequence[TemplateSection],
    ) -> list[dict[str, Any]]:
        """Return raw categorizations.

        Each item carries ``section_id``, ``confidence`` and
        ``suggested_content``.  Implementations raise ``EnhancementError``
        when the remote call fails.
        """
        ...


class EnhancedSectionClassifier:
    """Rule-based classification upgraded by an optional async client."""

    def __init__(
        self,
        client: Optional[ICategorizationClient] = None,
        config: Optional[EnhancementConfig] = None,
        classifier: Optional[SectionClassifier] = None,
    ) -> None:
        self._client = client
        self._config = config or EnhancementConfig()
        self._classifier = classifier or SectionClassifier(ClassifierConfig())

    @property
    def enabled(self) -> bool:
        return self._client is not None and self._config.enabled

    async def classify(
        self,
        transcript: str,
        sections: Sequence[TemplateSection],
    ) -> list[Categorization]:
        """Classify with the client when enabled, else with the rules."""
        fallback = self._classifier.classify(transcript, sections)
        if not self.enabled or not transcript.strip():
            return fallback

        assert self._client is not None
        try:
            payload = await asyncio.wait_for(
                self._client.categorize(transcript, sections),
                timeout=self._config.timeout_seconds,
            )
            return self._validate(payload, sections)
        except asyncio.TimeoutError:
            log.warning(
                "Enhanced categorization timed out after %.1fs, using rule-based result",
                self._config.timeout_seconds,
            )
        except (EnhancementError, ValidationError, TypeError, ValueError) as exc:
            log.warning("Enhanced categorization rejected, using rule-based result: %s", exc)
        except Exception:
            log.warning("Enhancement client raised, using rule-based result", exc_info=True)
        return fallback

    def _validate(
        self,
        payload: Any,
        sections: Sequence[TemplateSection],
    ) -> list[Categorization]:
        if not isinstance(payload, list):
            raise TypeError(f"Expected a list of categorizations, got {type(payload).__name__}")

        known = {s.id for s in sections}
        floor = self._classifier.config.confidence_threshold
        results: list[Categorization] = []
        for item in payload:
            cat = Categorization.model_validate(item)
            if cat.section_id not in known:
                log.debug("Dropping categorization for unknown section %s", cat.section_id)
                continue
            if cat.confidence <= floor or not cat.suggested_content.strip():
                continue
            results.append(cat)

        order = {s.id: i for i, s in enumerate(sections)}
        results.sort(key=lambda c: order[c.section_id])
        return results
