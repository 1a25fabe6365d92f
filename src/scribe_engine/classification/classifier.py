"""Transcript section classification: keyword scoring per dictated sentence.

Each sentence is scored against every template section, assigned to its
best section, and the sentences are then grouped per section.  Only
groups whose confidence clears the threshold are returned.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Mapping, Optional, Pattern, Sequence

from scribe_engine.classification.keywords import (
    CONTEXT_CUES,
    SECTION_KEYWORDS,
    TEMPLATE_CUES,
)
from scribe_engine.core.config import ClassifierConfig
from scribe_engine.models import (
    Categorization,
    NoteTemplate,
    TemplateSection,
    TemplateSuggestion,
)

log = logging.getLogger(__name__)

EXACT_MATCH_WEIGHT = 3.0
PARTIAL_MATCH_WEIGHT = 2.0
PHRASE_BONUS = 1.0
CONTEXT_WEIGHT = 1.0
# Keywords shorter than this only count as whole words ("bp", "mg", "hr").
MIN_PARTIAL_KEYWORD_LEN = 4

PARAGRAPH_SEPARATOR = "\n\n"

# Sentence ends on . ! ? followed by whitespace or end of text, so "2.5 mg"
# stays in one piece.
_SENTENCE_SPLIT = re.compile(r"[.!?]+(?=\s|$)")


@lru_cache(maxsize=2048)
def _word_pattern(keyword: str) -> Pattern[str]:
    return re.compile(rf"(?<!\w){re.escape(keyword)}(?!\w)")


def split_sentences(text: str, min_chars: int = 10) -> list[str]:
    """Split text into trimmed sentences, dropping very short fragments."""
    parts = (p.strip() for p in _SENTENCE_SPLIT.split(text))
    return [p for p in parts if len(p) > min_chars]


def keyword_score(sentence: str, keywords: Sequence[str]) -> float:
    """Score keyword hits in an already-lowercased sentence."""
    score = 0.0
    for keyword in keywords:
        kw = keyword.lower().strip()
        if not kw or kw not in sentence:
            continue
        if _word_pattern(kw).search(sentence):
            score += EXACT_MATCH_WEIGHT
        elif len(kw) >= MIN_PARTIAL_KEYWORD_LEN:
            score += PARTIAL_MATCH_WEIGHT
        else:
            continue
        if " " in kw:
            score += PHRASE_BONUS
    return score


class SectionClassifier:
    """Maps transcript sentences onto template sections.

    Stateless: the same transcript and sections always produce the same
    categorizations.
    """

    def __init__(self, config: Optional[ClassifierConfig] = None) -> None:
        self._config = config or ClassifierConfig()

    @property
    def config(self) -> ClassifierConfig:
        return self._config

    def score_sentence(self, sentence: str, section: TemplateSection) -> float:
        """Raw (unnormalised) score of one sentence for one section."""
        lowered = sentence.lower()
        keywords = (*SECTION_KEYWORDS.get(section.type, ()), *section.keywords)
        score = keyword_score(lowered, keywords)
        for cue in CONTEXT_CUES.get(section.type, []):
            if cue.search(sentence):
                score += CONTEXT_WEIGHT
                break
        return score

    def position_weight(self, index: int, total: int) -> float:
        """Earlier sentences get a slightly higher weight (dictation order)."""
        if total <= 1:
            return 1.0 + self._config.position_bonus
        return 1.0 + self._config.position_bonus * (total - 1 - index) / (total - 1)

    def classify(
        self,
        transcript: str,
        sections: Sequence[TemplateSection],
    ) -> list[Categorization]:
        """Return one categorization per section whose confidence clears the floor."""
        if not transcript or not transcript.strip() or not sections:
            return []

        sentences = split_sentences(transcript, self._config.min_sentence_chars)
        total = len(sentences)
        grouped: dict[str, tuple[float, list[str]]] = {}

        for index, sentence in enumerate(sentences):
            best_id = ""
            best_confidence = 0.0
            weight = self.position_weight(index, total)
            for section in sections:
                raw = self.score_sentence(sentence, section)
                if raw <= 0:
                    continue
                confidence = min(raw / self._config.score_saturation, 1.0) * weight
                confidence = min(confidence, 1.0)
                if confidence > best_confidence:
                    best_id, best_confidence = section.id, confidence
            if not best_id:
                continue
            current, members = grouped.get(best_id, (0.0, []))
            members.append(sentence)
            grouped[best_id] = (max(current, best_confidence), members)

        results: list[Categorization] = []
        for section in sections:
            if section.id not in grouped:
                continue
            confidence, members = grouped.pop(section.id)
            confidence = round(confidence, 4)
            if confidence <= self._config.confidence_threshold:
                log.debug(
                    "Section %s below threshold (%.3f <= %.3f)",
                    section.id, confidence, self._config.confidence_threshold,
                )
                continue
            results.append(
                Categorization(
                    section_id=section.id,
                    confidence=confidence,
                    suggested_content=" ".join(members),
                )
            )

        log.debug(
            "Classified %d sentence(s) into %d section(s)", total, len(results)
        )
        return results

    def suggest_template(
        self,
        transcript: str,
        templates: Sequence[NoteTemplate],
    ) -> Optional[TemplateSuggestion]:
        """Pick the template that best fits the transcript, or None."""
        if not transcript or not templates:
            return None

        lowered = transcript.lower()
        best: Optional[TemplateSuggestion] = None

        for template in templates:
            score = 0.0
            reasons: list[str] = []

            cue = TEMPLATE_CUES.get(template.category)
            if cue is not None and cue[0].search(transcript):
                score += 0.4
                reasons.append(cue[1])

            if template.sections:
                covered = [
                    s for s in template.sections
                    if keyword_score(lowered, SECTION_KEYWORDS.get(s.type, ())) > 0
                ]
                score += len(covered) / len(template.sections) * 0.3
                if len(covered) > 2:
                    reasons.append(f"matches {len(covered)} sections")

            if best is None or score > best.confidence:
                best = TemplateSuggestion(
                    template_id=template.id,
                    confidence=round(score, 4),
                    reasoning=", ".join(reasons),
                )

        if best is None or best.confidence <= 0.2:
            return None
        return best


def merge_into_note(
    note: Mapping[str, str],
    categorizations: Sequence[Categorization],
) -> dict[str, str]:
    """Merge categorized content into existing section values.

    New content is appended after a blank line.  Content already present
    as a paragraph of the section is not appended again, so re-running
    with an unchanged transcript leaves the note unchanged.
    """
    merged = dict(note)
    for cat in categorizations:
        content = cat.suggested_content.strip()
        if not content:
            continue
        existing = merged.get(cat.section_id, "")
        if not existing.strip():
            merged[cat.section_id] = content
            continue
        paragraphs = [p.strip() for p in existing.split(PARAGRAPH_SEPARATOR)]
        if content in paragraphs:
            continue
        merged[cat.section_id] = f"{existing}{PARAGRAPH_SEPARATOR}{content}"
    return merged
