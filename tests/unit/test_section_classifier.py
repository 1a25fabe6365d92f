"""Tests for the rule-based section classifier, template suggestion and note merge."""

from __future__ import annotations

import pytest

from scribe_engine.classification.classifier import (
    SectionClassifier,
    keyword_score,
    merge_into_note,
    split_sentences,
)
from scribe_engine.classification.templates import BUILTIN_TEMPLATES, DEFAULT_TEMPLATE
from scribe_engine.core.config import ClassifierConfig
from scribe_engine.models import Categorization, SectionType, TemplateSection

TWO_SENTENCES = (
    "Patient complains of a dry cough and fever for two weeks. "
    "Blood pressure 120/80 mmHg, pulse 72 bpm."
)


@pytest.fixture()
def classifier() -> SectionClassifier:
    return SectionClassifier(ClassifierConfig())


# ---------------------------------------------------------------------------
# Sentence splitting and keyword scoring
# ---------------------------------------------------------------------------


class TestSplitSentences:
    def test_keeps_decimal_doses_together(self) -> None:
        parts = split_sentences("Take 2.5 mg daily with food. Review next week please.")
        assert parts == ["Take 2.5 mg daily with food", "Review next week please"]

    def test_drops_short_fragments(self) -> None:
        assert split_sentences("Ok. Thanks. The chest sounds clear today.") == [
            "The chest sounds clear today",
        ]


class TestKeywordScore:
    def test_whole_word_and_phrase_bonus(self) -> None:
        # "dry cough" 3 + 1 phrase bonus, "cough" 3
        assert keyword_score("dry cough today", ["cough", "dry cough"]) == 7.0

    def test_partial_match_for_long_keywords(self) -> None:
        assert keyword_score("coughing all night", ["cough"]) == 2.0

    def test_short_keywords_need_whole_word(self) -> None:
        assert keyword_score("tachycardic at 110 bpm", ["bp"]) == 0.0


# ---------------------------------------------------------------------------
# classify
# ---------------------------------------------------------------------------


class TestClassify:
    def test_symptoms_and_vitals(self, classifier: SectionClassifier) -> None:
        result = classifier.classify(TWO_SENTENCES, DEFAULT_TEMPLATE.sections)

        assert [c.section_id for c in result] == ["symptoms_1", "vitals_3"]
        assert result[0].confidence == 1.0
        assert result[0].suggested_content == "Patient complains of a dry cough and fever for two weeks"
        assert result[1].suggested_content == "Blood pressure 120/80 mmHg, pulse 72 bpm"

    def test_weak_evidence_below_threshold(self, classifier: SectionClassifier) -> None:
        assert classifier.classify("Patient was coughing overnight quite a lot.", DEFAULT_TEMPLATE.sections) == []

    def test_empty_input(self, classifier: SectionClassifier) -> None:
        assert classifier.classify("", DEFAULT_TEMPLATE.sections) == []
        assert classifier.classify("   \n ", DEFAULT_TEMPLATE.sections) == []
        assert classifier.classify(TWO_SENTENCES, []) == []

    def test_deterministic(self, classifier: SectionClassifier, cough_transcript: str) -> None:
        first = classifier.classify(cough_transcript, DEFAULT_TEMPLATE.sections)
        second = classifier.classify(cough_transcript, DEFAULT_TEMPLATE.sections)
        assert first == second

    def test_results_follow_section_order(self, classifier: SectionClassifier, cough_transcript: str) -> None:
        result = classifier.classify(cough_transcript, DEFAULT_TEMPLATE.sections)
        order = {s.id: s.order for s in DEFAULT_TEMPLATE.sections}
        orders = [order[c.section_id] for c in result]
        assert orders == sorted(orders)
        assert all(0.4 < c.confidence <= 1.0 for c in result)

    def test_custom_section_keywords(self, classifier: SectionClassifier) -> None:
        social = TemplateSection(id="social", title="Social", type=SectionType.TEXT, keywords=["smokes"])
        result = classifier.classify("He smokes twenty cigarettes a day.", [social])

        assert len(result) == 1
        assert result[0].section_id == "social"
        assert result[0].confidence == pytest.approx(0.55)

    def test_higher_threshold_filters_more(self) -> None:
        strict = SectionClassifier(ClassifierConfig(confidence_threshold=0.6))
        social = TemplateSection(id="social", title="Social", keywords=["smokes"])
        assert strict.classify("He smokes twenty cigarettes a day.", [social]) == []


class TestPositionWeight:
    def test_single_sentence_gets_full_bonus(self, classifier: SectionClassifier) -> None:
        assert classifier.position_weight(0, 1) == pytest.approx(1.1)

    def test_weight_decreases_with_position(self, classifier: SectionClassifier) -> None:
        assert classifier.position_weight(0, 3) == pytest.approx(1.1)
        assert classifier.position_weight(1, 3) == pytest.approx(1.05)
        assert classifier.position_weight(2, 3) == pytest.approx(1.0)


# ---------------------------------------------------------------------------
# suggest_template
# ---------------------------------------------------------------------------


class TestSuggestTemplate:
    def test_follow_up_cues(self, classifier: SectionClassifier) -> None:
        transcript = (
            "Follow-up visit. Blood pressure improved to 130/85 mmHg. "
            "Continue amlodipine 5 mg once daily. Review in 3 months."
        )
        suggestion = classifier.suggest_template(transcript, BUILTIN_TEMPLATES)

        assert suggestion is not None
        assert suggestion.template_id == "follow-up"
        assert "follow-up indicators found" in suggestion.reasoning

    def test_no_suggestion_without_evidence(self, classifier: SectionClassifier) -> None:
        assert classifier.suggest_template("Hello there", BUILTIN_TEMPLATES) is None

    def test_empty_inputs(self, classifier: SectionClassifier) -> None:
        assert classifier.suggest_template("", BUILTIN_TEMPLATES) is None
        assert classifier.suggest_template("Follow-up visit", []) is None


# ---------------------------------------------------------------------------
# merge_into_note
# ---------------------------------------------------------------------------


class TestMergeIntoNote:
    def test_fills_empty_sections(self) -> None:
        cats = [Categorization(section_id="symptoms_1", confidence=0.9, suggested_content="Dry cough")]
        assert merge_into_note({}, cats) == {"symptoms_1": "Dry cough"}

    def test_appends_after_blank_line(self) -> None:
        cats = [Categorization(section_id="symptoms_1", confidence=0.9, suggested_content="Dry cough")]
        merged = merge_into_note({"symptoms_1": "Sore throat"}, cats)
        assert merged["symptoms_1"] == "Sore throat\n\nDry cough"

    def test_rerun_is_idempotent(self, classifier: SectionClassifier) -> None:
        cats = classifier.classify(TWO_SENTENCES, DEFAULT_TEMPLATE.sections)
        once = merge_into_note({"symptoms_1": "Seen last week"}, cats)
        twice = merge_into_note(once, cats)
        assert twice == once

    def test_input_not_mutated(self) -> None:
        note = {"plan_7": "Review"}
        cats = [Categorization(section_id="plan_7", confidence=0.9, suggested_content="Recheck bloods")]
        merge_into_note(note, cats)
        assert note == {"plan_7": "Review"}
