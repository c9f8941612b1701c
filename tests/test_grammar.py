from __future__ import annotations

import pytest

from readiness.grammar import analyze_grammar, speaking_pace

CLEAN_ANSWER = (
    "We designed a scalable data pipeline for the analytics team. "
    "The system processed millions of records every single day. "
    "Our group also built dashboards, wrote documentation, and trained new colleagues quickly."
)


def test_empty_text():
    result = analyze_grammar("   ")
    assert result.score == 0
    assert result.errors == []
    assert result.feedback == "No text to analyze"


def test_clean_answer_scores_well():
    result = analyze_grammar(CLEAN_ANSWER)
    assert result.errors == []
    assert result.grammar_score == 100
    assert result.fluency_score == 85
    assert result.vocabulary_score == 80
    assert result.score == 88
    assert result.feedback == "Excellent communication skills! Keep it up."


def test_penalties_by_severity():
    result = analyze_grammar("I could of done better. They went there.")
    categories = {error.category for error in result.errors}
    assert categories == {"Common mistakes", "Homophones"}
    assert result.grammar_score == 85
    assert result.fluency_score == 70
    assert result.score == 73
    assert result.feedback == "Expand your vocabulary."


def test_duplicate_matches_reported_once():
    result = analyze_grammar("their house and there car and they're late")
    assert len(result.errors) == 1


def test_lowercase_i_and_sentence_start():
    result = analyze_grammar("yesterday i left. then we met")
    messages = {error.message for error in result.errors}
    assert 'Use capital "I" for first person pronoun' in messages
    assert "Sentence should start with capital letter" in messages


def test_speaking_pace_bands():
    assert speaking_pace(" ".join(["word"] * 100), 60).pace == "slow"
    assert speaking_pace(" ".join(["word"] * 140), 60).pace == "moderate"
    fast = speaking_pace(" ".join(["word"] * 100), 30)
    assert fast.words_per_minute == 200
    assert fast.pace == "fast"


def test_speaking_pace_rejects_non_positive_duration():
    with pytest.raises(ValueError):
        speaking_pace("hello", 0)
