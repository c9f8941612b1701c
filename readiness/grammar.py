from __future__ import annotations

import math
import re
from dataclasses import dataclass, field

SEVERITY_PENALTIES = {"minor": 2, "moderate": 5, "major": 10}

# (pattern, message, category, severity, suggestion)
GRAMMAR_CHECKS = (
    (
        re.compile(r"\bi\b"),
        'Use capital "I" for first person pronoun',
        "Capitalization",
        "minor",
        'Use "I"',
    ),
    (
        re.compile(r"\b(their|there|they're)\b", re.IGNORECASE),
        "Verify their/there/they're usage",
        "Homophones",
        "moderate",
        "their=possession, there=place, they're=they are",
    ),
    (
        re.compile(r"\b(your|you're)\b", re.IGNORECASE),
        "Check your/you're usage",
        "Homophones",
        "moderate",
        "your=possession, you're=you are",
    ),
    (
        re.compile(r"\b(its|it's)\b", re.IGNORECASE),
        "Verify its/it's usage",
        "Homophones",
        "moderate",
        "its=possession, it's=it is",
    ),
    (
        re.compile(r"\b(then|than)\b", re.IGNORECASE),
        "Check then/than usage",
        "Homophones",
        "moderate",
        "then=time, than=comparison",
    ),
    (
        re.compile(r"\b(affect|effect)\b", re.IGNORECASE),
        "Verify affect/effect usage",
        "Commonly confused",
        "moderate",
        "affect=verb (influence), effect=noun (result)",
    ),
    (
        re.compile(r"\b(could of|should of|would of)\b", re.IGNORECASE),
        'Use "could have" instead of "could of"',
        "Common mistakes",
        "major",
        'Use "could have", "should have", "would have"',
    ),
    (
        re.compile(r"\s{2,}"),
        "Multiple spaces detected",
        "Spacing",
        "minor",
        "Use single spaces between words",
    ),
    (
        re.compile(r"[.!?]\s*[a-z]"),
        "Sentence should start with capital letter",
        "Capitalization",
        "moderate",
        "Start sentences with capital letters",
    ),
)

SLOW_WPM = 120
FAST_WPM = 160


@dataclass
class GrammarError:
    message: str
    category: str
    severity: str
    suggestion: str


@dataclass
class GrammarAnalysis:
    errors: list[GrammarError] = field(default_factory=list)
    score: int = 0
    fluency_score: int = 0
    vocabulary_score: int = 0
    grammar_score: int = 0
    feedback: str = "No text to analyze"


@dataclass
class SpeakingPace:
    words_per_minute: int
    pace: str
    feedback: str


def _grammar_feedback(grammar: int, fluency: int, vocabulary: int) -> str:
    feedback = []
    if grammar < 70:
        feedback.append("Focus on grammar fundamentals")
    if fluency < 70:
        feedback.append("Work on sentence flow and coherence")
    if vocabulary < 70:
        feedback.append("Expand your vocabulary")
    if not feedback:
        return "Excellent communication skills! Keep it up."
    return ". ".join(feedback) + "."


def analyze_grammar(text: str | None) -> GrammarAnalysis:
    if not text or not text.strip():
        return GrammarAnalysis()

    errors: dict[tuple[str, str], GrammarError] = {}
    for pattern, message, category, severity, suggestion in GRAMMAR_CHECKS:
        if pattern.search(text) and (category, message) not in errors:
            errors[(category, message)] = GrammarError(message, category, severity, suggestion)

    penalty = sum(SEVERITY_PENALTIES[error.severity] for error in errors.values())
    grammar = max(0, 100 - penalty)
    sentences = [s for s in re.split(r"[.!?]+", text) if s.strip()]
    fluency = 85 if len(sentences) > 2 else 70
    vocabulary = 80 if len(set(text.lower().split())) > 20 else 65

    return GrammarAnalysis(
        errors=list(errors.values()),
        score=int(math.floor((grammar + fluency + vocabulary) / 3 + 0.5)),
        fluency_score=fluency,
        vocabulary_score=vocabulary,
        grammar_score=grammar,
        feedback=_grammar_feedback(grammar, fluency, vocabulary),
    )


def speaking_pace(text: str, duration_seconds: float) -> SpeakingPace:
    if duration_seconds <= 0:
        raise ValueError("duration_seconds must be positive")
    words = len((text or "").split())
    wpm = int(math.floor(words / duration_seconds * 60 + 0.5))
    if wpm < SLOW_WPM:
        return SpeakingPace(wpm, "slow", "Consider speaking slightly faster to maintain engagement")
    if wpm > FAST_WPM:
        return SpeakingPace(wpm, "fast", "Slow down slightly to ensure clarity")
    return SpeakingPace(wpm, "moderate", "Excellent speaking pace - clear and engaging")
