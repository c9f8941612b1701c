from __future__ import annotations

from collections.abc import Mapping

from readiness.models import Category

STRENGTH_THRESHOLD = 80
WEAKNESS_THRESHOLD = 60
RECOMMENDATION_THRESHOLD = 70

PRAISE_MESSAGE = "Excellent work! Keep maintaining your current trajectory"


def _ordered(scores: Mapping[Category, int]) -> list[tuple[Category, int]]:
    return [(category, scores.get(category, 0)) for category in Category]


def identify_strengths(scores: Mapping[Category, int]) -> list[str]:
    return [category.strength for category, score in _ordered(scores) if score >= STRENGTH_THRESHOLD]


def identify_weaknesses(scores: Mapping[Category, int]) -> list[str]:
    return [category.weakness for category, score in _ordered(scores) if score < WEAKNESS_THRESHOLD]


def generate_recommendations(scores: Mapping[Category, int]) -> list[str]:
    recommendations = [
        category.recommendation
        for category, score in _ordered(scores)
        if score < RECOMMENDATION_THRESHOLD
    ]
    return recommendations or [PRAISE_MESSAGE]


def lowest_category(scores: Mapping[Category, int]) -> Category:
    # min() keeps the first of equal scores, so Category order breaks ties.
    return min(_ordered(scores), key=lambda item: item[1])[0]


def generate_next_steps(scores: Mapping[Category, int]) -> list[str]:
    return list(lowest_category(scores).next_steps)


def build_improvement_plan(scores: Mapping[Category, int]) -> list[dict[str, object]]:
    """Per-category plan for every area below the recommendation threshold, weakest first."""
    below = [(category, score) for category, score in _ordered(scores) if score < RECOMMENDATION_THRESHOLD]
    below.sort(key=lambda item: item[1])
    return [
        {
            "category": category.key,
            "score": score,
            "recommendation": category.recommendation,
            "actions": list(category.next_steps),
        }
        for category, score in below
    ]
