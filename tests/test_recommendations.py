from __future__ import annotations

from readiness.models import Category
from readiness.recommendations import (
    PRAISE_MESSAGE,
    build_improvement_plan,
    generate_recommendations,
    identify_weaknesses,
    lowest_category,
)


def _scores(academic: int, skills: int, experience: int, soft: int) -> dict[Category, int]:
    return {
        Category.ACADEMIC: academic,
        Category.SKILLS: skills,
        Category.EXPERIENCE: experience,
        Category.SOFT_SKILLS: soft,
    }


def test_categories_carry_two_next_steps():
    for category in Category:
        assert len(category.next_steps) == 2
        assert category.strength and category.weakness and category.recommendation


def test_recommendations_fire_independently():
    recs = generate_recommendations(_scores(69, 70, 10, 69))
    assert recs == [
        Category.ACADEMIC.recommendation,
        Category.EXPERIENCE.recommendation,
        Category.SOFT_SKILLS.recommendation,
    ]
    assert PRAISE_MESSAGE not in recs


def test_praise_is_exclusive_fallback():
    assert generate_recommendations(_scores(70, 70, 70, 70)) == [PRAISE_MESSAGE]


def test_weakness_threshold_is_strict():
    assert identify_weaknesses(_scores(60, 59, 60, 60)) == [Category.SKILLS.weakness]


def test_lowest_category_prefers_priority_order_on_ties():
    assert lowest_category(_scores(75, 75, 75, 75)) is Category.ACADEMIC
    assert lowest_category(_scores(75, 80, 30, 30)) is Category.EXPERIENCE


def test_improvement_plan_orders_weakest_first():
    plan = build_improvement_plan(_scores(65, 20, 90, 40))
    assert [item["category"] for item in plan] == ["skills", "softSkills", "academic"]
    assert plan[0]["actions"] == list(Category.SKILLS.next_steps)
    assert build_improvement_plan(_scores(90, 90, 90, 90)) == []
