from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from statistics import fmean

from readiness.ingest import GRADE_SCALE, profile_from_record
from readiness.models import Category, ReadinessScore, StudentProfile
from readiness.recommendations import (
    generate_next_steps,
    generate_recommendations,
    identify_strengths,
    identify_weaknesses,
)

logger = logging.getLogger(__name__)

# Percent weights; they must sum to 100.
CATEGORY_WEIGHTS = {
    Category.ACADEMIC: 30,
    Category.SKILLS: 30,
    Category.EXPERIENCE: 25,
    Category.SOFT_SKILLS: 15,
}

CGPA_POINTS = 70
CONSISTENCY_POINTS = 30

POINTS_PER_SKILL = 5
SKILLS_CAP = 50
POINTS_PER_VERIFIED_CERT = 10
VERIFIED_CERTS_CAP = 50

POINTS_PER_PROJECT = 15
PROJECTS_CAP = 60
POINTS_PER_CERT = 10
CERTS_CAP = 40

POINTS_PER_PROFILE_FIELD = 25

MAX_SCORE = 100


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp_score(value: float) -> int:
    if not math.isfinite(value):
        return 0
    return max(0, min(MAX_SCORE, _round_half_up(value)))


def academic_score(profile: StudentProfile) -> int:
    cgpa_component = profile.cgpa * CGPA_POINTS / GRADE_SCALE
    # An empty history averages to 0 and contributes nothing.
    average_sgpa = fmean(record.sgpa for record in profile.academic_records) if profile.academic_records else 0.0
    consistency_component = average_sgpa * CONSISTENCY_POINTS / GRADE_SCALE
    return _clamp_score(cgpa_component + consistency_component)


def skills_score(profile: StudentProfile) -> int:
    skills_component = min(len(profile.skills) * POINTS_PER_SKILL, SKILLS_CAP)
    certs_component = min(profile.verified_certifications * POINTS_PER_VERIFIED_CERT, VERIFIED_CERTS_CAP)
    return _clamp_score(skills_component + certs_component)


def experience_score(profile: StudentProfile) -> int:
    projects_component = min(len(profile.projects) * POINTS_PER_PROJECT, PROJECTS_CAP)
    certs_component = min(len(profile.certifications) * POINTS_PER_CERT, CERTS_CAP)
    return _clamp_score(projects_component + certs_component)


def soft_skills_score(profile: StudentProfile) -> int:
    return _clamp_score(len(profile.profile_links.present()) * POINTS_PER_PROFILE_FIELD)


CALCULATORS = {
    Category.ACADEMIC: academic_score,
    Category.SKILLS: skills_score,
    Category.EXPERIENCE: experience_score,
    Category.SOFT_SKILLS: soft_skills_score,
}


def sub_scores(profile: StudentProfile) -> dict[Category, int]:
    return {category: calculator(profile) for category, calculator in CALCULATORS.items()}


def overall_score(scores: Mapping[Category, int]) -> int:
    # Integer percent weights keep the weighted sum exact before rounding.
    weighted = sum(CATEGORY_WEIGHTS[category] * scores.get(category, 0) for category in Category)
    return _clamp_score(weighted / 100)


def aggregate(scores: Mapping[Category, int]) -> ReadinessScore:
    clamped = {category: _clamp_score(scores.get(category, 0)) for category in Category}
    return ReadinessScore(
        overall_score=overall_score(clamped),
        academic_score=clamped[Category.ACADEMIC],
        skills_score=clamped[Category.SKILLS],
        experience_score=clamped[Category.EXPERIENCE],
        soft_skills_score=clamped[Category.SOFT_SKILLS],
        strengths=tuple(identify_strengths(clamped)),
        weaknesses=tuple(identify_weaknesses(clamped)),
        recommendations=tuple(generate_recommendations(clamped)),
        next_steps=tuple(generate_next_steps(clamped)),
    )


def compute_readiness(profile: StudentProfile | Mapping) -> ReadinessScore:
    profile = profile_from_record(profile)
    result = aggregate(sub_scores(profile))
    logger.debug(
        "Readiness for student %s: overall=%d",
        profile.student_id or "<anonymous>",
        result.overall_score,
    )
    return result
