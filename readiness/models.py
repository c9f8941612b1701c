from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass
class AcademicRecord:
    semester: int
    sgpa: float


@dataclass
class Certification:
    name: str = ""
    verified: bool = False


@dataclass
class ProfileLinks:
    linkedin: str | None = None
    github: str | None = None
    portfolio: str | None = None
    bio: str | None = None

    def present(self) -> list[str]:
        fields = {
            "linkedin": self.linkedin,
            "github": self.github,
            "portfolio": self.portfolio,
            "bio": self.bio,
        }
        return [name for name, value in fields.items() if value and value.strip()]


@dataclass
class StudentProfile:
    cgpa: float
    academic_records: list[AcademicRecord] = field(default_factory=list)
    skills: list[str] = field(default_factory=list)
    certifications: list[Certification] = field(default_factory=list)
    projects: list[str] = field(default_factory=list)
    profile_links: ProfileLinks = field(default_factory=ProfileLinks)
    student_id: str | None = None

    @property
    def verified_certifications(self) -> int:
        return sum(1 for cert in self.certifications if cert.verified)


class Category(Enum):
    """Readiness categories in tie-break priority order."""

    ACADEMIC = (
        "academic",
        "Strong academic performance",
        "Academic performance needs improvement",
        "Focus on improving your CGPA through consistent academic performance",
        ("Schedule regular study sessions", "Seek academic support from professors"),
    )
    SKILLS = (
        "skills",
        "Excellent technical skills",
        "Limited technical skills",
        "Add more technical skills and obtain relevant certifications",
        ("Enroll in online courses", "Earn industry-recognized certifications"),
    )
    EXPERIENCE = (
        "experience",
        "Outstanding practical experience",
        "Lack of practical experience",
        "Build more projects and participate in hackathons or internships",
        ("Start a personal project", "Apply for internships"),
    )
    SOFT_SKILLS = (
        "softSkills",
        "Professional online presence",
        "Incomplete professional profiles",
        "Complete your professional profiles (LinkedIn, GitHub, Portfolio)",
        ("Create/update LinkedIn profile", "Build a portfolio website"),
    )

    def __init__(
        self,
        key: str,
        strength: str,
        weakness: str,
        recommendation: str,
        next_steps: tuple[str, ...],
    ):
        self.key = key
        self.strength = strength
        self.weakness = weakness
        self.recommendation = recommendation
        self.next_steps = next_steps


@dataclass(frozen=True)
class ReadinessScore:
    overall_score: int
    academic_score: int
    skills_score: int
    experience_score: int
    soft_skills_score: int
    strengths: tuple[str, ...]
    weaknesses: tuple[str, ...]
    recommendations: tuple[str, ...]
    next_steps: tuple[str, ...]

    def sub_scores(self) -> dict[Category, int]:
        return {
            Category.ACADEMIC: self.academic_score,
            Category.SKILLS: self.skills_score,
            Category.EXPERIENCE: self.experience_score,
            Category.SOFT_SKILLS: self.soft_skills_score,
        }

    def as_dict(self) -> dict:
        return {
            "overallScore": self.overall_score,
            "academicScore": self.academic_score,
            "skillsScore": self.skills_score,
            "experienceScore": self.experience_score,
            "softSkillsScore": self.soft_skills_score,
            "strengths": list(self.strengths),
            "weaknesses": list(self.weaknesses),
            "recommendations": list(self.recommendations),
            "nextSteps": list(self.next_steps),
        }

    def to_row(self, student_id: str) -> dict:
        """Row shape of the ``career_readiness_scores`` table."""
        return {
            "student_id": student_id,
            "overall_score": self.overall_score,
            "academic_score": self.academic_score,
            "skills_score": self.skills_score,
            "experience_score": self.experience_score,
            "soft_skills_score": self.soft_skills_score,
            "recommendations": list(self.recommendations),
            "analysis": {
                "strengths": list(self.strengths),
                "weaknesses": list(self.weaknesses),
                "nextSteps": list(self.next_steps),
            },
        }


class Severity(Enum):
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


@dataclass(frozen=True)
class SkillGapEntry:
    skill_name: str
    demand: int
    supply: int
    gap: int
    severity: Severity
    category: str | None = None

    def as_dict(self) -> dict:
        payload = {
            "skillName": self.skill_name,
            "demand": self.demand,
            "supply": self.supply,
            "gap": self.gap,
            "severity": self.severity.value,
        }
        if self.category is not None:
            payload["category"] = self.category
        return payload
