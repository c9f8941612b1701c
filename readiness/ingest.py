from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import replace

from readiness.errors import InvalidProfileError
from readiness.models import AcademicRecord, Certification, ProfileLinks, StudentProfile

logger = logging.getLogger(__name__)

GRADE_SCALE = 10.0

LINK_FIELDS = {
    "linkedin": "linkedin_url",
    "github": "github_url",
    "portfolio": "portfolio_url",
    "bio": "bio",
}


def _as_float(value) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        logger.debug("Non-numeric value %r treated as 0", value)
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def as_count(value) -> int:
    """Coerce a count to a non-negative int; anything unusable becomes 0."""
    if isinstance(value, str) and value.strip().lstrip("+-").isdigit():
        try:
            value = int(value.strip())
        except ValueError:
            logger.debug("Count string too long, treated as 0")
            return 0
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 0:
            logger.debug("Negative count %r treated as 0", value)
        return max(0, value)
    number = _as_float(value)
    if number < 0:
        logger.debug("Negative count %r treated as 0", value)
        return 0
    return int(number)


def as_grade(value) -> float:
    return max(0.0, min(GRADE_SCALE, _as_float(value)))


def _as_text(value) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _first(record: Mapping, *keys, default=None):
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return default


def _as_list(value) -> list:
    if value is None or isinstance(value, (str, bytes, Mapping)):
        return []
    try:
        return list(value)
    except TypeError:
        return []


def _academic_records(rows) -> list[AcademicRecord]:
    records = []
    for row in _as_list(rows):
        if not isinstance(row, Mapping):
            logger.debug("Skipping malformed academic record %r", row)
            continue
        records.append(AcademicRecord(semester=as_count(row.get("semester")), sgpa=as_grade(row.get("sgpa"))))
    return records


def _certifications(rows) -> list[Certification]:
    certs = []
    for row in _as_list(rows):
        if isinstance(row, Mapping):
            certs.append(
                Certification(
                    name=_as_text(_first(row, "name", "title")) or "",
                    verified=bool(row.get("verified")),
                )
            )
        else:
            certs.append(Certification(name=_as_text(row) or ""))
    return certs


def _skill_name(row) -> str:
    if isinstance(row, Mapping):
        nested = row.get("skills")
        if isinstance(nested, Mapping):
            return _as_text(nested.get("name")) or ""
        return _as_text(_first(row, "name", "skill_name", "skill_id")) or ""
    return _as_text(row) or ""


def _skills(record: Mapping) -> list[str]:
    rows = _first(record, "student_skills", "skills", default=[])
    return [_skill_name(row) for row in _as_list(rows)]


def _projects(rows) -> list[str]:
    projects = []
    for row in _as_list(rows):
        if isinstance(row, Mapping):
            projects.append(_as_text(_first(row, "title", "name")) or "")
        else:
            projects.append(_as_text(row) or "")
    return projects


def _profile_links(record: Mapping) -> ProfileLinks:
    nested = record.get("profileLinks") or record.get("profile_links")
    source = nested if isinstance(nested, Mapping) else {}
    values = {}
    for name, column in LINK_FIELDS.items():
        values[name] = _as_text(_first(source, name, column)) or _as_text(_first(record, column, name))
    return ProfileLinks(**values)


def profile_from_record(record) -> StudentProfile:
    """Build a StudentProfile from a database row or a camelCase JSON body.

    Every numeric field is coerced and clamped; only a record that is not a
    mapping at all is rejected.
    """
    if isinstance(record, StudentProfile):
        return replace(
            record,
            cgpa=as_grade(record.cgpa),
            academic_records=[
                AcademicRecord(semester=as_count(r.semester), sgpa=as_grade(r.sgpa)) for r in record.academic_records
            ],
        )
    if not isinstance(record, Mapping):
        raise InvalidProfileError(f"Expected a mapping for the student record, got {type(record).__name__}")

    student_id = _first(record, "id", "student_id", "studentId")
    return StudentProfile(
        cgpa=as_grade(record.get("cgpa")),
        academic_records=_academic_records(_first(record, "academic_records", "academicRecords")),
        skills=_skills(record),
        certifications=_certifications(record.get("certifications")),
        projects=_projects(record.get("projects")),
        profile_links=_profile_links(record),
        student_id=str(student_id) if student_id is not None else None,
    )
