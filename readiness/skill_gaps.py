from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from readiness.ingest import as_count
from readiness.models import Severity, SkillGapEntry

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
UNCATEGORIZED = "Uncategorized"

SEVERITY_BANDS = (
    (50, Severity.CRITICAL),
    (20, Severity.HIGH),
    (10, Severity.MEDIUM),
)

PRIORITY_BANDS = (
    (50, "high"),
    (20, "medium"),
)


def classify_severity(gap: int) -> Severity:
    for floor, severity in SEVERITY_BANDS:
        if gap > floor:
            return severity
    return Severity.LOW


def _skill_key(row: Mapping) -> str:
    for key in ("skillName", "skill_name", "skill", "name"):
        value = row.get(key)
        if value:
            return str(value).strip()
    return ""


def _demand_count(row: Mapping):
    for key in ("demandCount", "demand", "job_postings_count"):
        if key in row:
            return row[key]
    return None


def _demand_rows(demand) -> list[tuple[str, int, str | None]]:
    """Normalise demand input into ordered (skill, count, category) triples.

    Repeated skills are merged and keep the position of their first occurrence.
    """
    if isinstance(demand, Mapping):
        items: Iterable[tuple[str, object, str | None]] = (
            (str(skill).strip(), count, None) for skill, count in demand.items()
        )
    else:
        items = []
        for row in demand or []:
            if not isinstance(row, Mapping):
                logger.debug("Skipping malformed demand row %r", row)
                continue
            items.append((_skill_key(row), _demand_count(row), row.get("category")))

    merged: dict[str, list] = {}
    for skill, count, category in items:
        if not skill:
            continue
        if skill in merged:
            merged[skill][0] += as_count(count)
            merged[skill][1] = merged[skill][1] or category
        else:
            merged[skill] = [as_count(count), category]
    return [(skill, count, category) for skill, (count, category) in merged.items()]


def compute_skill_gaps(
    demand,
    supply: Mapping[str, int] | None = None,
    limit: int | None = DEFAULT_LIMIT,
    categories: Mapping[str, str] | None = None,
) -> list[SkillGapEntry]:
    """Per-skill demand/supply gap, largest gap first.

    ``demand`` is a mapping ``skill -> postings`` or a sequence of demand rows.
    ``limit=None`` returns every skill.
    """
    supply_counts: dict[str, int] = {}
    for skill, count in (supply or {}).items():
        key = str(skill).strip()
        supply_counts[key] = supply_counts.get(key, 0) + as_count(count)
    categories = categories or {}
    entries = []
    for skill, demand_count, category in _demand_rows(demand):
        supply_count = supply_counts.get(skill, 0)
        gap = demand_count - supply_count
        entries.append(
            SkillGapEntry(
                skill_name=skill,
                demand=demand_count,
                supply=supply_count,
                gap=gap,
                severity=classify_severity(gap),
                category=category or categories.get(skill),
            )
        )
    entries.sort(key=lambda entry: entry.gap, reverse=True)
    if limit is None:
        return entries
    return entries[: max(0, limit)]


def count_supply(rows) -> dict[str, int]:
    """Count students per skill from student-skill join rows."""
    counts: dict[str, int] = {}
    for row in rows or []:
        if isinstance(row, Mapping):
            nested = row.get("skills")
            name = nested.get("name") if isinstance(nested, Mapping) else _skill_key(row)
        else:
            name = row
        if not name:
            continue
        name = str(name).strip()
        counts[name] = counts.get(name, 0) + 1
    return counts


def group_by_category(entries: Iterable[SkillGapEntry]) -> dict[str, list[SkillGapEntry]]:
    groups: dict[str, list[SkillGapEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.category or UNCATEGORIZED, []).append(entry)
    return groups


def _priority(gap: int) -> str:
    for floor, label in PRIORITY_BANDS:
        if gap > floor:
            return label
    return "low"


def training_priorities(entries: Iterable[SkillGapEntry], limit: int = 5) -> list[dict[str, object]]:
    shortfalls = sorted((e for e in entries if e.gap > 0), key=lambda e: e.gap, reverse=True)
    return [
        {
            "skill": entry.skill_name,
            "priority": _priority(entry.gap),
            "recommendation": (
                f"Increase training programs for {entry.skill_name}. "
                f"Current gap: {entry.gap} students needed."
            ),
        }
        for entry in shortfalls[: max(0, limit)]
    ]


def skill_gap_report(demand, supply: Mapping[str, int] | None = None, limit: int = DEFAULT_LIMIT) -> dict:
    entries = compute_skill_gaps(demand, supply, limit=None)
    return {
        "topGaps": [entry.as_dict() for entry in entries if entry.gap > 0][: max(0, limit)],
        "byCategory": {
            category: [entry.as_dict() for entry in group]
            for category, group in group_by_category(entries).items()
        },
        "recommendations": training_priorities(entries),
    }
