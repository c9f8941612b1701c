from __future__ import annotations

import numpy as np
import pandas as pd

from readiness.errors import InvalidDataError

STAT_COLUMNS = [
    "academic_year",
    "department",
    "branch",
    "total_students",
    "placed_students",
    "average_package",
    "highest_package",
    "companies_visited",
]
NUMERIC_STAT_COLUMNS = [
    "total_students",
    "placed_students",
    "average_package",
    "highest_package",
    "companies_visited",
]


def _stats_frame(stats: list[dict]) -> pd.DataFrame:
    frame = pd.DataFrame(list(stats or []))
    for column in STAT_COLUMNS:
        if column not in frame.columns:
            frame[column] = np.nan
    for column in NUMERIC_STAT_COLUMNS:
        frame[column] = pd.to_numeric(frame[column], errors="coerce").fillna(0.0)
    return frame


def _rate(placed, total):
    placed = np.asarray(placed, dtype=float)
    total = np.asarray(total, dtype=float)
    safe_total = np.where(total > 0, total, 1.0)
    return np.round(np.where(total > 0, placed / safe_total * 100.0, 0.0), 2)


def _as_int(value) -> int:
    return int(np.floor(float(value) + 0.5))


def placement_summary(stats: list[dict]) -> dict[str, float | int]:
    frame = _stats_frame(stats)
    if frame.empty:
        return {
            "totalStudents": 0,
            "totalPlaced": 0,
            "overallPlacementRate": 0.0,
            "avgPackage": 0,
            "highestPackage": 0.0,
            "totalCompanies": 0,
        }
    total = frame["total_students"].sum()
    placed = frame["placed_students"].sum()
    return {
        "totalStudents": int(total),
        "totalPlaced": int(placed),
        "overallPlacementRate": float(_rate(placed, total)),
        "avgPackage": _as_int(frame["average_package"].mean()),
        "highestPackage": float(frame["highest_package"].max()),
        "totalCompanies": int(frame["companies_visited"].sum()),
    }


def _grouped(frame: pd.DataFrame, key: str) -> pd.DataFrame:
    grouped = frame.groupby(key, sort=False).agg(
        totalStudents=("total_students", "sum"),
        placedStudents=("placed_students", "sum"),
        averagePackage=("average_package", "mean"),
    )
    grouped["placementRate"] = _rate(grouped["placedStudents"], grouped["totalStudents"])
    return grouped.reset_index()


def branch_wise_stats(stats: list[dict]) -> list[dict]:
    frame = _stats_frame(stats)
    if frame.empty:
        return []
    frame["branch"] = frame["branch"].fillna("Unknown")
    return [
        {
            "branch": row["branch"],
            "totalStudents": int(row["totalStudents"]),
            "placedStudents": int(row["placedStudents"]),
            "placementRate": float(row["placementRate"]),
            "averagePackage": _as_int(row["averagePackage"]),
        }
        for _, row in _grouped(frame, "branch").iterrows()
    ]


def year_wise_trends(stats: list[dict]) -> list[dict]:
    frame = _stats_frame(stats)
    frame = frame.dropna(subset=["academic_year"]).copy()
    if frame.empty:
        return []
    frame["academic_year"] = frame["academic_year"].astype(str)
    grouped = _grouped(frame, "academic_year").sort_values("academic_year")
    return [
        {
            "year": row["academic_year"],
            "placementRate": float(row["placementRate"]),
            "averagePackage": _as_int(row["averagePackage"]),
        }
        for _, row in grouped.iterrows()
    ]


def category_distribution(trends: list[dict]) -> list[dict]:
    frame = pd.DataFrame(list(trends or []))
    if frame.empty or "category" not in frame.columns:
        return []
    if "demand_score" not in frame.columns:
        frame["demand_score"] = 0.0
    frame["demand_score"] = pd.to_numeric(frame["demand_score"], errors="coerce").fillna(0.0)
    grouped = frame.groupby("category", sort=False).agg(
        count=("demand_score", "size"),
        avgDemand=("demand_score", "mean"),
    )
    return [
        {"category": category, "count": int(row["count"]), "avgDemand": _as_int(row["avgDemand"])}
        for category, row in grouped.iterrows()
    ]


def _latest_readiness(student: dict) -> float:
    scores = student.get("career_readiness_scores") or []
    if not scores:
        return np.nan
    value = scores[0].get("overall_score")
    return float(value) if value else np.nan


def department_readiness(students: list[dict]) -> dict[str, dict[str, float | int]]:
    """Per-department placement counts and mean latest readiness score."""
    rows = [
        {
            "department": student.get("department") or "Unknown",
            "placed": any(
                (application or {}).get("status") == "accepted"
                for application in student.get("applications") or []
            ),
            "readiness": _latest_readiness(student),
        }
        for student in students or []
    ]
    if not rows:
        return {}
    frame = pd.DataFrame(rows)
    grouped = frame.groupby("department", sort=False).agg(
        totalStudents=("placed", "size"),
        placedStudents=("placed", "sum"),
        avgReadinessScore=("readiness", "mean"),
    )
    return {
        department: {
            "totalStudents": int(row["totalStudents"]),
            "placedStudents": int(row["placedStudents"]),
            "avgReadinessScore": 0.0 if pd.isna(row["avgReadinessScore"]) else float(row["avgReadinessScore"]),
        }
        for department, row in grouped.iterrows()
    }


def skill_gap_inputs(frame: pd.DataFrame) -> tuple[list[dict], dict[str, object]]:
    """Split an uploaded demand table into demand rows and a supply mapping."""
    if "skill_name" not in frame.columns:
        raise InvalidDataError("Skill demand table needs a skill_name column")
    supply = frame["supply"] if "supply" in frame.columns else pd.Series([0] * len(frame), index=frame.index)
    return frame.to_dict("records"), dict(zip(frame["skill_name"], supply))
