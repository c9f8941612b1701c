from __future__ import annotations

import logging
import os

import requests

from readiness.errors import ConfigurationError, RecordFetchError, StudentNotFoundError
from readiness.ingest import profile_from_record
from readiness.models import ReadinessScore, SkillGapEntry
from readiness.scoring import compute_readiness
from readiness.skill_gaps import DEFAULT_LIMIT, compute_skill_gaps, count_supply

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 12.0
STUDENT_SELECT = "*,academic_records(*),student_skills(*,skills(name)),projects(*),certifications(*)"


class RecordStore:
    """Reads student and skill records from the hosted database REST API."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    @classmethod
    def from_env(cls, session: requests.Session | None = None) -> "RecordStore":
        url = os.getenv("SUPABASE_URL")
        key = os.getenv("SUPABASE_SERVICE_ROLE_KEY")
        if not url or not key:
            raise ConfigurationError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")
        timeout = float(os.getenv("READINESS_HTTP_TIMEOUT", DEFAULT_TIMEOUT))
        return cls(url, key, session=session, timeout=timeout)

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    def _get(self, table: str, params: dict[str, str]) -> list[dict]:
        url = f"{self.base_url}/rest/v1/{table}"
        try:
            response = self.session.get(url, headers=self._headers(), params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Fetching %s failed: %s", table, exc)
            raise RecordFetchError(f"Could not load {table}") from exc
        if not isinstance(payload, list):
            raise RecordFetchError(f"Unexpected response shape for {table}")
        return payload

    def fetch_student(self, student_id: str) -> dict:
        rows = self._get("students", {"select": STUDENT_SELECT, "id": f"eq.{student_id}"})
        if not rows:
            raise StudentNotFoundError(student_id)
        return rows[0]

    def fetch_skill_demand(self) -> list[dict]:
        return self._get(
            "skill_demand_trends",
            {"select": "skill_name,job_postings_count,category", "order": "demand_score.desc"},
        )

    def fetch_skill_supply(self) -> dict[str, int]:
        return count_supply(self._get("student_skills", {"select": "skill_id,skills(name,category)"}))


def readiness_for_student(store: RecordStore, student_id: str) -> ReadinessScore:
    return compute_readiness(profile_from_record(store.fetch_student(student_id)))


def skill_gaps_for_organisation(store: RecordStore, limit: int | None = DEFAULT_LIMIT) -> list[SkillGapEntry]:
    return compute_skill_gaps(store.fetch_skill_demand(), store.fetch_skill_supply(), limit=limit)
