from __future__ import annotations

import pytest
import requests

from readiness.errors import ConfigurationError, RecordFetchError, StudentNotFoundError
from readiness.records import RecordStore, readiness_for_student, skill_gaps_for_organisation


class FakeResponse:
    def __init__(self, payload, status_code: int = 200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, responses: dict[str, FakeResponse]):
        self.responses = responses
        self.calls: list[tuple[str, dict]] = []

    def get(self, url, headers=None, params=None, timeout=None):
        self.calls.append((url, params))
        table = url.rsplit("/", 1)[-1]
        response = self.responses.get(table)
        if response is None:
            raise requests.ConnectionError("no route")
        return response


STUDENT_ROW = {
    "id": "stu-1",
    "cgpa": 8.0,
    "academic_records": [{"semester": 1, "sgpa": 8.0}],
    "student_skills": [{"skills": {"name": "Python"}}] * 4,
    "certifications": [{"verified": True}, {"verified": False}],
    "projects": [{"title": "A"}, {"title": "B"}, {"title": "C"}],
    "linkedin_url": "https://linkedin.com/in/stu",
    "github_url": "https://github.com/stu",
    "portfolio_url": None,
    "bio": "Backend developer",
}


def _store(responses: dict[str, FakeResponse]) -> RecordStore:
    return RecordStore("https://db.example.org/", "service-key", session=FakeSession(responses))


def test_readiness_for_student_end_to_end():
    store = _store({"students": FakeResponse([STUDENT_ROW])})
    result = readiness_for_student(store, "stu-1")
    assert result.academic_score == 80
    assert result.skills_score == 30
    assert result.experience_score == 65
    assert result.soft_skills_score == 75
    url, params = store.session.calls[0]
    assert url == "https://db.example.org/rest/v1/students"
    assert params["id"] == "eq.stu-1"


def test_missing_student_raises_not_found():
    store = _store({"students": FakeResponse([])})
    with pytest.raises(StudentNotFoundError):
        store.fetch_student("ghost")


def test_http_errors_are_wrapped():
    store = _store({"students": FakeResponse({"message": "boom"}, status_code=500)})
    with pytest.raises(RecordFetchError) as excinfo:
        store.fetch_student("stu-1")
    assert isinstance(excinfo.value.__cause__, requests.HTTPError)


def test_connection_errors_are_wrapped():
    store = _store({})
    with pytest.raises(RecordFetchError):
        store.fetch_skill_demand()


def test_skill_gaps_for_organisation():
    store = _store(
        {
            "skill_demand_trends": FakeResponse(
                [
                    {"skill_name": "Python", "job_postings_count": 80, "category": "Programming"},
                    {"skill_name": "Go", "job_postings_count": 15, "category": "Programming"},
                ]
            ),
            "student_skills": FakeResponse([{"skills": {"name": "Python"}}] * 20 + [{"skills": {"name": "Go"}}] * 10),
        }
    )
    entries = skill_gaps_for_organisation(store)
    assert [(e.skill_name, e.gap, e.severity.value) for e in entries] == [
        ("Python", 60, "Critical"),
        ("Go", 5, "Low"),
    ]


def test_from_env_requires_settings(monkeypatch):
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
    with pytest.raises(ConfigurationError):
        RecordStore.from_env()


def test_from_env_reads_settings(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://db.example.org")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "k")
    monkeypatch.setenv("READINESS_HTTP_TIMEOUT", "3")
    store = RecordStore.from_env(session=FakeSession({}))
    assert store.base_url == "https://db.example.org"
    assert store.timeout == 3.0
