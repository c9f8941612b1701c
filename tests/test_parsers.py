from __future__ import annotations

from io import BytesIO

from readiness.parsers import extract_profile_signals, merge_signals


class BadFile:
    name = "broken.pdf"

    def read(self):
        raise ValueError("cannot read")


def test_parser_fallback_on_malformed_file():
    result = extract_profile_signals(BadFile())
    assert result["skills"] == []
    assert result["profile_links"] == {}


def test_parser_fallback_on_corrupt_pdf():
    payload = BytesIO(b"this is not a pdf")
    payload.name = "resume.pdf"
    assert extract_profile_signals(payload)["skills"] == []


def test_parser_handles_txt():
    payload = BytesIO(
        b"Built REST APIs in Python and SQL. Portfolio: https://jane.dev "
        b"github.com/jane linkedin.com/in/jane-doe"
    )
    payload.name = "resume.txt"
    result = extract_profile_signals(payload)
    assert result["skills"] == ["Python", "SQL", "Git"]
    assert result["profile_links"] == {
        "linkedin": "https://linkedin.com/in/jane-doe",
        "github": "https://github.com/jane",
        "portfolio": "https://jane.dev",
    }


def test_keywords_need_word_boundaries():
    payload = BytesIO(b"Wrote HTML templates and JavaScript widgets.")
    payload.name = "resume.txt"
    skills = extract_profile_signals(payload)["skills"]
    assert "JavaScript" in skills
    assert "Java" not in skills
    assert "Machine Learning" not in skills


def test_merge_signals_keeps_existing_values():
    record = {"linkedin_url": "https://linkedin.com/in/original", "skills": []}
    signals = {
        "skills": ["Python"],
        "profile_links": {"linkedin": "https://linkedin.com/in/parsed", "github": "https://github.com/p"},
    }
    merged = merge_signals(record, signals)
    assert merged["linkedin_url"] == "https://linkedin.com/in/original"
    assert merged["github_url"] == "https://github.com/p"
    assert merged["skills"] == ["Python"]
    assert record["skills"] == []
