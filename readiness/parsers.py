from __future__ import annotations

import logging
import re
from io import BytesIO

import pdfplumber
from docx import Document

logger = logging.getLogger(__name__)

SKILL_KEYWORDS = {
    "Python": ["python"],
    "Java": ["java"],
    "JavaScript": ["javascript", "js"],
    "TypeScript": ["typescript"],
    "C++": ["c++", "cpp"],
    "SQL": ["sql", "mysql", "postgresql"],
    "React": ["react", "react.js"],
    "Node.js": ["node.js", "nodejs"],
    "Machine Learning": ["machine learning", "ml"],
    "Data Analysis": ["data analysis", "pandas", "analytics"],
    "Cloud": ["aws", "azure", "gcp"],
    "Docker": ["docker", "kubernetes"],
    "Git": ["git", "github"],
    "Communication": ["communication", "presentation"],
}

URL_PATTERN = re.compile(r"(?:https?://|www\.)[^\s<>\"')]+", re.IGNORECASE)
LINKEDIN_PATTERN = re.compile(r"(?:https?://)?(?:[a-z]{2,3}\.)?linkedin\.com/in/[\w\-%]+/?", re.IGNORECASE)
GITHUB_PATTERN = re.compile(r"(?:https?://)?(?:www\.)?github\.com/[\w\-]+/?", re.IGNORECASE)


def _empty_signals() -> dict:
    return {"skills": [], "profile_links": {}, "text_excerpt": ""}


def _read_pdf(file_bytes: bytes) -> str:
    text = []
    with pdfplumber.open(BytesIO(file_bytes)) as pdf:
        for page in pdf.pages:
            text.append(page.extract_text() or "")
    return "\n".join(text)


def _read_docx(file_bytes: bytes) -> str:
    doc = Document(BytesIO(file_bytes))
    return "\n".join(p.text for p in doc.paragraphs if p.text)


def _read_txt(file_bytes: bytes) -> str:
    return file_bytes.decode("utf-8", errors="ignore")


def _keyword_pattern(keyword: str) -> re.Pattern:
    return re.compile(rf"(?<![\w+#.]){re.escape(keyword)}(?![\w+#])", re.IGNORECASE)


def _extract_skills(text: str) -> list[str]:
    return [
        skill
        for skill, keywords in SKILL_KEYWORDS.items()
        if any(_keyword_pattern(keyword).search(text) for keyword in keywords)
    ]


def _normalise_url(url: str) -> str:
    url = url.rstrip(".,;")
    return url if url.lower().startswith("http") else f"https://{url}"


def _extract_links(text: str) -> dict[str, str]:
    links: dict[str, str] = {}
    linkedin = LINKEDIN_PATTERN.search(text)
    if linkedin:
        links["linkedin"] = _normalise_url(linkedin.group(0))
    github = GITHUB_PATTERN.search(text)
    if github:
        links["github"] = _normalise_url(github.group(0))
    for match in URL_PATTERN.finditer(text):
        url = match.group(0).lower()
        if "linkedin.com" not in url and "github.com" not in url:
            links["portfolio"] = _normalise_url(match.group(0))
            break
    return links


def extract_profile_signals(file) -> dict:
    if file is None:
        return _empty_signals()

    try:
        file_bytes = file.read()
    except (OSError, ValueError) as exc:
        logger.warning("Could not read uploaded resume: %s", exc)
        return _empty_signals()

    filename = (getattr(file, "name", "") or "").lower()
    try:
        if filename.endswith(".pdf"):
            text = _read_pdf(file_bytes)
        elif filename.endswith(".docx"):
            text = _read_docx(file_bytes)
        else:
            text = _read_txt(file_bytes)
    except Exception as exc:
        logger.warning("Could not parse resume %s: %s", filename or "<unnamed>", exc)
        text = ""

    if not text.strip():
        return _empty_signals()

    return {
        "skills": _extract_skills(text),
        "profile_links": _extract_links(text),
        "text_excerpt": text[:350],
    }


def merge_signals(record: dict, signals: dict) -> dict:
    """Fill skills and profile links missing from ``record`` with parsed resume signals."""
    merged = dict(record)
    if not merged.get("skills") and not merged.get("student_skills") and signals.get("skills"):
        merged["skills"] = list(signals["skills"])
    columns = {"linkedin": "linkedin_url", "github": "github_url", "portfolio": "portfolio_url"}
    for name, url in (signals.get("profile_links") or {}).items():
        column = columns.get(name)
        if column and not merged.get(column):
            merged[column] = url
    return merged
