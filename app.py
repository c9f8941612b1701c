from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import pandas as pd
import streamlit as st

from readiness.analytics import skill_gap_inputs
from readiness.errors import ConfigurationError, InvalidDataError, RecordFetchError
from readiness.ingest import profile_from_record
from readiness.models import Category
from readiness.parsers import extract_profile_signals, merge_signals
from readiness.records import RecordStore
from readiness.recommendations import build_improvement_plan
from readiness.scoring import compute_readiness
from readiness.skill_gaps import skill_gap_report

APP_TITLE = "Placement Readiness"
APP_SUBTITLE = "Career readiness and skill-gap insights for campus placement"
ROOT_DIR = Path(__file__).resolve().parent
SAMPLE_GAPS_PATH = ROOT_DIR / "data" / "skill_demand_sample.json"
CATEGORY_LABELS = {
    Category.ACADEMIC: "Academic",
    Category.SKILLS: "Skills",
    Category.EXPERIENCE: "Experience",
    Category.SOFT_SKILLS: "Soft Skills",
}
SCENARIO_PRESETS = {
    "Final-year student": {
        "cgpa": 8.5,
        "sgpas": "8.2, 8.6, 8.9",
        "skills": "Python, SQL, React",
        "verified_certs": 2,
        "unverified_certs": 1,
        "projects": 2,
        "linkedin_url": "https://linkedin.com/in/student",
        "github_url": "",
        "portfolio_url": "",
        "bio": "",
    },
    "Internship-ready": {
        "cgpa": 9.1,
        "sgpas": "9.0, 9.2, 9.3, 9.1",
        "skills": "Python, Java, SQL, Docker, AWS, Git, React, Node.js, Machine Learning, TypeScript",
        "verified_certs": 5,
        "unverified_certs": 0,
        "projects": 4,
        "linkedin_url": "https://linkedin.com/in/ready",
        "github_url": "https://github.com/ready",
        "portfolio_url": "https://ready.dev",
        "bio": "Full-stack developer",
    },
}

logging.basicConfig(level=os.getenv("READINESS_LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)


def default_form_values() -> dict:
    return dict(SCENARIO_PRESETS["Final-year student"])


def ensure_state():
    if "readiness" not in st.session_state:
        st.session_state["readiness"] = None
    if "form_defaults" not in st.session_state:
        st.session_state["form_defaults"] = default_form_values()


def _split(values: str) -> list[str]:
    return [value.strip() for value in (values or "").split(",") if value.strip()]


def record_from_form(form: dict) -> dict:
    return {
        "cgpa": form["cgpa"],
        "academic_records": [
            {"semester": index + 1, "sgpa": sgpa} for index, sgpa in enumerate(_split(form["sgpas"]))
        ],
        "skills": _split(form["skills"]),
        "certifications": [{"verified": True}] * int(form["verified_certs"])
        + [{"verified": False}] * int(form["unverified_certs"]),
        "projects": [f"Project {index + 1}" for index in range(int(form["projects"]))],
        "linkedin_url": form["linkedin_url"],
        "github_url": form["github_url"],
        "portfolio_url": form["portfolio_url"],
        "bio": form["bio"],
    }


def load_sample_gaps() -> dict:
    with SAMPLE_GAPS_PATH.open("r", encoding="utf-8") as f:
        return json.load(f)


def export_payload(record: dict, readiness) -> dict:
    profile = profile_from_record(record)
    return {
        "student": {
            "cgpa": profile.cgpa,
            "semesters": len(profile.academic_records),
            "skills": profile.skills,
            "verified_certifications": profile.verified_certifications,
            "certifications": len(profile.certifications),
            "projects": len(profile.projects),
            "profile_links": profile.profile_links.present(),
        },
        "readiness": readiness.as_dict(),
        "improvement_plan": build_improvement_plan(readiness.sub_scores()),
    }


def render_intake():
    defaults = st.session_state["form_defaults"]
    with st.expander("Section A - Student Intake", expanded=True):
        with st.form("intake_form"):
            c1, c2 = st.columns(2)
            with c1:
                cgpa = st.number_input("CGPA", min_value=0.0, max_value=10.0, value=float(defaults["cgpa"]), step=0.1)
                sgpas = st.text_input("SGPA history (comma separated)", value=defaults["sgpas"])
                skills = st.text_area("Skills (comma separated)", value=defaults["skills"])
                projects = st.number_input("Projects completed", min_value=0, max_value=50, value=int(defaults["projects"]))
                verified_certs = st.number_input("Verified certifications", min_value=0, max_value=50, value=int(defaults["verified_certs"]))
                unverified_certs = st.number_input("Self-reported certifications", min_value=0, max_value=50, value=int(defaults["unverified_certs"]))
            with c2:
                linkedin_url = st.text_input("LinkedIn", value=defaults["linkedin_url"])
                github_url = st.text_input("GitHub", value=defaults["github_url"])
                portfolio_url = st.text_input("Portfolio", value=defaults["portfolio_url"])
                bio = st.text_area("Bio", value=defaults["bio"])
                uploaded_file = st.file_uploader("Resume upload (optional)", type=["pdf", "docx", "txt"])
            submitted = st.form_submit_button("Calculate readiness")

    if not submitted:
        return

    form = {
        "cgpa": cgpa,
        "sgpas": sgpas,
        "skills": skills,
        "projects": projects,
        "verified_certs": verified_certs,
        "unverified_certs": unverified_certs,
        "linkedin_url": linkedin_url,
        "github_url": github_url,
        "portfolio_url": portfolio_url,
        "bio": bio,
    }
    st.session_state["form_defaults"] = form
    record = record_from_form(form)
    if uploaded_file:
        record = merge_signals(record, extract_profile_signals(uploaded_file))
    st.session_state["record"] = record
    st.session_state["readiness"] = compute_readiness(record)


def render_lookup():
    with st.expander("Load student by id", expanded=False):
        student_id = st.text_input("Student id")
        if st.button("Fetch and score") and student_id:
            try:
                store = RecordStore.from_env()
                record = store.fetch_student(student_id.strip())
            except ConfigurationError:
                st.warning("Record store is not configured. Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY.")
                return
            except RecordFetchError as exc:
                st.error(f"Could not load profile: {exc}")
                return
            st.session_state["record"] = record
            st.session_state["readiness"] = compute_readiness(record)
            logger.info("Scored student %s", student_id.strip())


def render_dashboard():
    readiness = st.session_state.get("readiness")
    if readiness is None:
        st.info("Complete Section A to view the readiness dashboard.")
        return

    with st.expander("Section B - Readiness Dashboard", expanded=True):
        c1, c2 = st.columns([1, 2])
        c1.metric("Overall Readiness", f"{readiness.overall_score}/100")
        c1.progress(readiness.overall_score / 100.0)
        scores_df = pd.DataFrame(
            [
                {"Category": CATEGORY_LABELS[category], "Score": score}
                for category, score in readiness.sub_scores().items()
            ]
        )
        c2.bar_chart(scores_df.set_index("Category"))
        st.dataframe(scores_df, use_container_width=True, hide_index=True)

    with st.expander("Section C - Strengths, Weaknesses and Next Steps", expanded=True):
        a, b, c = st.columns(3)
        a.markdown("**Strengths**")
        for item in readiness.strengths or ("None yet",):
            a.write(f"- {item}")
        b.markdown("**Weaknesses**")
        for item in readiness.weaknesses or ("None",):
            b.write(f"- {item}")
        c.markdown("**Next steps**")
        for item in readiness.next_steps:
            c.write(f"- {item}")
        st.markdown("**Recommendations**")
        for item in readiness.recommendations:
            st.write(f"- {item}")

    record = st.session_state.get("record") or {}
    report = export_payload(record, readiness)
    st.download_button(
        "Download Readiness JSON",
        data=json.dumps(report, indent=2),
        file_name="readiness_report.json",
        mime="application/json",
    )


def render_skill_gaps():
    st.caption("Upload a CSV with skill_name, job_postings_count, category and supply columns, or use the sample data.")
    uploaded = st.file_uploader("Skill demand CSV", type=["csv"], key="gap_csv")
    limit = st.slider("Top N gaps", 1, 25, 10)
    if uploaded:
        try:
            demand, supply = skill_gap_inputs(pd.read_csv(uploaded))
        except InvalidDataError as exc:
            st.error(f"Could not read skill demand CSV: {exc}")
            return
    else:
        sample = load_sample_gaps()
        demand, supply = sample["demand"], sample["supply"]

    report = skill_gap_report(demand, supply, limit=limit)
    top = pd.DataFrame(report["topGaps"])
    if top.empty:
        st.success("No skill shortfalls found.")
        return
    st.bar_chart(top.set_index("skillName")[["demand", "supply"]])
    st.dataframe(top, use_container_width=True, hide_index=True)
    st.markdown("**Training priorities**")
    for item in report["recommendations"]:
        st.write(f"- [{item['priority']}] {item['recommendation']}")


st.set_page_config(page_title=APP_TITLE, layout="wide")
st.title(APP_TITLE)
st.caption(APP_SUBTITLE)
ensure_state()

with st.sidebar:
    page = st.radio("Go to", ["Student Readiness", "Skill Gap Analysis"])
    preset = st.selectbox("Load preset profile", list(SCENARIO_PRESETS.keys()))
    if st.button("Apply Preset"):
        st.session_state["form_defaults"] = dict(SCENARIO_PRESETS[preset])
        st.success(f"Loaded preset: {preset}")

if page == "Student Readiness":
    render_lookup()
    render_intake()
    render_dashboard()
else:
    render_skill_gaps()
