"""Deterministic resume/JD match scoring for when the AI answer is unusable.

The score blends the resume's ATS score, the JD analysis match score and the share
of JD gap skills the resume already lists, plus a constant baseline term:

    overall = 0.3*ats + 0.2*jd_match + 0.3*core_alignment + 0.2*50

The last term stands in for everything the two records cannot express (seniority,
domain, soft signals). It is a fixed design parameter that smooths scores towards
the middle of the range, not a placeholder. All weights live in scoring.yaml.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Any

from careerlens.core.scoring import get_scoring_value
from careerlens.schemas import JobAnalysisRecord, MatchResult, ResumeAnalysisRecord

FALLBACK_OBJECTION = "Not enough evidence of fundamentals or system design."
BOOST_WITH_GAPS = "+15 to +25 if key gaps closed."
BOOST_POLISH = "+5 to +10 with polish."


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_score(value: int, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, value))


def normalize_skill(value: Any) -> str:
    return str(value or "").lower().strip()


def classify_verdict(overall_score: int) -> str:
    strong = int(get_scoring_value("fallback.verdict_thresholds.strong_fit", 75))
    competitive = int(get_scoring_value("fallback.verdict_thresholds.competitive", 60))
    if overall_score >= strong:
        return "Strong Fit"
    if overall_score >= competitive:
        return "Competitive"
    return "Weak Fit"


def hiring_probability_for(overall_score: int) -> int:
    offset = int(get_scoring_value("fallback.hiring_probability_offset", 10))
    return clamp_score(overall_score - offset)


def compute_core_alignment(resume_skills: Iterable[str], jd_missing_skills: Iterable[str]) -> int:
    """Percentage of JD gap skills present in the resume; an empty JD list counts as 0 of 1."""
    owned = {normalize_skill(skill) for skill in resume_skills}
    required = [normalize_skill(skill) for skill in jd_missing_skills]
    present = sum(1 for skill in required if skill in owned)
    return round_half_up(present / max(1, len(required)) * 100)


def compute_overall_score(ats_score: int | None, jd_match_score: int | None, core_alignment: int) -> int:
    neutral = float(get_scoring_value("fallback.neutral_score", 50))
    baseline = float(get_scoring_value("fallback.baseline_score", 50))
    w_ats = float(get_scoring_value("fallback.weights.ats", 0.3))
    w_jd = float(get_scoring_value("fallback.weights.jd_match", 0.2))
    w_core = float(get_scoring_value("fallback.weights.core_alignment", 0.3))
    w_base = float(get_scoring_value("fallback.weights.baseline", 0.2))

    ats = neutral if ats_score is None else float(ats_score)
    jd_match = neutral if jd_match_score is None else float(jd_match_score)
    raw = ats * w_ats + jd_match * w_jd + core_alignment * w_core + baseline * w_base
    return clamp_score(round_half_up(raw))


def _as_resume(value: ResumeAnalysisRecord | Mapping[str, Any]) -> ResumeAnalysisRecord:
    if isinstance(value, ResumeAnalysisRecord):
        return value
    return ResumeAnalysisRecord.model_validate(value)


def _as_job(value: JobAnalysisRecord | Mapping[str, Any]) -> JobAnalysisRecord:
    if isinstance(value, JobAnalysisRecord):
        return value
    return JobAnalysisRecord.model_validate(value)


def deterministic_fallback(
    resume: ResumeAnalysisRecord | Mapping[str, Any],
    job: JobAnalysisRecord | Mapping[str, Any],
) -> MatchResult:
    resume = _as_resume(resume)
    job = _as_job(job)

    keyword_limit = int(get_scoring_value("fallback.limits.recommended_keywords", 8))
    missing_limit = int(get_scoring_value("fallback.limits.missing_skills", 8))
    strengths_limit = int(get_scoring_value("fallback.limits.strengths", 5))
    weaknesses_limit = int(get_scoring_value("fallback.limits.weaknesses", 5))
    recruiter_limit = int(get_scoring_value("fallback.limits.recruiter_strengths", 5))

    core_alignment = compute_core_alignment(resume.skills, job.missing_skills)
    overall_score = compute_overall_score(resume.ats_score, job.match_score, core_alignment)

    recommended = {normalize_skill(keyword) for keyword in job.recommended_keywords[:keyword_limit]}
    matching_skills = [skill for skill in resume.skills if normalize_skill(skill) in recommended]
    missing_skills = list(job.missing_skills[:missing_limit])

    return MatchResult(
        overall_score=overall_score,
        hiring_probability=hiring_probability_for(overall_score),
        verdict=classify_verdict(overall_score),
        role_category=str(get_scoring_value("fallback.role_category", "software-engineer")),
        competencies=[],
        strengths=list(resume.strengths[:strengths_limit]),
        weaknesses=list(resume.weaknesses[:weaknesses_limit]),
        matching_skills=matching_skills,
        missing_skills=missing_skills,
        recruiter_objections=[FALLBACK_OBJECTION],
        recruiter_strengths=list(job.strengths_based_on_jd[:recruiter_limit]),
        score_boost_estimate=BOOST_WITH_GAPS if missing_skills else BOOST_POLISH,
        job_title=job.job_title,
        resume_file_name=resume.file_name,
        target_role=resume.target_role,
        source="fallback",
    )
