from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from careerlens.core.scoring import get_scoring_value
from careerlens.schemas import (
    Competency,
    JobAnalysisRecord,
    MatchResult,
    ResumeAnalysisRecord,
    ScoringBreakdown,
)
from careerlens.schemas.base import coerce_optional_str, coerce_str_list

from .fallback import (
    classify_verdict,
    clamp_score,
    compute_core_alignment,
    compute_overall_score,
    hiring_probability_for,
    round_half_up,
)

logger = logging.getLogger(__name__)

VERDICTS = ("Strong Fit", "Competitive", "Weak Fit")
DEFAULT_ROLE_CATEGORY = "software-engineer"


def _to_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _bounded(value: Any, low: int, high: int) -> int | None:
    number = _to_number(value)
    if number is None or not math.isfinite(number):
        return None
    return clamp_score(round_half_up(number), low, high)


def _competencies(raw: Any, limit: int) -> list[Competency]:
    if not isinstance(raw, list):
        return []
    items: list[Competency] = []
    for entry in raw[:limit]:
        if not isinstance(entry, Mapping):
            continue
        name = str(entry.get("name") or "").strip()
        if not name:
            continue
        resume_level = _bounded(entry.get("resumeLevel"), 0, 10)
        jd_level = _bounded(entry.get("jdLevel"), 0, 10)
        gap = _bounded(entry.get("gap"), -10, 10)
        if gap is None and resume_level is not None and jd_level is not None:
            gap = clamp_score(jd_level - resume_level, -10, 10)
        items.append(Competency(name=name, resume_level=resume_level, jd_level=jd_level, gap=gap))
    return items


def sanitize_match_payload(
    payload: Mapping[str, Any],
    resume: ResumeAnalysisRecord,
    job: JobAnalysisRecord,
) -> MatchResult:
    """Bound an AI-produced match payload to the MatchResult contract."""
    short_limit = int(get_scoring_value("match.limits.short_lists", 8))
    skill_limit = int(get_scoring_value("match.limits.skill_lists", 40))
    boost_chars = int(get_scoring_value("match.limits.score_boost_chars", 200))
    allowed_roles = get_scoring_value("match.role_categories", None) or [DEFAULT_ROLE_CATEGORY]

    overall_score = _bounded(payload.get("overallScore"), 0, 100)
    if overall_score is None:
        core_alignment = compute_core_alignment(resume.skills, job.missing_skills)
        overall_score = compute_overall_score(resume.ats_score, job.match_score, core_alignment)
        logger.info("match_overall_score_recomputed resume_id=%s job_id=%s", resume.id, job.id)

    hiring_probability = _bounded(payload.get("hiringProbability"), 0, 100)
    if hiring_probability is None:
        hiring_probability = hiring_probability_for(overall_score)

    role_category = payload.get("roleCategory")
    if role_category not in allowed_roles:
        role_category = DEFAULT_ROLE_CATEGORY

    verdict = payload.get("verdict")
    if verdict not in VERDICTS:
        verdict = classify_verdict(overall_score)

    boost = payload.get("scoreBoostEstimate")
    score_boost_estimate = str(boost)[:boost_chars] if boost else None

    return MatchResult(
        overall_score=overall_score,
        hiring_probability=hiring_probability,
        verdict=verdict,
        role_category=role_category,
        competencies=_competencies(
            payload.get("competencies"), int(get_scoring_value("match.limits.competencies", 12))
        ),
        strengths=coerce_str_list(payload.get("strengths"))[:short_limit],
        weaknesses=coerce_str_list(payload.get("weaknesses"))[:short_limit],
        matching_skills=coerce_str_list(payload.get("matchingSkills"))[:skill_limit],
        missing_skills=coerce_str_list(payload.get("missingSkills"))[:skill_limit],
        recruiter_objections=coerce_str_list(payload.get("recruiterObjections"))[:short_limit],
        recruiter_strengths=coerce_str_list(payload.get("recruiterStrengths"))[:short_limit],
        score_boost_estimate=score_boost_estimate,
        job_title=coerce_optional_str(payload.get("jobTitle")) or job.job_title,
        resume_file_name=coerce_optional_str(payload.get("resumeFileName")) or resume.file_name,
        target_role=coerce_optional_str(payload.get("targetRole")) or resume.target_role,
        source="ai",
    )


def sanitize_resume_payload(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Bound an AI-produced resume analysis; returns ResumeAnalysisRecord fields."""
    ats_low, ats_high = get_scoring_value("resume.ats_score_range", [45, 80])
    part_low, part_high = get_scoring_value("resume.breakdown_range", [30, 90])

    raw_breakdown = payload.get("scoringBreakdown")
    if not isinstance(raw_breakdown, Mapping):
        raw_breakdown = {}
    breakdown = ScoringBreakdown(
        keyword_match=_bounded(raw_breakdown.get("keywordMatch"), part_low, part_high),
        action_verbs=_bounded(raw_breakdown.get("actionVerbs"), part_low, part_high),
        quantified_results=_bounded(raw_breakdown.get("quantifiedResults"), part_low, part_high),
        formatting_clarity=_bounded(raw_breakdown.get("formattingClarity"), part_low, part_high),
        relevance_alignment=_bounded(raw_breakdown.get("relevanceAlignment"), part_low, part_high),
    )

    ats_score = _bounded(payload.get("atsScore"), ats_low, ats_high)
    if ats_score is None:
        parts = [value for value in breakdown.model_dump().values() if value is not None]
        if parts:
            ats_score = clamp_score(round_half_up(sum(parts) / len(parts)), ats_low, ats_high)

    return {
        "ats_score": ats_score,
        "scoring_breakdown": breakdown,
        "skills": coerce_str_list(payload.get("skills")),
        "strengths": coerce_str_list(payload.get("strengths")),
        "weaknesses": coerce_str_list(payload.get("weaknesses")),
        "missing_keywords": coerce_str_list(payload.get("missingKeywords")),
        "suggested_roles": coerce_str_list(payload.get("suggestedRoles")),
        "improvement_checklist": coerce_str_list(payload.get("improvementChecklist")),
        "project_rewrites": coerce_str_list(payload.get("projectRewrites")),
        "bullet_rewrites": coerce_str_list(payload.get("bulletRewrites")),
        "recruiter_impression": coerce_optional_str(payload.get("recruiterImpression")),
        "summary_rewrite": coerce_optional_str(payload.get("summaryRewrite")),
    }
