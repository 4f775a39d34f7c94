from __future__ import annotations

import logging
from collections.abc import Sequence

from careerlens.parsing import JD_SECTION_TITLES, parse_fixed_sections
from careerlens.schemas import JobAnalysisRecord, ParsedSection
from careerlens.storage import records as store

from .errors import ServiceError
from .llm import json_completion
from .prompts import ANALYST_SYSTEM_PROMPT, JOB_ANALYSIS_PROMPT, to_prompt_json

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_CHARS = 20


def analyze_job(*, user_id: str, job_title: str | None, job_description: str) -> JobAnalysisRecord:
    description = (job_description or "").strip()
    if len(description) < MIN_DESCRIPTION_CHARS:
        raise ServiceError("Job description is too short or missing.", status_code=400)

    latest_resume = store.latest_record(kind="resume", user_id=user_id)
    if latest_resume is None:
        raise ServiceError("No resume analysis found. Analyze a resume first.", status_code=400)

    parsed, raw_text = json_completion(
        system_prompt=ANALYST_SYSTEM_PROMPT,
        user_prompt=JOB_ANALYSIS_PROMPT.format(
            job_title=job_title or "Not specified",
            job_description=description,
            resume_json=to_prompt_json(latest_resume),
        ),
        temperature=0.15,
        tool_slug="jd-analysis",
    )
    if parsed is None:
        logger.warning("jd_analysis_unstructured user=%s has_raw=%s", user_id, raw_text is not None)
        parsed = {}

    record = JobAnalysisRecord(
        job_title=job_title,
        job_description=description,
        match_score=parsed.get("matchScore"),
        fit_verdict=parsed.get("fitVerdict"),
        strengths_based_on_jd=parsed.get("strengthsBasedOnJD"),
        missing_skills=parsed.get("missingSkills"),
        recommended_keywords=parsed.get("recommendedKeywords"),
        tailored_bullet_suggestions=parsed.get("tailoredBulletSuggestions"),
        improvement_tips=parsed.get("improvementTips"),
        compared_resume_id=latest_resume["id"],
        analysis_text=raw_text or "",
    )
    saved = store.create_record(kind="job", user_id=user_id, payload=record.model_dump(mode="json", by_alias=True))
    logger.info("jd_analysis_saved user=%s id=%s match_score=%s", user_id, saved["id"], record.match_score)
    return JobAnalysisRecord.model_validate(saved)


def job_history(user_id: str) -> list[JobAnalysisRecord]:
    return [JobAnalysisRecord.model_validate(item) for item in store.list_records(kind="job", user_id=user_id)]


def parse_job_analysis_text(text: str | None, headings: Sequence[str] | None = None) -> list[ParsedSection]:
    return parse_fixed_sections(text, headings or JD_SECTION_TITLES)
