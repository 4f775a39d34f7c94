from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from careerlens.schemas import (
    JobAnalysisRecord,
    RemovedBullet,
    ResumeAnalysisRecord,
    TailoredContent,
    TailoredResumeRecord,
    TailoredSection,
)
from careerlens.schemas.base import coerce_optional_str, coerce_str_list
from careerlens.storage import records as store

from .analysis_pair import load_analysis_pair
from .errors import ServiceError
from .llm import LLMError, json_completion, llm_enabled
from .prompts import ANALYST_SYSTEM_PROMPT, TAILOR_CUT_PROMPT, TAILORED_RESUME_PROMPT, to_prompt_json

logger = logging.getLogger(__name__)

JOB_DESCRIPTION_PROMPT_CHARS = 1200
RAW_PREVIEW_CHARS = 600

_RESUME_PROMPT_FIELDS = (
    "targetRole",
    "atsScore",
    "skills",
    "strengths",
    "weaknesses",
    "improvementChecklist",
    "summaryRewrite",
    "projectRewrites",
    "bulletRewrites",
)
_JOB_PROMPT_FIELDS = (
    "jobTitle",
    "jobDescription",
    "matchScore",
    "fitVerdict",
    "strengthsBasedOnJD",
    "missingSkills",
    "recommendedKeywords",
    "improvementTips",
)


def _prompt_fields(record: ResumeAnalysisRecord | JobAnalysisRecord, fields: tuple[str, ...]) -> dict[str, Any]:
    dumped = record.model_dump(mode="json", by_alias=True)
    return {field: dumped.get(field) for field in fields}


def _clean_text(value: Any) -> str | None:
    text = coerce_optional_str(value)
    if text is None:
        return None
    return text.replace("\r\n", "\n").strip()


def _sections(raw: Any) -> list[TailoredSection]:
    if not isinstance(raw, list):
        return []
    sections: list[TailoredSection] = []
    for entry in raw:
        if not isinstance(entry, Mapping):
            continue
        title = _clean_text(entry.get("title"))
        if not title:
            continue
        sections.append(TailoredSection(title=title, content=_clean_text(entry.get("content"))))
    return sections


def _removed_bullets(raw: Any) -> list[RemovedBullet]:
    if not isinstance(raw, list):
        return []
    removed: list[RemovedBullet] = []
    for entry in raw:
        if not isinstance(entry, Mapping):
            continue
        original = _clean_text(entry.get("original"))
        if original:
            removed.append(RemovedBullet(original=original, reason=_clean_text(entry.get("reason"))))
    return removed


def _require_llm() -> None:
    if not llm_enabled():
        raise LLMError("The AI service is not configured.", code="llm_disabled")


def _matching_match(user_id: str, resume_id: str, job_id: str) -> dict[str, Any] | None:
    for record in store.list_records(kind="match", user_id=user_id):
        if record.get("resumeId") == resume_id and record.get("jobId") == job_id:
            return record
    return None


def tailor_resume_content(*, user_id: str, resume_id: str, job_id: str) -> TailoredContent:
    """Recruiter-style cut of the analysed resume for one job. Nothing is stored."""
    resume, job = load_analysis_pair(user_id, resume_id, job_id)
    _require_llm()

    parsed, raw_text = json_completion(
        system_prompt=ANALYST_SYSTEM_PROMPT,
        user_prompt=TAILOR_CUT_PROMPT.format(
            resume_json=to_prompt_json(_prompt_fields(resume, _RESUME_PROMPT_FIELDS)),
            job_json=to_prompt_json(_prompt_fields(job, _JOB_PROMPT_FIELDS)),
        ),
        temperature=0.15,
        tool_slug="tailor-cut",
    )
    if raw_text is None:
        raise LLMError("The AI service could not produce a response. Try again.", code="llm_invalid")
    if parsed is None:
        logger.warning("tailor_cut_unparsable user=%s raw_len=%s", user_id, len(raw_text))
        raise ServiceError("AI response could not be parsed as JSON.", status_code=502)

    return TailoredContent(
        improved_summary=_clean_text(parsed.get("improvedSummary")),
        improved_skills_section=coerce_str_list(parsed.get("improvedSkillsSection")),
        kept_and_rewritten_bullets=coerce_str_list(parsed.get("keptAndRewrittenBullets")),
        removed_bullets_with_reasons=_removed_bullets(parsed.get("removedBulletsWithReasons")),
        notes_for_candidate=coerce_str_list(parsed.get("notesForCandidate")),
    )


def generate_tailored_resume(*, user_id: str, resume_id: str, job_id: str) -> TailoredResumeRecord:
    """Full tailored resume for one job, persisted to the user's tailored history."""
    resume, job = load_analysis_pair(user_id, resume_id, job_id)
    _require_llm()
    match = _matching_match(user_id, resume_id, job_id)

    parsed, raw_text = json_completion(
        system_prompt=ANALYST_SYSTEM_PROMPT,
        user_prompt=TAILORED_RESUME_PROMPT.format(
            resume_json=to_prompt_json(resume.model_dump(mode="json", by_alias=True)),
            job_json=to_prompt_json(job.model_dump(mode="json", by_alias=True)),
            match_json=to_prompt_json(match or {}),
            job_title=job.job_title or "Not given",
            job_description=job.job_description[:JOB_DESCRIPTION_PROMPT_CHARS],
        ),
        temperature=0.06,
        max_output_tokens=3000,
        tool_slug="tailored-resume",
    )
    if raw_text is None:
        raise LLMError("The AI service could not produce a response. Try again.", code="llm_invalid")

    if parsed is None:
        store.create_record(
            kind="tailored",
            user_id=user_id,
            payload=TailoredResumeRecord(resume_id=resume_id, job_id=job_id, raw_text=raw_text).model_dump(
                mode="json", by_alias=True
            ),
        )
        logger.warning("tailored_resume_unparsable user=%s preview=%r", user_id, raw_text[:RAW_PREVIEW_CHARS])
        raise ServiceError("AI returned invalid JSON. Raw output saved.", status_code=502)

    record = TailoredResumeRecord(
        resume_id=resume_id,
        job_id=job_id,
        headline=_clean_text(parsed.get("headline")),
        skills_ordered=parsed.get("skillsOrdered"),
        experience_sections=_sections(parsed.get("experienceSections")),
        project_sections=_sections(parsed.get("projectSections")),
        education_and_extras=_sections(parsed.get("educationAndExtras")),
        score_boost_suggestions=parsed.get("scoreBoostSuggestions"),
        full_text=_clean_text(parsed.get("fullText")),
        raw_text=raw_text,
    )
    saved = store.create_record(kind="tailored", user_id=user_id, payload=record.model_dump(mode="json", by_alias=True))
    logger.info("tailored_resume_saved user=%s id=%s used_match=%s", user_id, saved["id"], match is not None)
    return TailoredResumeRecord.model_validate(saved)


def tailored_history(user_id: str) -> list[TailoredResumeRecord]:
    return [
        TailoredResumeRecord.model_validate(item) for item in store.list_records(kind="tailored", user_id=user_id)
    ]


def get_tailored_resume(*, user_id: str, record_id: str) -> TailoredResumeRecord:
    record = store.get_record(kind="tailored", record_id=record_id, user_id=user_id)
    if record is None:
        raise ServiceError("Tailored resume not found.", status_code=404)
    return TailoredResumeRecord.model_validate(record)
