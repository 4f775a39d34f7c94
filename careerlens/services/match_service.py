from __future__ import annotations

import logging

from careerlens.schemas import JobAnalysisRecord, MatchRecord, MatchResult, ResumeAnalysisRecord
from careerlens.scoring import deterministic_fallback, sanitize_match_payload
from careerlens.storage import records as store

from .analysis_pair import load_analysis_pair
from .llm import json_completion
from .prompts import ANALYST_SYSTEM_PROMPT, MATCH_PROMPT, to_prompt_json

logger = logging.getLogger(__name__)


def score_match(
    resume: ResumeAnalysisRecord,
    job: JobAnalysisRecord,
) -> MatchResult:
    """AI match when a usable JSON answer comes back, deterministic fallback otherwise."""
    parsed, raw_text = json_completion(
        system_prompt=ANALYST_SYSTEM_PROMPT,
        user_prompt=MATCH_PROMPT.format(
            resume_json=to_prompt_json(resume.model_dump(mode="json", by_alias=True)),
            job_json=to_prompt_json(job.model_dump(mode="json", by_alias=True)),
        ),
        temperature=0.12,
        tool_slug="match",
    )
    if parsed is None:
        logger.info(
            "match_fallback_used resume_id=%s job_id=%s had_response=%s",
            resume.id,
            job.id,
            raw_text is not None,
        )
        return deterministic_fallback(resume, job)
    return sanitize_match_payload(parsed, resume, job)


def analyze_match(*, user_id: str, resume_id: str, job_id: str) -> MatchRecord:
    resume, job = load_analysis_pair(user_id, resume_id, job_id)
    result = score_match(resume, job)
    payload = {
        **result.model_dump(mode="json", by_alias=True),
        "resumeId": resume_id,
        "jobId": job_id,
    }
    saved = store.create_record(kind="match", user_id=user_id, payload=payload)
    logger.info(
        "match_saved user=%s id=%s source=%s score=%s",
        user_id,
        saved["id"],
        result.source,
        result.overall_score,
    )
    return MatchRecord.model_validate(saved)


def match_history(user_id: str) -> list[MatchRecord]:
    return [MatchRecord.model_validate(item) for item in store.list_records(kind="match", user_id=user_id)]
