from __future__ import annotations

import logging
import re

from careerlens.schemas import ResumeAnalysisRecord
from careerlens.scoring import sanitize_resume_payload
from careerlens.storage import records as store

from .errors import ServiceError
from .llm import LLMError, json_completion, llm_enabled
from .prompts import ANALYST_SYSTEM_PROMPT, RESUME_ANALYSIS_PROMPT

logger = logging.getLogger(__name__)

DEFAULT_TARGET_ROLE = "Software Engineer"
MIN_RESUME_CHARS = 50
_HTML_TAG = re.compile(r"</?[^>]+(>|$)")


def clean_target_role(value: str | None) -> str:
    role = _HTML_TAG.sub("", value or "").strip()[:150]
    return role or DEFAULT_TARGET_ROLE


def analyze_resume(
    *,
    user_id: str,
    resume_text: str,
    file_name: str | None = None,
    target_role: str | None = None,
) -> ResumeAnalysisRecord:
    text = (resume_text or "").strip()
    if len(text) < MIN_RESUME_CHARS:
        raise ServiceError("Resume text is too short or missing.", status_code=400)
    if not llm_enabled():
        raise LLMError("The AI service is not configured.", code="llm_disabled")

    role = clean_target_role(target_role)
    parsed, raw_text = json_completion(
        system_prompt=ANALYST_SYSTEM_PROMPT,
        user_prompt=RESUME_ANALYSIS_PROMPT.format(target_role=role, resume_text=text),
        temperature=0.08,
        max_output_tokens=2000,
        tool_slug="resume-analysis",
    )
    if raw_text is None:
        raise LLMError("The AI service could not produce a response. Try again.", code="llm_invalid")

    if parsed is None:
        # Keep the raw answer for debugging; the structured fields stay empty.
        store.create_record(
            kind="resume",
            user_id=user_id,
            payload=ResumeAnalysisRecord(
                file_name=file_name, target_role=role, analysis_text=raw_text
            ).model_dump(mode="json", by_alias=True),
        )
        logger.warning("resume_analysis_unparsable user=%s raw_len=%s", user_id, len(raw_text))
        raise ServiceError("AI returned an unparsable response. Raw output saved for debugging.", status_code=502)

    record = ResumeAnalysisRecord(
        file_name=file_name,
        target_role=role,
        analysis_text=raw_text,
        **sanitize_resume_payload(parsed),
    )
    saved = store.create_record(
        kind="resume", user_id=user_id, payload=record.model_dump(mode="json", by_alias=True)
    )
    logger.info("resume_analysis_saved user=%s id=%s ats=%s", user_id, saved["id"], record.ats_score)
    return ResumeAnalysisRecord.model_validate(saved)


def resume_history(user_id: str) -> list[ResumeAnalysisRecord]:
    return [ResumeAnalysisRecord.model_validate(item) for item in store.list_records(kind="resume", user_id=user_id)]
