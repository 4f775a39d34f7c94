from __future__ import annotations

import logging

from careerlens.parsing import build_intro, detect_profile, extract_company_name, first_project, polish_cover_letter

from .analysis_pair import load_analysis_pair
from .llm import text_completion_required
from .prompts import ANALYST_SYSTEM_PROMPT, COVER_LETTER_PROMPT

logger = logging.getLogger(__name__)


def generate_cover_letter(*, user_id: str, resume_id: str, job_id: str) -> str:
    resume, job = load_analysis_pair(user_id, resume_id, job_id)

    profile = detect_profile(resume.analysis_text, resume.skills)
    company = extract_company_name(job.job_description)
    project = first_project(resume.project_rewrites, resume.bullet_rewrites)

    raw_text = text_completion_required(
        system_prompt=ANALYST_SYSTEM_PROMPT,
        user_prompt=COVER_LETTER_PROMPT.format(
            intro=build_intro(profile, job.job_title, company),
            project=project or "the most relevant work from the resume",
        ),
        temperature=0.01,
        tool_slug="cover-letter",
    )
    letter = polish_cover_letter(raw_text)
    logger.info("cover_letter_generated user=%s profile=%s company_found=%s", user_id, profile, bool(company))
    return letter
