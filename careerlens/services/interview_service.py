from __future__ import annotations

import json
import logging
import re
import uuid

from careerlens.parsing import detect_role_category, extract_json_payload, extract_overall_score, parse_evaluation
from careerlens.schemas import InterviewRecord, ParsedEvaluation
from careerlens.storage import records as store

from .errors import ServiceError
from .llm import text_completion_required
from .prompts import ANALYST_SYSTEM_PROMPT, EVALUATION_PROMPT, QUESTIONS_PROMPT

logger = logging.getLogger(__name__)

_TEMPERATURE_BY_DIFFICULTY = {"easy": 0.7, "medium": 0.85}
_LEADING_NUMBER = re.compile(r"^\d+[\.\)\-]\s*")


def _split_plain_questions(raw_text: str) -> list[str]:
    lines = (_LEADING_NUMBER.sub("", line).strip() for line in raw_text.splitlines())
    return [line for line in lines if len(line) > 5]


def generate_questions(*, role: str, difficulty: str, question_count: int) -> list[str]:
    if not role or not difficulty or question_count < 1:
        raise ServiceError("role, difficulty and questionCount are required.", status_code=400)

    raw_text = text_completion_required(
        system_prompt=ANALYST_SYSTEM_PROMPT,
        user_prompt=QUESTIONS_PROMPT.format(
            count=question_count,
            role=role,
            category=detect_role_category(role),
            difficulty=difficulty,
            seed=uuid.uuid4().hex,
        ),
        temperature=_TEMPERATURE_BY_DIFFICULTY.get(difficulty.lower(), 1.0),
        tool_slug="interview-questions",
    )
    questions = extract_json_payload(raw_text, expect="array")
    if questions is None:
        logger.warning("interview_questions_not_json role=%s", role)
        questions = _split_plain_questions(raw_text)
    return [str(question) for question in questions][:question_count]


def evaluate_interview(
    *,
    user_id: str,
    role: str,
    difficulty: str,
    question_count: int,
    questions: list[str],
    answers: list[str],
) -> tuple[InterviewRecord, ParsedEvaluation]:
    if not questions or not answers:
        raise ServiceError("questions and answers are required.", status_code=400)

    evaluation_text = text_completion_required(
        system_prompt=ANALYST_SYSTEM_PROMPT,
        user_prompt=EVALUATION_PROMPT.format(
            role=role,
            difficulty=difficulty,
            questions=json.dumps(questions, ensure_ascii=False),
            answers=json.dumps(answers, ensure_ascii=False),
        ),
        temperature=0.15,
        tool_slug="interview-evaluation",
    )
    record = InterviewRecord(
        role=role,
        difficulty=difficulty,
        question_count=question_count,
        questions=questions,
        answers=answers,
        evaluation_text=evaluation_text,
        score=extract_overall_score(evaluation_text),
    )
    saved = store.create_record(
        kind="interview", user_id=user_id, payload=record.model_dump(mode="json", by_alias=True)
    )
    logger.info("interview_saved user=%s id=%s score=%s", user_id, saved["id"], record.score)
    return InterviewRecord.model_validate(saved), parse_evaluation(evaluation_text)


def interview_history(user_id: str) -> list[InterviewRecord]:
    return [
        InterviewRecord.model_validate(item) for item in store.list_records(kind="interview", user_id=user_id)
    ]
