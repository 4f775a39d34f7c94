from fastapi import APIRouter, Depends, Request

from careerlens.core.rate_limit import rate_limit
from careerlens.core.security import current_user
from careerlens.parsing import parse_evaluation
from careerlens.schemas import InterviewRecord, ParsedEvaluation
from careerlens.schemas.api import (
    EvaluateInterviewRequest,
    EvaluationResponse,
    HistoryResponse,
    ParseEvaluationRequest,
    QuestionsRequest,
    QuestionsResponse,
)
from careerlens.services.errors import ServiceError
from careerlens.services.interview_service import evaluate_interview, generate_questions, interview_history
from careerlens.services.llm import LLMError

from .errors import raise_http_error

router = APIRouter()


@router.post("/interview/questions", response_model=QuestionsResponse)
@rate_limit()
def interview_questions(request: Request, payload: QuestionsRequest, _user: str = Depends(current_user)):
    _ = request
    try:
        questions = generate_questions(
            role=payload.role,
            difficulty=payload.difficulty,
            question_count=payload.question_count,
        )
    except (ServiceError, LLMError) as exc:
        raise_http_error(exc)
    return QuestionsResponse(questions=questions)


@router.post("/interview/evaluate", response_model=EvaluationResponse)
@rate_limit()
def interview_evaluate(request: Request, payload: EvaluateInterviewRequest, user_id: str = Depends(current_user)):
    _ = request
    try:
        record, parsed = evaluate_interview(
            user_id=user_id,
            role=payload.role,
            difficulty=payload.difficulty,
            question_count=payload.question_count,
            questions=payload.questions,
            answers=payload.answers,
        )
    except (ServiceError, LLMError) as exc:
        raise_http_error(exc)
    return EvaluationResponse(id=record.id, score=record.score, evaluation=record.evaluation_text, parsed=parsed)


@router.post("/interview/parse", response_model=ParsedEvaluation)
def interview_parse(payload: ParseEvaluationRequest):
    return parse_evaluation(payload.text)


@router.get("/interview/history", response_model=HistoryResponse[InterviewRecord])
def interview_history_list(user_id: str = Depends(current_user)):
    records = interview_history(user_id)
    return HistoryResponse[InterviewRecord](count=len(records), history=records)
