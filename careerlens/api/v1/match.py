from fastapi import APIRouter, Depends, Request

from careerlens.core.rate_limit import rate_limit
from careerlens.core.security import current_user
from careerlens.schemas import MatchRecord
from careerlens.schemas.api import (
    FallbackMatchRequest,
    FallbackMatchResponse,
    HistoryResponse,
    MatchResponse,
    ResumeJobRequest,
)
from careerlens.scoring import deterministic_fallback
from careerlens.services.errors import ServiceError
from careerlens.services.llm import LLMError
from careerlens.services.match_service import analyze_match, match_history

from .errors import raise_http_error

router = APIRouter()


@router.post("/match/analyze", response_model=MatchResponse)
@rate_limit()
def match_analyze(request: Request, payload: ResumeJobRequest, user_id: str = Depends(current_user)):
    _ = request
    try:
        record = analyze_match(user_id=user_id, resume_id=payload.resume_id, job_id=payload.job_id)
    except (ServiceError, LLMError) as exc:
        raise_http_error(exc)
    return MatchResponse(match=record)


@router.post("/match/fallback", response_model=FallbackMatchResponse)
def match_fallback(payload: FallbackMatchRequest):
    return FallbackMatchResponse(match=deterministic_fallback(payload.resume, payload.job))


@router.get("/match/history", response_model=HistoryResponse[MatchRecord])
def match_history_list(user_id: str = Depends(current_user)):
    records = match_history(user_id)
    return HistoryResponse[MatchRecord](count=len(records), history=records)
