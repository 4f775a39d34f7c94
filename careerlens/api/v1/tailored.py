from fastapi import APIRouter, Depends, Request

from careerlens.core.rate_limit import rate_limit
from careerlens.core.security import current_user
from careerlens.schemas import TailoredResumeRecord
from careerlens.schemas.api import (
    HistoryResponse,
    ResumeJobRequest,
    TailoredContentResponse,
    TailoredResumeResponse,
)
from careerlens.services.errors import ServiceError
from careerlens.services.llm import LLMError
from careerlens.services.tailor_service import (
    generate_tailored_resume,
    get_tailored_resume,
    tailor_resume_content,
    tailored_history,
)

from .errors import raise_http_error

router = APIRouter()


@router.post("/tailored/generate", response_model=TailoredResumeResponse)
@rate_limit()
def tailored_generate(request: Request, payload: ResumeJobRequest, user_id: str = Depends(current_user)):
    _ = request
    try:
        record = generate_tailored_resume(user_id=user_id, resume_id=payload.resume_id, job_id=payload.job_id)
    except (ServiceError, LLMError) as exc:
        raise_http_error(exc)
    return TailoredResumeResponse(tailored=record)


@router.post("/tailored/cut", response_model=TailoredContentResponse)
@rate_limit()
def tailored_cut(request: Request, payload: ResumeJobRequest, user_id: str = Depends(current_user)):
    _ = request
    try:
        content = tailor_resume_content(user_id=user_id, resume_id=payload.resume_id, job_id=payload.job_id)
    except (ServiceError, LLMError) as exc:
        raise_http_error(exc)
    return TailoredContentResponse(tailored=content)


@router.get("/tailored/history", response_model=HistoryResponse[TailoredResumeRecord])
def tailored_history_list(user_id: str = Depends(current_user)):
    records = tailored_history(user_id)
    return HistoryResponse[TailoredResumeRecord](count=len(records), history=records)


@router.get("/tailored/{record_id}", response_model=TailoredResumeResponse)
def tailored_get(record_id: str, user_id: str = Depends(current_user)):
    try:
        record = get_tailored_resume(user_id=user_id, record_id=record_id)
    except ServiceError as exc:
        raise_http_error(exc)
    return TailoredResumeResponse(tailored=record)
