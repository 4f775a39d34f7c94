from fastapi import APIRouter, Depends, Request

from careerlens.core.rate_limit import rate_limit
from careerlens.core.security import current_user
from careerlens.schemas import ResumeAnalysisRecord
from careerlens.schemas.api import AnalyzeResumeRequest, HistoryResponse, ResumeAnalysisResponse
from careerlens.services.errors import ServiceError
from careerlens.services.llm import LLMError
from careerlens.services.resume_service import analyze_resume, resume_history

from .errors import raise_http_error

router = APIRouter()


@router.post("/resume/analyze", response_model=ResumeAnalysisResponse)
@rate_limit()
def resume_analyze(request: Request, payload: AnalyzeResumeRequest, user_id: str = Depends(current_user)):
    _ = request
    try:
        record = analyze_resume(
            user_id=user_id,
            resume_text=payload.resume_text,
            file_name=payload.file_name,
            target_role=payload.target_role,
        )
    except (ServiceError, LLMError) as exc:
        raise_http_error(exc)
    return ResumeAnalysisResponse(analysis=record)


@router.get("/resume/history", response_model=HistoryResponse[ResumeAnalysisRecord])
def resume_history_list(user_id: str = Depends(current_user)):
    records = resume_history(user_id)
    return HistoryResponse[ResumeAnalysisRecord](count=len(records), history=records)
