from fastapi import APIRouter, Depends, Request

from careerlens.core.rate_limit import rate_limit
from careerlens.core.security import current_user
from careerlens.schemas import JobAnalysisRecord
from careerlens.schemas.api import AnalyzeJobRequest, HistoryResponse, JobAnalysisResponse, ParseSectionsRequest, SectionsResponse
from careerlens.services.errors import ServiceError
from careerlens.services.jd_service import analyze_job, job_history, parse_job_analysis_text
from careerlens.services.llm import LLMError

from .errors import raise_http_error

router = APIRouter()


@router.post("/jd/analyze", response_model=JobAnalysisResponse)
@rate_limit()
def jd_analyze(request: Request, payload: AnalyzeJobRequest, user_id: str = Depends(current_user)):
    _ = request
    try:
        record = analyze_job(user_id=user_id, job_title=payload.job_title, job_description=payload.job_description)
    except (ServiceError, LLMError) as exc:
        raise_http_error(exc)
    return JobAnalysisResponse(analysis=record, sections=parse_job_analysis_text(record.analysis_text))


@router.post("/jd/parse", response_model=SectionsResponse)
def jd_parse(payload: ParseSectionsRequest):
    return SectionsResponse(sections=parse_job_analysis_text(payload.text, payload.headings))


@router.get("/jd/history", response_model=HistoryResponse[JobAnalysisRecord])
def jd_history_list(user_id: str = Depends(current_user)):
    records = job_history(user_id)
    return HistoryResponse[JobAnalysisRecord](count=len(records), history=records)
