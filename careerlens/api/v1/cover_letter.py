from fastapi import APIRouter, Depends, Request

from careerlens.core.rate_limit import rate_limit
from careerlens.core.security import current_user
from careerlens.schemas.api import CoverLetterResponse, ResumeJobRequest
from careerlens.services.cover_letter_service import generate_cover_letter
from careerlens.services.errors import ServiceError
from careerlens.services.llm import LLMError

from .errors import raise_http_error

router = APIRouter()


@router.post("/cover-letter/generate", response_model=CoverLetterResponse)
@rate_limit()
def cover_letter_generate(request: Request, payload: ResumeJobRequest, user_id: str = Depends(current_user)):
    _ = request
    try:
        letter = generate_cover_letter(user_id=user_id, resume_id=payload.resume_id, job_id=payload.job_id)
    except (ServiceError, LLMError) as exc:
        raise_http_error(exc)
    return CoverLetterResponse(cover_letter=letter)
