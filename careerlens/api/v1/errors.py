from __future__ import annotations

from fastapi import HTTPException, status

from careerlens.services.errors import ServiceError
from careerlens.services.llm import LLMError


def raise_http_error(exc: Exception) -> None:
    if isinstance(exc, ServiceError):
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
    if isinstance(exc, LLMError):
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    raise exc
