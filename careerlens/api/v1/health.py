from fastapi import APIRouter

from careerlens import __version__
from careerlens.services.llm import llm_enabled

router = APIRouter()


@router.get("/health", summary="Health Check", description="Liveness plus whether AI analysis is configured.")
async def health_check():
    return {"status": "healthy", "version": __version__, "llmEnabled": llm_enabled()}
