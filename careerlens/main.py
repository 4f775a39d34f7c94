import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler
import sentry_sdk

from careerlens.api.v1.health import router as health_router
from careerlens.api.v1.resume import router as resume_router
from careerlens.api.v1.jd import router as jd_router
from careerlens.api.v1.match import router as match_router
from careerlens.api.v1.interview import router as interview_router
from careerlens.api.v1.tailored import router as tailored_router
from careerlens.api.v1.cover_letter import router as cover_letter_router
from careerlens.api.v1.history import router as history_router
from careerlens.core.cors import cors_allow_credentials, cors_allowed_origins
from careerlens.core.rate_limit import limiter
from careerlens.core.config import settings
from careerlens.core.lifespan import lifespan

logging.basicConfig(level=settings.log_level, format="%(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

app = FastAPI(title="CareerLens API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allowed_origins(),
    allow_credentials=cors_allow_credentials(),
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.include_router(health_router, prefix="/v1", tags=["Health"])
app.include_router(resume_router, prefix="/v1", tags=["Resume"])
app.include_router(jd_router, prefix="/v1", tags=["Job Description"])
app.include_router(match_router, prefix="/v1", tags=["Match"])
app.include_router(interview_router, prefix="/v1", tags=["Interview"])
app.include_router(tailored_router, prefix="/v1", tags=["Tailored Resume"])
app.include_router(cover_letter_router, prefix="/v1", tags=["Cover Letter"])
app.include_router(history_router, prefix="/v1", tags=["History"])
