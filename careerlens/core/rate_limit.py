from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from careerlens.core.config import settings


def rate_limit_key(request: Request) -> str:
    """Throttle per acting user when the gateway names one, per client address otherwise."""
    user_id = (request.headers.get("X-User-Id") or "").strip()
    if user_id:
        return f"user:{user_id}"
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(key_func=rate_limit_key, enabled=settings.rate_limit_enabled)


def rate_limit():
    """Decorator for LLM-backed endpoints; a no-op when RATE_LIMIT_ENABLED is off."""
    if not settings.rate_limit_enabled:
        return lambda func: func
    return limiter.limit(settings.rate_limit)
