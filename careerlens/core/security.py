from __future__ import annotations

from fastapi import Header, HTTPException, status

from careerlens.core.config import settings

ANONYMOUS_USER = "anonymous"


def check_api_key(x_api_key: str | None) -> None:
    if settings.auth_mode != "protected" or not settings.api_key:
        return
    if x_api_key != settings.api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Please provide a valid API key.",
        )


def current_user(
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> str:
    """Resolve the acting user; identity itself is asserted by the upstream gateway."""
    check_api_key(x_api_key)
    user_id = (x_user_id or "").strip()
    return user_id or ANONYMOUS_USER
