from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    api_key: str | None
    auth_mode: str
    rate_limit: str
    rate_limit_enabled: bool
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    cors_allow_credentials: bool
    records_db_path: str
    history_limit: int
    llm_model: str
    llm_timeout_s: float
    llm_max_retries: int


settings = Settings(
    api_key=_get_env("API_KEY"),
    auth_mode=(_get_env("AUTH_MODE", "public") or "public").strip().lower(),
    rate_limit=_get_env("RATE_LIMIT", "30/minute") or "30/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ],
    ),
    cors_allow_credentials=_get_env_bool("CORS_ALLOW_CREDENTIALS", True),
    records_db_path=_get_env("RECORDS_DB_PATH", "data/careerlens.db") or "data/careerlens.db",
    history_limit=_get_env_int("HISTORY_LIMIT", 100),
    llm_model=(_get_env("AI_MODEL") or _get_env("OPENAI_MODEL") or "gpt-4o-mini").strip(),
    llm_timeout_s=_get_env_float("TOOLS_LLM_TIMEOUT_S", 30.0),
    llm_max_retries=_get_env_int("OPENAI_MAX_RETRIES", 2),
)

if settings.auth_mode not in {"public", "protected"}:
    raise RuntimeError("AUTH_MODE must be either 'public' or 'protected'.")

if settings.auth_mode == "protected" and not settings.api_key:
    raise RuntimeError("AUTH_MODE=protected requires API_KEY to be set.")
