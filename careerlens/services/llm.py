from __future__ import annotations

import logging
import os
import time
from functools import lru_cache
from typing import Any

from openai import OpenAI

from careerlens.core.config import settings
from careerlens.parsing.ai_json import Expect, extract_json_payload

logger = logging.getLogger(__name__)


class LLMError(RuntimeError):
    def __init__(self, message: str, *, code: str = "llm_unavailable", status_code: int = 503):
        super().__init__(message)
        self.code = code
        self.status_code = status_code


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def llm_enabled() -> bool:
    if not _env_bool("TOOLS_LLM_ENABLED", True):
        return False
    api_key = (os.getenv("OPENAI_API_KEY") or "").strip()
    if not api_key or _looks_like_placeholder(api_key):
        return False
    return True


@lru_cache(maxsize=1)
def _client() -> OpenAI:
    return OpenAI(
        api_key=(os.getenv("OPENAI_API_KEY") or "").strip(),
        base_url=(os.getenv("OPENAI_BASE_URL") or None),
        timeout=settings.llm_timeout_s,
        max_retries=settings.llm_max_retries,
    )


def text_completion(
    *,
    system_prompt: str,
    user_prompt: str,
    temperature: float = 0.2,
    max_output_tokens: int = 2500,
    tool_slug: str = "unknown",
    json_mode: bool = False,
) -> str | None:
    """Run one chat completion and return its text, or None when the LLM is off or fails."""
    if not llm_enabled():
        logger.info("llm_run tool=%s status=skipped reason=llm_disabled", tool_slug)
        return None

    started = time.perf_counter()
    create_kwargs: dict[str, Any] = {
        "model": settings.llm_model,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
        "temperature": temperature,
        "max_tokens": max_output_tokens,
    }
    if json_mode:
        create_kwargs["response_format"] = {"type": "json_object"}

    try:
        response = _client().chat.completions.create(**create_kwargs)
    except Exception as exc:  # noqa: BLE001 - callers decide how to degrade
        logger.warning(
            "llm_run tool=%s status=error model=%s prompt_len=%s: %s",
            tool_slug,
            settings.llm_model,
            len(user_prompt),
            exc,
        )
        return None

    content = response.choices[0].message.content if response.choices else ""
    latency_ms = int((time.perf_counter() - started) * 1000)
    if not content:
        logger.warning("llm_run tool=%s status=empty latency_ms=%s", tool_slug, latency_ms)
        return None
    logger.info("llm_run tool=%s status=success latency_ms=%s", tool_slug, latency_ms)
    return str(content)


def json_completion(
    *,
    system_prompt: str,
    user_prompt: str,
    expect: Expect = "object",
    temperature: float = 0.2,
    max_output_tokens: int = 2500,
    tool_slug: str = "unknown",
) -> tuple[Any | None, str | None]:
    """Return (parsed JSON or None, raw text or None)."""
    raw_text = text_completion(
        system_prompt=system_prompt,
        user_prompt=user_prompt,
        temperature=temperature,
        max_output_tokens=max_output_tokens,
        tool_slug=tool_slug,
        json_mode=expect == "object",
    )
    if raw_text is None:
        return None, None
    parsed = extract_json_payload(raw_text, expect=expect)
    if parsed is None:
        logger.warning("llm_run tool=%s status=invalid_schema expect=%s", tool_slug, expect)
    return parsed, raw_text


def text_completion_required(**kwargs: Any) -> str:
    if not llm_enabled():
        raise LLMError("The AI service is not configured.", code="llm_disabled")
    text = text_completion(**kwargs)
    if not text:
        raise LLMError("The AI service could not produce a response. Try again.", code="llm_invalid")
    return text
