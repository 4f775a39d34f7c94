from __future__ import annotations

import json
import logging
import re
from typing import Any, Literal

logger = logging.getLogger(__name__)

_FENCE_MARKERS = re.compile(r"```(?:json)?", re.IGNORECASE)
_OBJECT_BLOCK = re.compile(r"\{[\s\S]*\}")
_ARRAY_BLOCK = re.compile(r"\[[\s\S]*\]")

Expect = Literal["object", "array", "any"]


def _matches(value: Any, expect: Expect) -> bool:
    if expect == "object":
        return isinstance(value, dict)
    if expect == "array":
        return isinstance(value, list)
    return isinstance(value, (dict, list))


def extract_json_payload(text: str | None, expect: Expect = "object") -> Any | None:
    """Pull a JSON document out of free-form model output.

    Returns None when nothing usable of the expected shape is found; callers take
    their fallback path on None.
    """
    if not text or not isinstance(text, str):
        return None

    cleaned = _FENCE_MARKERS.sub("", text).strip()
    candidates: list[str] = []
    if (cleaned.startswith("{") and cleaned.endswith("}")) or (
        cleaned.startswith("[") and cleaned.endswith("]")
    ):
        candidates.append(cleaned)
    if expect in {"object", "any"}:
        match = _OBJECT_BLOCK.search(cleaned)
        if match:
            candidates.append(match.group(0))
    if expect in {"array", "any"}:
        match = _ARRAY_BLOCK.search(cleaned)
        if match:
            candidates.append(match.group(0))

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except ValueError as exc:
            logger.warning("ai_json_parse_failed expect=%s len=%s: %s", expect, len(candidate), exc)
            continue
        if _matches(parsed, expect):
            return parsed
    return None
