from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

SCORING_CONFIG_PATH = Path(__file__).resolve().parents[1] / "config" / "scoring.yaml"


class ScoringConfigError(RuntimeError):
    pass


@lru_cache(maxsize=1)
def get_scoring_config() -> dict[str, Any]:
    """Load the bundled scoring.yaml once per process."""
    try:
        raw = SCORING_CONFIG_PATH.read_text(encoding="utf-8")
    except OSError as exc:
        raise ScoringConfigError(f"Cannot read scoring config '{SCORING_CONFIG_PATH}': {exc}") from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ScoringConfigError(f"Invalid YAML in scoring config '{SCORING_CONFIG_PATH}': {exc}") from exc

    if not isinstance(parsed, dict):
        raise ScoringConfigError(f"Scoring config '{SCORING_CONFIG_PATH}' must be a mapping at the top level.")
    return parsed


def get_scoring_value(path: str, default: Any = None) -> Any:
    """Dot-path lookup, e.g. ``get_scoring_value("fallback.weights.ats", 0.3)``."""
    if not path:
        return default
    node: Any = get_scoring_config()
    for key in path.split("."):
        if not isinstance(node, dict) or key not in node:
            return default
        node = node[key]
    return node
