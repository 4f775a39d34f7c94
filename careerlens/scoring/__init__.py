from .fallback import classify_verdict, compute_core_alignment, deterministic_fallback
from .sanitize import sanitize_match_payload, sanitize_resume_payload

__all__ = [
    "classify_verdict",
    "compute_core_alignment",
    "deterministic_fallback",
    "sanitize_match_payload",
    "sanitize_resume_payload",
]
