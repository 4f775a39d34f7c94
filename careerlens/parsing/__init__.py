from .ai_json import extract_json_payload
from .cover_letter import build_intro, detect_profile, extract_company_name, first_project, polish_cover_letter
from .evaluation import (
    NO_EVALUATION,
    SUMMARY_UNAVAILABLE,
    detect_role_category,
    extract_overall_score,
    normalize_code_fences,
    parse_evaluation,
)
from .sections import JD_SECTION_TITLES, clean_section_content, parse_fixed_sections

__all__ = [
    "build_intro",
    "detect_profile",
    "extract_company_name",
    "first_project",
    "polish_cover_letter",
    "JD_SECTION_TITLES",
    "NO_EVALUATION",
    "SUMMARY_UNAVAILABLE",
    "clean_section_content",
    "detect_role_category",
    "extract_json_payload",
    "extract_overall_score",
    "normalize_code_fences",
    "parse_evaluation",
    "parse_fixed_sections",
]
