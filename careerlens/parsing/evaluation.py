from __future__ import annotations

import re

from careerlens.schemas import ParsedEvaluation, ParsedSection

NO_EVALUATION = "No evaluation available"
SUMMARY_UNAVAILABLE = "Summary unavailable"

_QUESTION_MARKER = re.compile(r"Q\d+")
_SUMMARY_HEADING = re.compile(r"(?:Overall Summary|Executive Summary)[\s\S]*", re.IGNORECASE)
_FINAL_BLOCK = re.compile(r"={3,}\s*FINAL BLOCK\s*={3,}", re.IGNORECASE)
_CODE_FENCE = re.compile(r"```(\w+)?\s*([\s\S]*?)```")
_OVERALL_SCORE = re.compile(r"Overall Score:\s*(\d{1,3})", re.IGNORECASE)

_ROLE_CATEGORIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("frontend", ("frontend", "react", "ui", "vue", "angular")),
    ("backend", ("backend", "node", "java", "spring", "django", "golang")),
    ("fullstack", ("fullstack", "full stack", "mern")),
    ("mobile", ("ios", "android", "mobile", "react native", "flutter")),
    ("data", ("data", "ml", "ai", "analyst")),
    ("devops", ("devops", "cloud", "aws", "gcp", "azure")),
    ("game", ("game", "unity", "unreal")),
    ("sde", ("sde", "software engineer", "developer")),
)


def _render_fence(match: re.Match[str]) -> str:
    language = match.group(1) or "Code"
    return f"\n{language}:\n{match.group(2).strip()}\n"


def normalize_code_fences(content: str) -> str:
    """Rewrite ```lang fenced blocks as a plain "lang:" label followed by the code."""
    if not content:
        return ""
    return _CODE_FENCE.sub(_render_fence, content)


def parse_evaluation(text: str | None) -> ParsedEvaluation:
    """Split an interview evaluation ("Q1 ... Q2 ... Overall Summary ...") into sections.

    Every "Q<digits>" marker starts a new section titled "Question N" by position;
    the summary is everything from the first summary heading of the whole text.
    """
    if not text or not text.strip():
        return ParsedEvaluation(sections=[], summary=NO_EVALUATION)

    clean_text = _FINAL_BLOCK.sub("", text).strip()

    chunks = _QUESTION_MARKER.split(clean_text)[1:]
    sections = []
    for index, chunk in enumerate(chunks, start=1):
        body = _SUMMARY_HEADING.sub("", chunk, count=1).strip()
        sections.append(
            ParsedSection(title=f"Question {index}", content=normalize_code_fences(body).strip())
        )

    summary_match = _SUMMARY_HEADING.search(clean_text)
    if summary_match:
        summary = normalize_code_fences(summary_match.group(0)).strip()
    else:
        summary = SUMMARY_UNAVAILABLE

    return ParsedEvaluation(sections=sections, summary=summary)


def extract_overall_score(text: str | None) -> int:
    """Return the "Overall Score: NN" value clamped to [0, 100], or 0 when absent."""
    if not text:
        return 0
    match = _OVERALL_SCORE.search(text)
    if not match:
        return 0
    return max(0, min(100, int(match.group(1))))


def detect_role_category(role: str) -> str:
    lowered = (role or "").lower()
    for category, markers in _ROLE_CATEGORIES:
        if any(marker in lowered for marker in markers):
            return category
    return "generic"
