from __future__ import annotations

import re
from collections.abc import Sequence

from careerlens.schemas import ParsedSection

JD_SECTION_TITLES: tuple[str, ...] = (
    "Match Score",
    "Top Strengths Based on JD",
    "Missing / Important Skills",
    "Recommended Keywords to Add",
    "Tailored Resume Bullet Suggestions",
    "Fit Verdict",
    "Improvement Tips",
)

BULLET = "• "

# Applied in order, repeatedly, until a line stops changing.
_LINE_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"^\d+(?:[.)](?=\D|$)|[:\-](?=\s|$))\s*"), ""),  # "1)", "2.", "3:" but not "3.5"
    (re.compile(r"^:\s*"), ""),
    (re.compile(r"^\*\*\s*"), ""),
    (re.compile(r"^\(\d+\s*[-–]\s*\d+\)\s*:?\s*"), ""),  # "(0-100):"
    (re.compile(r"^\*\s*"), BULLET),
    (re.compile(r"^-(?![\d-])\s*"), BULLET),
)


def _clean_line(line: str) -> str:
    current = line.strip()
    while True:
        previous = current
        for pattern, replacement in _LINE_RULES:
            current = pattern.sub(replacement, current, count=1).strip()
        if current == previous:
            return current


def clean_section_content(content: str) -> str:
    """Strip enumeration/emphasis markers line by line and normalise bullets."""
    if not content:
        return ""
    return "\n".join(_clean_line(line) for line in content.splitlines()).strip()


def _next_heading_start(text: str, headings: Sequence[str], position: int) -> int:
    """Position of the closest heading at or after `position`, or len(text)."""
    best = len(text)
    for heading in headings:
        if not heading:
            continue
        found = text.find(heading, position)
        if found != -1 and found < best:
            best = found
    return best


def parse_fixed_sections(
    text: str | None,
    headings: Sequence[str] = JD_SECTION_TITLES,
) -> list[ParsedSection]:
    """Split `text` into sections for the expected `headings`, in heading order.

    Each heading is searched only in the not-yet-consumed remainder of the text, so
    sections come out in expected order and their content ranges never overlap.
    Headings that cannot be found are skipped.
    """
    if not text:
        return []

    sections: list[ParsedSection] = []
    cursor = 0
    for index, heading in enumerate(headings):
        if not heading:
            continue
        start = text.find(heading, cursor)
        if start == -1:
            continue

        content_start = start + len(heading)
        end = _next_heading_start(text, headings[index + 1 :], content_start)
        sections.append(
            ParsedSection(
                title=heading,
                content=clean_section_content(text[content_start:end]),
            )
        )
        cursor = end

    return sections
