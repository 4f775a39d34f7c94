"""Deterministic pieces of cover letter generation.

The model only writes the prose; the opening sentence, the project it talks about
and the final four-sentence shape are decided here so the letter stays predictable.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

SENTENCE_COUNT = 4
FILLER_SENTENCE = "I aim to contribute to measurable engineering outcomes"

_DSA_MARKERS = ("data structures", "algorithms", "dsa", "problem solving", "competitive programming")
_FULLSTACK_MARKERS = ("full stack", "mern", "react", "node", "api", "frontend", "backend")

_COMPANY_PATTERNS = (
    re.compile(r"([A-Z][A-Za-z0-9 .&-]+?) (?i:is hiring)"),
    re.compile(r"(?i:hiring for) .* (?i:at) ([A-Z][A-Za-z0-9.&-]+(?: [A-Z][A-Za-z0-9.&-]+)*)"),
    re.compile(r"(?i:role at) ([A-Z][A-Za-z0-9.&-]+(?: [A-Z][A-Za-z0-9.&-]+)*)"),
)

_NOISE = (
    re.compile(r"^\s*cover letter:\s*", re.IGNORECASE),
    re.compile(r"I am writing[^.]+", re.IGNORECASE),
    re.compile(r"I look forward[^.]+", re.IGNORECASE),
)
_SENTENCE_BREAK = re.compile(r"[.!?]\s+")
_WHITESPACE = re.compile(r"\s+")
_REPEATED_PERIODS = re.compile(r"\.{2,}")


def detect_profile(analysis_text: str | None, skills: Sequence[str]) -> str:
    """"dsa" when algorithmic signals clearly dominate, "fullstack" otherwise."""
    text = f"{analysis_text or ''} {' '.join(skills)}".lower()
    dsa = sum(1 for marker in _DSA_MARKERS if marker in text)
    fullstack = sum(1 for marker in _FULLSTACK_MARKERS if marker in text)
    if dsa >= fullstack and dsa > 1:
        return "dsa"
    return "fullstack"


def first_project(project_rewrites: Sequence[str], bullet_rewrites: Sequence[str]) -> str | None:
    if project_rewrites:
        return project_rewrites[0]
    if bullet_rewrites:
        return bullet_rewrites[0]
    return None


def extract_company_name(job_description: str | None) -> str:
    for pattern in _COMPANY_PATTERNS:
        match = pattern.search(job_description or "")
        if match:
            return match.group(1).strip()
    return ""


def build_intro(profile: str, job_title: str | None, company: str) -> str:
    target = f"the {job_title or 'advertised'} role"
    if company:
        target = f"{target} at {company}"
    if profile == "dsa":
        strengths = "strengths in Data Structures, Algorithms, problem-solving and core CS fundamentals"
    else:
        strengths = "experience in React.js, Node.js, JavaScript, MongoDB, Python and SQL"
    return f"I am applying for {target} with {strengths}"


def polish_cover_letter(text: str | None) -> str:
    """Drop boilerplate phrases and force exactly four sentences."""
    cleaned = text or ""
    for pattern in _NOISE:
        cleaned = pattern.sub("", cleaned)
    cleaned = _WHITESPACE.sub(" ", cleaned).strip()

    sentences = [part.strip(" .!?") for part in _SENTENCE_BREAK.split(cleaned)]
    sentences = [sentence for sentence in sentences if sentence][:SENTENCE_COUNT]
    while len(sentences) < SENTENCE_COUNT:
        sentences.append(FILLER_SENTENCE)

    return _REPEATED_PERIODS.sub(".", ". ".join(sentences) + ".").strip()
