from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import Field, field_validator

from .base import CamelModel, coerce_optional_str, coerce_score, coerce_str_list

Verdict = Literal["Strong Fit", "Competitive", "Weak Fit"]
MatchSource = Literal["ai", "fallback"]


class ScoringBreakdown(CamelModel):
    keyword_match: int | None = None
    action_verbs: int | None = None
    quantified_results: int | None = None
    formatting_clarity: int | None = None
    relevance_alignment: int | None = None


class ResumeAnalysisRecord(CamelModel):
    id: str | None = None
    user_id: str | None = None
    file_name: str | None = None
    target_role: str | None = None
    ats_score: int | None = None
    scoring_breakdown: ScoringBreakdown = Field(default_factory=ScoringBreakdown)
    skills: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    suggested_roles: list[str] = Field(default_factory=list)
    improvement_checklist: list[str] = Field(default_factory=list)
    project_rewrites: list[str] = Field(default_factory=list)
    bullet_rewrites: list[str] = Field(default_factory=list)
    recruiter_impression: str | None = None
    summary_rewrite: str | None = None
    analysis_text: str = ""
    created_at: datetime | None = None

    @field_validator(
        "skills",
        "strengths",
        "weaknesses",
        "missing_keywords",
        "suggested_roles",
        "improvement_checklist",
        "project_rewrites",
        "bullet_rewrites",
        mode="before",
    )
    @classmethod
    def _lists(cls, value: Any) -> list[str]:
        return coerce_str_list(value)

    @field_validator("ats_score", mode="before")
    @classmethod
    def _score(cls, value: Any) -> int | None:
        return coerce_score(value)

    @field_validator("analysis_text", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return "" if value is None else str(value)


class JobAnalysisRecord(CamelModel):
    id: str | None = None
    user_id: str | None = None
    job_title: str | None = None
    job_description: str = ""
    match_score: int | None = None
    fit_verdict: str | None = None
    strengths_based_on_jd: list[str] = Field(default_factory=list, alias="strengthsBasedOnJD")
    missing_skills: list[str] = Field(default_factory=list)
    recommended_keywords: list[str] = Field(default_factory=list)
    tailored_bullet_suggestions: list[str] = Field(default_factory=list)
    improvement_tips: list[str] = Field(default_factory=list)
    compared_resume_id: str | None = None
    analysis_text: str = ""
    created_at: datetime | None = None

    @field_validator(
        "strengths_based_on_jd",
        "missing_skills",
        "recommended_keywords",
        "tailored_bullet_suggestions",
        "improvement_tips",
        mode="before",
    )
    @classmethod
    def _lists(cls, value: Any) -> list[str]:
        return coerce_str_list(value)

    @field_validator("match_score", mode="before")
    @classmethod
    def _score(cls, value: Any) -> int | None:
        return coerce_score(value)

    @field_validator("job_title", "fit_verdict", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> str | None:
        return coerce_optional_str(value)

    @field_validator("job_description", "analysis_text", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return "" if value is None else str(value)


class Competency(CamelModel):
    name: str
    resume_level: int | None = Field(default=None, ge=0, le=10)
    jd_level: int | None = Field(default=None, ge=0, le=10)
    gap: int | None = Field(default=None, ge=-10, le=10)


class MatchResult(CamelModel):
    overall_score: int = Field(ge=0, le=100)
    hiring_probability: int = Field(ge=0, le=100)
    verdict: Verdict
    role_category: str = "software-engineer"
    competencies: list[Competency] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    matching_skills: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
    recruiter_objections: list[str] = Field(default_factory=list)
    recruiter_strengths: list[str] = Field(default_factory=list)
    score_boost_estimate: str | None = None
    job_title: str | None = None
    resume_file_name: str | None = None
    target_role: str | None = None
    source: MatchSource = "fallback"


class MatchRecord(MatchResult):
    id: str | None = None
    user_id: str | None = None
    resume_id: str
    job_id: str
    created_at: datetime | None = None


class InterviewRecord(CamelModel):
    id: str | None = None
    user_id: str | None = None
    role: str
    difficulty: str
    question_count: int
    questions: list[str] = Field(default_factory=list)
    answers: list[str] = Field(default_factory=list)
    evaluation_text: str
    score: int = Field(ge=0, le=100)
    created_at: datetime | None = None


class TailoredSection(CamelModel):
    title: str
    content: str | None = None


class RemovedBullet(CamelModel):
    original: str
    reason: str | None = None


class TailoredContent(CamelModel):
    """Recruiter-style cut of an existing resume for one job; not persisted."""

    improved_summary: str | None = None
    improved_skills_section: list[str] = Field(default_factory=list)
    kept_and_rewritten_bullets: list[str] = Field(default_factory=list)
    removed_bullets_with_reasons: list[RemovedBullet] = Field(default_factory=list)
    notes_for_candidate: list[str] = Field(default_factory=list)


class TailoredResumeRecord(CamelModel):
    id: str | None = None
    user_id: str | None = None
    resume_id: str
    job_id: str
    headline: str | None = None
    skills_ordered: list[str] = Field(default_factory=list)
    experience_sections: list[TailoredSection] = Field(default_factory=list)
    project_sections: list[TailoredSection] = Field(default_factory=list)
    education_and_extras: list[TailoredSection] = Field(default_factory=list)
    score_boost_suggestions: list[str] = Field(default_factory=list)
    full_text: str | None = None
    raw_text: str | None = None
    created_at: datetime | None = None

    @field_validator("skills_ordered", "score_boost_suggestions", mode="before")
    @classmethod
    def _lists(cls, value: Any) -> list[str]:
        return coerce_str_list(value)
