from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from .base import CamelModel
from .records import (
    InterviewRecord,
    JobAnalysisRecord,
    MatchRecord,
    MatchResult,
    ResumeAnalysisRecord,
    TailoredContent,
    TailoredResumeRecord,
)
from .sections import ParsedEvaluation, ParsedSection

T = TypeVar("T")


class AnalyzeResumeRequest(CamelModel):
    resume_text: str
    file_name: str | None = None
    target_role: str | None = None


class AnalyzeJobRequest(CamelModel):
    job_title: str | None = None
    job_description: str = ""


class ResumeJobRequest(CamelModel):
    resume_id: str = ""
    job_id: str = ""


class FallbackMatchRequest(CamelModel):
    resume: ResumeAnalysisRecord
    job: JobAnalysisRecord


class ParseSectionsRequest(CamelModel):
    text: str | None = None
    headings: list[str] | None = None


class ParseEvaluationRequest(CamelModel):
    text: str | None = None


class QuestionsRequest(CamelModel):
    role: str = Field(min_length=1, max_length=150)
    difficulty: str = Field(min_length=1, max_length=30)
    question_count: int = Field(ge=1, le=20)


class EvaluateInterviewRequest(CamelModel):
    role: str = Field(min_length=1, max_length=150)
    difficulty: str = Field(min_length=1, max_length=30)
    question_count: int = Field(ge=1, le=20)
    questions: list[str] = Field(default_factory=list)
    answers: list[str] = Field(default_factory=list)


class ResumeAnalysisResponse(BaseModel):
    success: bool = True
    analysis: ResumeAnalysisRecord


class JobAnalysisResponse(BaseModel):
    success: bool = True
    analysis: JobAnalysisRecord
    sections: list[ParsedSection] = Field(default_factory=list)


class MatchResponse(BaseModel):
    success: bool = True
    match: MatchRecord


class FallbackMatchResponse(BaseModel):
    success: bool = True
    match: MatchResult


class SectionsResponse(BaseModel):
    sections: list[ParsedSection]


class QuestionsResponse(BaseModel):
    success: bool = True
    questions: list[str]


class EvaluationResponse(BaseModel):
    success: bool = True
    id: str | None
    score: int
    evaluation: str
    parsed: ParsedEvaluation


class TailoredResumeResponse(BaseModel):
    success: bool = True
    tailored: TailoredResumeRecord


class TailoredContentResponse(BaseModel):
    success: bool = True
    tailored: TailoredContent


class CoverLetterResponse(CamelModel):
    success: bool = True
    cover_letter: str


class HistoryResponse(BaseModel, Generic[T]):
    success: bool = True
    count: int
    history: list[T]


class DeleteResponse(BaseModel):
    success: bool = True
    deleted: str


__all__ = [
    "AnalyzeJobRequest",
    "AnalyzeResumeRequest",
    "CoverLetterResponse",
    "DeleteResponse",
    "EvaluateInterviewRequest",
    "EvaluationResponse",
    "FallbackMatchRequest",
    "FallbackMatchResponse",
    "HistoryResponse",
    "InterviewRecord",
    "JobAnalysisResponse",
    "MatchResponse",
    "ParseEvaluationRequest",
    "ParseSectionsRequest",
    "QuestionsRequest",
    "QuestionsResponse",
    "ResumeAnalysisResponse",
    "ResumeJobRequest",
    "SectionsResponse",
    "TailoredContentResponse",
    "TailoredResumeResponse",
]
