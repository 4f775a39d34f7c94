from .records import (
    Competency,
    InterviewRecord,
    JobAnalysisRecord,
    MatchRecord,
    MatchResult,
    RemovedBullet,
    ResumeAnalysisRecord,
    ScoringBreakdown,
    TailoredContent,
    TailoredResumeRecord,
    TailoredSection,
)
from .sections import ParsedEvaluation, ParsedSection

__all__ = [
    "Competency",
    "InterviewRecord",
    "JobAnalysisRecord",
    "MatchRecord",
    "MatchResult",
    "ResumeAnalysisRecord",
    "ScoringBreakdown",
    "RemovedBullet",
    "TailoredContent",
    "TailoredResumeRecord",
    "TailoredSection",
    "ParsedSection",
    "ParsedEvaluation",
]
