from __future__ import annotations

from pydantic import BaseModel, Field


class ParsedSection(BaseModel):
    title: str
    content: str
    open: bool = False


class ParsedEvaluation(BaseModel):
    sections: list[ParsedSection] = Field(default_factory=list)
    summary: str
