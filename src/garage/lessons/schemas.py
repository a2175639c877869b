"""Lesson Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ChapterSummary(BaseModel):
    id: int
    title: str
    filename: str


class ChapterListResponse(BaseModel):
    chapters: list[ChapterSummary]
    count: int


class ChapterDetailResponse(ChapterSummary):
    content: str
    initial_code: str
    previous_chapter: int | None = None
    next_chapter: int | None = None


class ChapterAnswerResponse(BaseModel):
    id: int
    expected_code: str


class CheckRequest(BaseModel):
    """Code buffer to validate."""

    code: str = Field(..., max_length=50_000)


class DiagnosticResponse(BaseModel):
    line: int
    message: str


class CheckResponse(BaseModel):
    chapter_id: int
    is_valid: bool
    errors: list[DiagnosticResponse]
    feedback: str
    terminal_output: str
