"""Lesson API endpoints: chapter content and stateless answer checking."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from garage.lessons.chapters import CHAPTERS, Chapter, get_chapter
from garage.lessons.schemas import (
    ChapterAnswerResponse,
    ChapterDetailResponse,
    ChapterListResponse,
    ChapterSummary,
    CheckRequest,
    CheckResponse,
    DiagnosticResponse,
)
from garage.lessons.session import FEEDBACK_FAILURE, FEEDBACK_SUCCESS, format_errors, success_output

router = APIRouter(prefix="/api/lessons", tags=["Lessons"])


def _chapter_or_404(chapter_id: int) -> Chapter:
    chapter = get_chapter(chapter_id)
    if chapter is None:
        raise HTTPException(404, "Chapter not found")
    return chapter


@router.get("", response_model=ChapterListResponse)
async def list_chapters() -> ChapterListResponse:
    """All chapters in teaching order."""
    chapters = [ChapterSummary(**c.summary()) for c in CHAPTERS]
    return ChapterListResponse(chapters=chapters, count=len(chapters))


@router.get("/{chapter_id}", response_model=ChapterDetailResponse)
async def get_chapter_detail(chapter_id: int) -> ChapterDetailResponse:
    """Instructions and starter code for one chapter."""
    chapter = _chapter_or_404(chapter_id)
    index = CHAPTERS.index(chapter)
    return ChapterDetailResponse(
        **chapter.summary(),
        content=chapter.content,
        initial_code=chapter.initial_code,
        previous_chapter=CHAPTERS[index - 1].id if index > 0 else None,
        next_chapter=CHAPTERS[index + 1].id if index + 1 < len(CHAPTERS) else None,
    )


@router.get("/{chapter_id}/answer", response_model=ChapterAnswerResponse)
async def get_chapter_answer(chapter_id: int) -> ChapterAnswerResponse:
    """The reference solution ("show me the answer")."""
    chapter = _chapter_or_404(chapter_id)
    return ChapterAnswerResponse(id=chapter.id, expected_code=chapter.expected_code)


@router.post("/{chapter_id}/check", response_model=CheckResponse)
async def check_chapter(chapter_id: int, body: CheckRequest) -> CheckResponse:
    """Run the chapter validator on a code buffer. Failed checks are still 200."""
    chapter = _chapter_or_404(chapter_id)
    result = chapter.check(body.code)
    return CheckResponse(
        chapter_id=chapter.id,
        is_valid=result.is_valid,
        errors=[DiagnosticResponse(**e.to_dict()) for e in result.errors],
        feedback=FEEDBACK_SUCCESS if result.is_valid else FEEDBACK_FAILURE,
        terminal_output=success_output() if result.is_valid else format_errors(result.errors),
    )
