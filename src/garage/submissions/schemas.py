"""Submission Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class SubmitChallengeRequest(BaseModel):
    """Challenge completion claim.

    Fields are loosely typed so the active ruleset can produce its own
    field-specific messages instead of generic schema errors.
    """

    wallet_address: str | None = None
    chapter_id: Any = None
    vercel_url: str | None = None
    suiscan_url: str | None = None


class SubmissionResponse(BaseModel):
    """A persisted submission row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    wallet_address: str
    chapter_id: int
    vercel_url: str | None = None
    suiscan_url: str | None = None
    status: str
    submitted_at: datetime
    reviewed_at: datetime | None = None
    reviewer_notes: str | None = None


class SubmitChallengeData(SubmissionResponse):
    """Submission row plus write metadata."""

    submission_id: int
    is_update: bool


class SubmitChallengeResponse(BaseModel):
    success: bool = True
    message: str
    data: SubmitChallengeData


class SubmissionListResponse(BaseModel):
    success: bool = True
    data: list[SubmissionResponse]
    count: int


class ReviewRequest(BaseModel):
    """Reviewer decision on a pending submission."""

    status: Literal["accepted", "rejected"]
    reviewer_notes: str | None = Field(None, max_length=2000)


class ReviewResponse(BaseModel):
    success: bool = True
    data: SubmissionResponse


class SubmissionStatusEntry(BaseModel):
    status: str
    submitted_at: str | None = None
    reviewed_at: str | None = None


class UserStatusData(BaseModel):
    """Per-wallet progress summary for the dashboard."""

    wallet_address: str
    completed_chapters: list[int]
    pending_chapters: list[int]
    rejected_chapters: list[int]
    next_chapter: int
    total_completed: int
    total_pending: int
    submissions: dict[str, SubmissionStatusEntry]
    progress: dict[str, Any] | None = None


class UserStatusResponse(BaseModel):
    success: bool = True
    data: UserStatusData
