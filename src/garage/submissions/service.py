"""Submission lifecycle: create/update challenge claims and aggregate wallet progress.

Status progression: pending -> accepted | rejected, rejected -> pending (resubmission).
``accepted`` is terminal for user-initiated writes.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from garage.db.models import Submission, User, UserProgress
from garage.submissions.rules import AUTO_APPROVED_NOTES, SubmissionRules

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()

VALID_TRANSITIONS: dict[str, list[str]] = {
    "pending": ["accepted", "rejected"],
    "rejected": ["pending"],
    "accepted": [],
}


class SubmissionLockedError(ValueError):
    """The submission was already accepted and can no longer be changed."""


class SubmissionNotFoundError(LookupError):
    """No submission with the requested id."""


def validate_transition(current_status: str, target_status: str) -> None:
    """Validate a status transition. Raises ValueError if invalid."""
    valid = VALID_TRANSITIONS.get(current_status, [])
    if target_status not in valid:
        raise ValueError(
            f"Invalid transition: {current_status} -> {target_status}. "
            f"Valid transitions: {valid}"
        )


async def get_or_create_user(db: AsyncSession, wallet_address: str) -> tuple[User, bool]:
    """Return the user for a wallet, creating it on first sight."""
    user = await db.get(User, wallet_address)
    if user is not None:
        return user, False

    user = User(wallet_address=wallet_address, created_at=datetime.now(timezone.utc))
    db.add(user)
    await db.flush()
    logger.info("user_created", wallet_address=wallet_address)
    return user, True


async def get_submission(db: AsyncSession, wallet_address: str, chapter_id: int) -> Submission | None:
    """Get the submission for a (wallet, chapter) pair."""
    result = await db.execute(
        select(Submission).where(
            Submission.wallet_address == wallet_address,
            Submission.chapter_id == chapter_id,
        )
    )
    return result.scalar_one_or_none()


def _apply_review(submission: Submission, status: str, notes: str | None, now: datetime) -> None:
    validate_transition(submission.status, status)
    submission.status = status
    submission.reviewed_at = now
    submission.reviewer_notes = notes


async def submit_challenge(
    db: AsyncSession,
    rules: SubmissionRules,
    wallet_address: str,
    chapter_id: int,
    vercel_url: str | None,
    suiscan_url: str | None,
) -> tuple[Submission, bool]:
    """
    Create or update the submission for (wallet_address, chapter_id).

    The payload must already be validated with ``rules.validate_submission``.

    Returns:
        Tuple of (submission, is_update).

    Raises:
        SubmissionLockedError: If the existing submission is already accepted.
    """
    await get_or_create_user(db, wallet_address)
    now = datetime.now(timezone.utc)

    submission = await get_submission(db, wallet_address, chapter_id)
    is_update = submission is not None

    if submission is not None:
        if submission.status == "accepted":
            msg = "Cannot update an accepted submission"
            raise SubmissionLockedError(msg)
        if submission.status == "rejected":
            validate_transition("rejected", "pending")
        submission.vercel_url = vercel_url
        submission.suiscan_url = suiscan_url
        submission.status = "pending"
        submission.submitted_at = now
        submission.reviewed_at = None
        submission.reviewer_notes = None
    else:
        submission = Submission(
            wallet_address=wallet_address,
            chapter_id=chapter_id,
            vercel_url=vercel_url,
            suiscan_url=suiscan_url,
            status="pending",
            submitted_at=now,
        )
        db.add(submission)

    if rules.auto_accept:
        _apply_review(submission, "accepted", AUTO_APPROVED_NOTES, now)

    await db.flush()
    logger.info(
        "submission_saved",
        wallet_address=wallet_address,
        chapter_id=chapter_id,
        status=submission.status,
        is_update=is_update,
        ruleset=rules.name,
    )
    return submission, is_update


async def review_submission(
    db: AsyncSession,
    submission_id: int,
    status: str,
    reviewer_notes: str | None = None,
) -> Submission:
    """
    Record a reviewer decision on a pending submission.

    Raises:
        SubmissionNotFoundError: If the id is unknown.
        ValueError: If the status transition is not allowed.
    """
    submission = await db.get(Submission, submission_id)
    if submission is None:
        msg = f"Submission {submission_id} not found"
        raise SubmissionNotFoundError(msg)
    if status not in ("accepted", "rejected"):
        msg = f"Invalid review status: {status}"
        raise ValueError(msg)

    _apply_review(submission, status, reviewer_notes, datetime.now(timezone.utc))
    await db.flush()
    logger.info("submission_reviewed", submission_id=submission_id, status=status)
    return submission


async def list_submissions(
    db: AsyncSession,
    wallet_address: str,
    chapter_id: int | None = None,
) -> list[Submission]:
    """List a wallet's submissions, newest first, optionally for one chapter."""
    query = (
        select(Submission)
        .where(Submission.wallet_address == wallet_address)
        .order_by(Submission.submitted_at.desc())
    )
    if chapter_id is not None:
        query = query.where(Submission.chapter_id == chapter_id)
    result = await db.execute(query)
    return list(result.scalars().all())


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


async def _get_progress(db: AsyncSession, wallet_address: str) -> dict[str, Any] | None:
    try:
        progress = await db.get(UserProgress, wallet_address)
    except SQLAlchemyError:
        logger.warning("user_progress_lookup_failed", wallet_address=wallet_address, exc_info=True)
        return None
    if progress is None:
        return None
    return {
        "wallet_address": progress.wallet_address,
        "current_chapter": progress.current_chapter,
        "data": progress.data or {},
        "updated_at": _iso(progress.updated_at),
    }


async def get_user_status(
    db: AsyncSession,
    rules: SubmissionRules,
    wallet_address: str,
) -> dict[str, Any]:
    """Aggregate a wallet's submissions into per-status chapter lists.

    ``next_chapter`` is one past the highest accepted chapter, capped at the
    ruleset's last chapter; 1 when nothing has been accepted yet.
    """
    result = await db.execute(
        select(Submission)
        .where(Submission.wallet_address == wallet_address)
        .order_by(Submission.chapter_id)
    )
    submissions = list(result.scalars().all())

    completed = [s.chapter_id for s in submissions if s.status == "accepted"]
    pending = [s.chapter_id for s in submissions if s.status == "pending"]
    rejected = [s.chapter_id for s in submissions if s.status == "rejected"]

    next_chapter = min(max(completed) + 1, rules.max_chapter) if completed else 1

    return {
        "wallet_address": wallet_address,
        "completed_chapters": completed,
        "pending_chapters": pending,
        "rejected_chapters": rejected,
        "next_chapter": next_chapter,
        "total_completed": len(completed),
        "total_pending": len(pending),
        "submissions": {
            str(s.chapter_id): {
                "status": s.status,
                "submitted_at": _iso(s.submitted_at),
                "reviewed_at": _iso(s.reviewed_at),
            }
            for s in submissions
        },
        "progress": await _get_progress(db, wallet_address),
    }
