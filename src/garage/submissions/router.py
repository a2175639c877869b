"""Submission API endpoints: submit, list, review, and wallet status."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from garage.dependencies import get_db, require_reviewer
from garage.submissions.rules import (
    SubmissionRules,
    SubmissionValidationError,
    get_submission_rules,
)
from garage.submissions.schemas import (
    ReviewRequest,
    ReviewResponse,
    SubmissionListResponse,
    SubmissionResponse,
    SubmitChallengeData,
    SubmitChallengeRequest,
    SubmitChallengeResponse,
    UserStatusData,
    UserStatusResponse,
)
from garage.submissions.service import (
    SubmissionLockedError,
    SubmissionNotFoundError,
    get_user_status,
    list_submissions,
    review_submission,
    submit_challenge,
)

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["Submissions"])


async def _datastore_failure(db: AsyncSession, event: str, message: str) -> HTTPException:
    """Roll back, log the exception and build a generic 500."""
    await db.rollback()
    logger.error(event, exc_info=True)
    return HTTPException(status_code=500, detail=message)


def _parse_chapter_param(rules: SubmissionRules, chapter_id: str | None) -> int | None:
    if chapter_id is None or chapter_id == "":
        return None
    try:
        value = int(chapter_id)
    except ValueError as e:
        raise SubmissionValidationError(rules.chapter_range_message()) from e
    return rules.validate_chapter(value)


# ---------------------------------------------------------------------------
# Submit / list
# ---------------------------------------------------------------------------


@router.post("/submit-challenge", response_model=SubmitChallengeResponse, status_code=201)
async def submit_challenge_endpoint(
    body: SubmitChallengeRequest,
    response: Response,
    rules: SubmissionRules = Depends(get_submission_rules),
    db: AsyncSession = Depends(get_db),
) -> SubmitChallengeResponse:
    """Create or update a challenge submission. 201 on create, 200 on update."""
    try:
        rules.validate_submission(body.wallet_address, body.chapter_id, body.vercel_url, body.suiscan_url)
    except SubmissionValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    try:
        submission, is_update = await submit_challenge(
            db,
            rules,
            wallet_address=body.wallet_address,  # type: ignore[arg-type]
            chapter_id=body.chapter_id,
            vercel_url=body.vercel_url or None,
            suiscan_url=body.suiscan_url or None,
        )
        await db.commit()
    except SubmissionLockedError as e:
        await db.rollback()
        raise HTTPException(
            status_code=400,
            detail={
                "error": str(e),
                "message": (
                    "This challenge has already been accepted. "
                    "Please contact support if you need to make changes."
                ),
            },
        ) from e
    except SQLAlchemyError as e:
        raise await _datastore_failure(db, "submission_write_failed", "Failed to save submission") from e

    response.status_code = 200 if is_update else 201
    data = SubmitChallengeData.model_validate(
        {
            **SubmissionResponse.model_validate(submission).model_dump(),
            "submission_id": submission.id,
            "is_update": is_update,
        }
    )
    return SubmitChallengeResponse(
        message="Submission updated successfully" if is_update else "Submission created successfully",
        data=data,
    )


@router.get("/submit-challenge", response_model=SubmissionListResponse)
async def list_submissions_endpoint(
    wallet_address: str | None = None,
    chapter_id: str | None = None,
    rules: SubmissionRules = Depends(get_submission_rules),
    db: AsyncSession = Depends(get_db),
) -> SubmissionListResponse:
    """List a wallet's submissions, newest first."""
    try:
        address = rules.validate_address(wallet_address)
        chapter = _parse_chapter_param(rules, chapter_id)
    except SubmissionValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    try:
        rows = await list_submissions(db, address, chapter)
    except SQLAlchemyError as e:
        raise await _datastore_failure(db, "submission_list_failed", "Failed to fetch submissions") from e

    data = [SubmissionResponse.model_validate(row) for row in rows]
    return SubmissionListResponse(data=data, count=len(data))


# ---------------------------------------------------------------------------
# Review (admin)
# ---------------------------------------------------------------------------


@router.post(
    "/submissions/{submission_id}/review",
    response_model=ReviewResponse,
    dependencies=[Depends(require_reviewer)],
)
async def review_submission_endpoint(
    submission_id: int,
    body: ReviewRequest,
    db: AsyncSession = Depends(get_db),
) -> ReviewResponse:
    """Accept or reject a pending submission."""
    try:
        submission = await review_submission(db, submission_id, body.status, body.reviewer_notes)
        await db.commit()
    except SubmissionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValueError as e:
        await db.rollback()
        raise HTTPException(status_code=400, detail=str(e)) from e
    except SQLAlchemyError as e:
        raise await _datastore_failure(db, "submission_review_failed", "Failed to review submission") from e

    return ReviewResponse(data=SubmissionResponse.model_validate(submission))


# ---------------------------------------------------------------------------
# Wallet status
# ---------------------------------------------------------------------------


@router.get("/user-status", response_model=UserStatusResponse)
async def user_status_endpoint(
    address: str | None = None,
    rules: SubmissionRules = Depends(get_submission_rules),
    db: AsyncSession = Depends(get_db),
) -> UserStatusResponse:
    """Completed/pending/rejected chapters and the next unlocked chapter for a wallet."""
    if not address:
        raise HTTPException(status_code=400, detail="Missing required parameter: address")
    try:
        rules.validate_address(address)
    except SubmissionValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    try:
        status = await get_user_status(db, rules, address)
    except SQLAlchemyError as e:
        raise await _datastore_failure(db, "user_status_failed", "Failed to fetch user status") from e

    return UserStatusResponse(data=UserStatusData.model_validate(status))
