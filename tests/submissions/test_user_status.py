"""Integration tests for GET /api/user-status."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from garage.db.models import Submission, User, UserProgress
from garage.submissions.rules import REVIEW
from garage.submissions.service import get_user_status
from tests.conftest import WALLET


async def _seed(db: AsyncSession, statuses: dict[int, str]) -> None:
    now = datetime.now(timezone.utc)
    db.add(User(wallet_address=WALLET, created_at=now))
    await db.flush()
    for chapter_id, status in statuses.items():
        db.add(
            Submission(
                wallet_address=WALLET,
                chapter_id=chapter_id,
                status=status,
                submitted_at=now,
                reviewed_at=now if status != "pending" else None,
            )
        )
    await db.commit()


@pytest.mark.asyncio
class TestUserStatus:
    async def test_accepted_and_pending(self, client: AsyncClient, db_session: AsyncSession) -> None:
        await _seed(db_session, {1: "accepted", 2: "pending"})

        response = await client.get("/api/user-status", params={"address": WALLET})
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["completed_chapters"] == [1]
        assert data["pending_chapters"] == [2]
        assert data["rejected_chapters"] == []
        assert data["next_chapter"] == 2
        assert data["total_completed"] == 1
        assert data["total_pending"] == 1
        assert data["submissions"]["1"]["status"] == "accepted"
        assert data["submissions"]["2"]["reviewed_at"] is None
        assert data["progress"] is None

    async def test_no_submissions(self, client: AsyncClient) -> None:
        response = await client.get("/api/user-status", params={"address": WALLET})
        data = response.json()["data"]
        assert data["wallet_address"] == WALLET
        assert data["completed_chapters"] == []
        assert data["next_chapter"] == 1
        assert data["submissions"] == {}

    async def test_next_chapter_follows_highest_accepted(self, client: AsyncClient, db_session: AsyncSession) -> None:
        await _seed(db_session, {1: "accepted", 3: "accepted", 4: "rejected"})
        data = (await client.get("/api/user-status", params={"address": WALLET})).json()["data"]
        assert data["completed_chapters"] == [1, 3]
        assert data["rejected_chapters"] == [4]
        assert data["next_chapter"] == 4

    async def test_next_chapter_capped(self, db_session: AsyncSession) -> None:
        await _seed(db_session, {6: "accepted"})
        status = await get_user_status(db_session, REVIEW, WALLET)
        assert status["next_chapter"] == REVIEW.max_chapter

    async def test_includes_progress_record(self, client: AsyncClient, db_session: AsyncSession) -> None:
        await _seed(db_session, {1: "accepted"})
        db_session.add(
            UserProgress(
                wallet_address=WALLET,
                current_chapter=2,
                data={"badges": ["chassis"]},
                updated_at=datetime.now(timezone.utc),
            )
        )
        await db_session.commit()

        data = (await client.get("/api/user-status", params={"address": WALLET})).json()["data"]
        assert data["progress"]["current_chapter"] == 2
        assert data["progress"]["data"] == {"badges": ["chassis"]}

    async def test_missing_address(self, client: AsyncClient) -> None:
        response = await client.get("/api/user-status")
        assert response.status_code == 400
        assert response.json()["error"] == "Missing required parameter: address"

    async def test_invalid_address(self, client: AsyncClient) -> None:
        response = await client.get("/api/user-status", params={"address": "nope"})
        assert response.status_code == 400
