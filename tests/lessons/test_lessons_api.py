"""Integration tests for the lesson endpoints."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from garage.lessons.chapters import CHAPTERS, CHASSIS, DELIVERY


@pytest.mark.asyncio
class TestChapterContent:
    async def test_list(self, client: AsyncClient) -> None:
        response = await client.get("/api/lessons")
        assert response.status_code == 200
        body = response.json()
        assert body["count"] == len(CHAPTERS)
        assert body["chapters"][0] == {
            "id": 1,
            "title": "Building the Chassis",
            "filename": "car_factory.move",
        }

    async def test_first_chapter_detail(self, client: AsyncClient) -> None:
        response = await client.get("/api/lessons/1")
        assert response.status_code == 200
        data = response.json()
        assert data["initial_code"] == CHASSIS.initial_code
        assert data["content"].startswith("## Chapter 1")
        assert data["previous_chapter"] is None
        assert data["next_chapter"] == 2
        assert "expected_code" not in data

    async def test_last_chapter_has_no_next(self, client: AsyncClient) -> None:
        data = (await client.get(f"/api/lessons/{DELIVERY.id}")).json()
        assert data["previous_chapter"] == DELIVERY.id - 1
        assert data["next_chapter"] is None

    async def test_answer(self, client: AsyncClient) -> None:
        response = await client.get("/api/lessons/1/answer")
        assert response.json() == {"id": 1, "expected_code": CHASSIS.expected_code}

    async def test_unknown_chapter(self, client: AsyncClient) -> None:
        response = await client.get("/api/lessons/42")
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Chapter not found"}


@pytest.mark.asyncio
class TestCheck:
    async def test_valid_code(self, client: AsyncClient) -> None:
        response = await client.post("/api/lessons/1/check", json={"code": CHASSIS.expected_code})
        assert response.status_code == 200
        data = response.json()
        assert data["is_valid"] is True
        assert data["errors"] == []
        assert data["feedback"] == "Build Successful"
        assert "Build completed successfully" in data["terminal_output"]

    async def test_invalid_code_is_still_200(self, client: AsyncClient) -> None:
        response = await client.post("/api/lessons/1/check", json={"code": CHASSIS.initial_code})
        assert response.status_code == 200
        data = response.json()
        assert data["is_valid"] is False
        assert data["errors"] == [
            {"line": 4, "message": 'missing import statement "use std::string::{String};"'},
        ]
        assert data["feedback"] == "Build Failed"
        assert data["terminal_output"] == 'Line 4: missing import statement "use std::string::{String};"'

    async def test_missing_code(self, client: AsyncClient) -> None:
        response = await client.post("/api/lessons/1/check", json={})
        assert response.status_code == 400

    async def test_check_unknown_chapter(self, client: AsyncClient) -> None:
        response = await client.post("/api/lessons/9/check", json={"code": ""})
        assert response.status_code == 404
