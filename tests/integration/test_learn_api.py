"""
Integration tests for the learn module.
"""

import pytest
from httpx import AsyncClient


class TestTopics:
    """Tests for GET /v1/learn/topics."""

    @pytest.mark.asyncio
    async def test_lists_topics_with_quiz_flag(self, client: AsyncClient):
        response = await client.get("/v1/learn/topics")

        assert response.status_code == 200
        topics = {t["id"]: t for t in response.json()["topics"]}
        assert topics["emergency-fund"]["has_quiz"] is True
        assert topics["stocks"]["has_quiz"] is False


class TestProgress:
    """Tests for /v1/learn/progress."""

    @pytest.mark.asyncio
    async def test_empty_by_default(self, client: AsyncClient):
        response = await client.get("/v1/learn/progress")

        assert response.status_code == 200
        assert response.json()["progress"] == []

    @pytest.mark.asyncio
    async def test_mark_read(self, client: AsyncClient):
        response = await client.post("/v1/learn/progress", json={"topic_id": "sip"})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "read"
        assert data["read_at"] is not None

        progress = (await client.get("/v1/learn/progress")).json()["progress"]
        assert [p["topic_id"] for p in progress] == ["sip"]

    @pytest.mark.asyncio
    async def test_quiz_status_cannot_be_set_directly(self, client: AsyncClient):
        response = await client.post(
            "/v1/learn/progress",
            json={"topic_id": "sip", "status": "mastered"},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_topic_rejected(self, client: AsyncClient):
        response = await client.post("/v1/learn/progress", json={"topic_id": "astrology"})

        assert response.status_code == 400


class TestQuiz:
    """Tests for POST /v1/learn/quiz."""

    @pytest.mark.asyncio
    async def test_perfect_score_masters_topic(self, client: AsyncClient):
        response = await client.post("/v1/learn/quiz", json={
            "topic_id": "emergency-fund",
            "answers": [1, 2, 1],
        })

        assert response.status_code == 200
        data = response.json()
        assert data["score"] == 3
        assert data["total"] == 3
        assert data["passed"] is True
        assert data["status"] == "mastered"

        progress = (await client.get("/v1/learn/progress")).json()["progress"]
        assert progress[0]["status"] == "mastered"
        assert progress[0]["quiz_score"] == 3

    @pytest.mark.asyncio
    async def test_low_score_marks_quizzed(self, client: AsyncClient):
        response = await client.post("/v1/learn/quiz", json={
            "topic_id": "emergency-fund",
            "answers": [0],
        })

        data = response.json()
        assert data["score"] == 0
        assert data["passed"] is False
        assert data["status"] == "quizzed"
        assert data["results"][1]["selected_index"] == -1

    @pytest.mark.asyncio
    async def test_topic_without_quiz_returns_404(self, client: AsyncClient):
        response = await client.post("/v1/learn/quiz", json={"topic_id": "stocks", "answers": [0]})

        assert response.status_code == 404
        assert response.json()["error"] == "QUIZ_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_too_many_answers_rejected(self, client: AsyncClient):
        response = await client.post("/v1/learn/quiz", json={
            "topic_id": "emergency-fund",
            "answers": [1, 2, 1, 0],
        })

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_QUIZ_SUBMISSION"
