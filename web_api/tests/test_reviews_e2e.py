"""End-to-end tests for the review workflow.

These tests send real HTTP requests against an in-memory SQLite database.
Only the LLM call is mocked.
"""

from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from core.database import close_engine, get_connection
from core.tables import metadata, reviews
from web_api.auth import create_jwt

REVIEW_TEXT = (
    "小明是一位認真負責又樂於助人的孩子。"
    "失敗是成功之母，只要不放棄，就一定能找到成功的方法。"
    "希望你上課更專心，多發言，老師期待你的進步！"
)


@pytest_asyncio.fixture(autouse=True)
async def sqlite_engine(monkeypatch):
    """Point the shared engine at a fresh in-memory database."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    monkeypatch.setattr("core.database._engine", engine)
    yield engine
    await close_engine()


@pytest.fixture(autouse=True)
def jwt_secret():
    with patch("web_api.auth.JWT_SECRET", "test-secret"):
        yield


def _headers(open_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_jwt(open_id, name=open_id)}"}


@pytest_asyncio.fixture
async def http():
    from main import app

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client


async def _stored_review(review_id: int) -> dict | None:
    async with get_connection() as conn:
        result = await conn.execute(
            select(reviews).where(reviews.c.review_id == review_id)
        )
        row = result.fetchone()
        return dict(row._mapping) if row else None


class TestReviewLifecycle:
    @pytest.mark.asyncio
    async def test_generate_list_edit_delete(self, http):
        teacher = _headers("teacher-1")
        body = {
            "studentName": "小明",
            "positiveTraits": ["認真負責", "樂於助人"],
            "weaknesses": ["上課易分心"],
            "impressivePoints": "",
            "suggestions": ["多發言"],
        }

        with patch(
            "core.reviews.generator.complete",
            new_callable=AsyncMock,
            return_value=REVIEW_TEXT,
        ):
            response = await http.post(
                "/api/reviews/generate", json=body, headers=teacher
            )

        assert response.status_code == 200
        generated = response.json()
        review_id = generated["savedId"]
        assert generated["review"] == REVIEW_TEXT
        assert [q["author"] for q in generated["usedQuotes"]] == ["X"]

        stored = await _stored_review(review_id)
        assert stored["student_name"] == "小明"
        assert stored["generated_review"] == REVIEW_TEXT
        # Lists are stored as JSON text with CJK characters unescaped
        assert "認真負責" in stored["positive_traits"]

        response = await http.get("/api/reviews", headers=teacher)
        listed = response.json()["reviews"]
        assert [r["id"] for r in listed] == [review_id]
        assert listed[0]["positiveTraits"] == ["認真負責", "樂於助人"]
        assert listed[0]["usedQuotes"] == generated["usedQuotes"]

        response = await http.patch(
            f"/api/reviews/{review_id}",
            json={"generatedReview": "老師修改過的評語"},
            headers=teacher,
        )
        assert response.json() == {"success": True}

        response = await http.get(f"/api/reviews/{review_id}", headers=teacher)
        assert response.json()["generatedReview"] == "老師修改過的評語"

        response = await http.delete(f"/api/reviews/{review_id}", headers=teacher)
        assert response.json() == {"success": True}
        assert await _stored_review(review_id) is None

        response = await http.get(f"/api/reviews/{review_id}", headers=teacher)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_other_teacher_cannot_touch_review(self, http):
        owner = _headers("teacher-1")
        intruder = _headers("teacher-2")

        with patch(
            "core.reviews.generator.complete",
            new_callable=AsyncMock,
            return_value=REVIEW_TEXT,
        ):
            response = await http.post(
                "/api/reviews/generate",
                json={
                    "studentName": "小明",
                    "positiveTraits": ["認真負責"],
                    "weaknesses": [],
                    "suggestions": [],
                },
                headers=owner,
            )
        review_id = response.json()["savedId"]

        # The intruder has signed in and saved something of their own
        with patch(
            "core.reviews.generator.complete",
            new_callable=AsyncMock,
            return_value="小華很棒。",
        ):
            await http.post(
                "/api/reviews/generate",
                json={
                    "studentName": "小華",
                    "positiveTraits": ["樂於助人"],
                    "weaknesses": [],
                    "suggestions": [],
                },
                headers=intruder,
            )

        response = await http.get(f"/api/reviews/{review_id}", headers=intruder)
        assert response.status_code == 404
        assert response.json()["detail"] == "評語不存在"

        response = await http.patch(
            f"/api/reviews/{review_id}",
            json={"generatedReview": "竄改"},
            headers=intruder,
        )
        assert response.status_code == 404

        response = await http.delete(f"/api/reviews/{review_id}", headers=intruder)
        assert response.status_code == 404

        response = await http.get("/api/reviews", headers=intruder)
        assert [r["studentName"] for r in response.json()["reviews"]] == ["小華"]

        stored = await _stored_review(review_id)
        assert stored["generated_review"] == REVIEW_TEXT

    @pytest.mark.asyncio
    async def test_custom_options_are_private(self, http):
        owner = _headers("teacher-1")

        response = await http.post(
            "/api/reviews/options/custom",
            json={"kind": "positive_trait", "value": "很會畫畫"},
            headers=owner,
        )
        assert response.status_code == 200

        response = await http.get("/api/reviews/options/custom", headers=owner)
        assert response.json()["positiveTraits"] == ["很會畫畫"]

        response = await http.get(
            "/api/reviews/options/custom", headers=_headers("teacher-2")
        )
        assert response.json()["positiveTraits"] == []
