# web_api/tests/conftest.py
"""Pytest fixtures for web API tests.

Installs a reference data snapshot so API tests run without a database, and
provides an authenticated TestClient.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from core.reviews import ReferenceData, Quote, clear_reference_data, set_reference_data
from main import app
from web_api.auth import get_current_user

FAILURE_QUOTE = Quote(
    text="失敗是成功之母，只要不放棄，就一定能找到成功的方法。",
    author="X",
    id=1,
    category="堅持",
)
OTHER_QUOTE = Quote(text="學而時習之，不亦說乎？", author="孔子", id=2, category="學習")


@pytest.fixture(autouse=True)
def api_reference_data():
    """Reference data snapshot with a small option catalog and quotation pool."""
    data = ReferenceData(
        positive_traits=("認真負責", "樂於助人"),
        weaknesses=("上課易分心",),
        suggestions=("多發言",),
        quotes=(FAILURE_QUOTE, OTHER_QUOTE),
    )
    set_reference_data(data)
    yield data
    clear_reference_data()


@pytest.fixture
def auth_user():
    """Token payload of the calling teacher."""
    return {"sub": "teacher-1", "name": "王老師"}


@pytest.fixture
def client(auth_user):
    """TestClient with authentication overridden."""

    async def override_get_current_user():
        return auth_user

    app.dependency_overrides[get_current_user] = override_get_current_user
    yield TestClient(app)
    app.dependency_overrides.pop(get_current_user, None)


@pytest.fixture
def mock_conn():
    """A stand-in for get_connection()/get_transaction() context managers."""
    conn = MagicMock()
    conn.__aenter__ = AsyncMock(return_value=conn)
    conn.__aexit__ = AsyncMock(return_value=None)
    return conn
