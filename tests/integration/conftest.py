"""Integration-test fixtures.

These tests talk to a migrated PostgreSQL (alembic upgrade head) and are
skipped unless RUN_INTEGRATION is set. All of them share one event loop so
the module-level SQLAlchemy engine pool stays valid for the whole session.
"""

import os
import uuid
from collections.abc import Awaitable, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.main import app


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if os.environ.get("RUN_INTEGRATION"):
        return
    skip = pytest.mark.skip(reason="set RUN_INTEGRATION=1 to run against PostgreSQL")
    for item in items:
        if "integration" in item.nodeid:
            item.add_marker(skip)


def unique_user() -> dict[str, str]:
    uid = uuid.uuid4().hex[:8]
    return {
        "username": f"collector_{uid}",
        "email": f"collector_{uid}@example.com",
        "password": "TestPass1",
    }


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client() -> AsyncClient:  # type: ignore[override]
    """Session-scoped async HTTP client, so the engine pool stays alive."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac



LoginHeaders = Callable[[dict[str, str]], Awaitable[dict[str, str]]]


@pytest.fixture
def new_user() -> Callable[[], dict[str, str]]:
    return unique_user


@pytest.fixture
def login_headers(client: AsyncClient) -> LoginHeaders:
    """Register (ignored when the user exists), log in, return Bearer headers."""

    async def _login(creds: dict[str, str]) -> dict[str, str]:
        await client.post("/api/v1/auth/register", json=creds)
        resp = await client.post(
            "/api/v1/auth/login",
            json={"username": creds["username"], "password": creds["password"]},
        )
        token = resp.json()["data"]["access_token"]
        return {"Authorization": f"Bearer {token}"}

    return _login
