"""Shared test fixtures."""

import os

# Settings() needs a JWT secret at import time
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")

from datetime import UTC, datetime, timedelta  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from src.cp_cards.application.service import CardApplicationService  # noqa: E402
from src.cp_cards.infrastructure.memory import InMemoryCardRepository  # noqa: E402
from src.cp_common.locks import LocalUserLocks  # noqa: E402
from src.cp_history.application.service import ChangeHistoryService  # noqa: E402
from src.cp_history.infrastructure.memory import InMemoryHistoryRepository  # noqa: E402
from src.main import app  # noqa: E402


class FakeClock:
    """Deterministic clock that ticks ``step`` after every reading.

    Set ``step`` to zero to get several operations on one timestamp.
    """

    def __init__(
        self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)
    ) -> None:
        self.now = start or datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now += self.step
        return current

    def advance(self, seconds: float = 1.0) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def db() -> AsyncMock:
    """Stand-in AsyncSession; in-memory repositories ignore it."""
    return AsyncMock()


@pytest.fixture
def card_repo() -> InMemoryCardRepository:
    return InMemoryCardRepository(first_id=1)


@pytest.fixture
def history_repo() -> InMemoryHistoryRepository:
    return InMemoryHistoryRepository()


@pytest.fixture
def locks() -> LocalUserLocks:
    return LocalUserLocks()


@pytest.fixture
def history_service(
    history_repo: InMemoryHistoryRepository,
    card_repo: InMemoryCardRepository,
    locks: LocalUserLocks,
    clock: FakeClock,
) -> ChangeHistoryService:
    return ChangeHistoryService(
        repo=history_repo, card_repo=card_repo, locks=locks, clock=clock
    )


@pytest.fixture
def card_service(
    card_repo: InMemoryCardRepository,
    history_service: ChangeHistoryService,
    locks: LocalUserLocks,
    clock: FakeClock,
) -> CardApplicationService:
    return CardApplicationService(
        repo=card_repo, history=history_service, locks=locks, clock=clock
    )


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
