"""In-memory HistoryRepositoryProtocol implementation (tests, local runs)."""

from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_history.domain.models import ChangeHistoryEntry


class InMemoryHistoryRepository:
    def __init__(self) -> None:
        self._entries: dict[str, tuple[ChangeHistoryEntry, ...]] = {}
        self._markers: dict[str, datetime] = {}
        self._next_id = 1

    async def append_entries(
        self, db: AsyncSession, entries: Sequence[ChangeHistoryEntry]
    ) -> None:
        for entry in entries:
            stored = replace(entry, id=self._next_id)
            self._next_id += 1
            self._entries[entry.user_id] = self._entries.get(entry.user_id, ()) + (stored,)

    async def latest_timestamp(self, db: AsyncSession, user_id: str) -> datetime | None:
        entries = self._entries.get(user_id, ())
        return max((e.timestamp for e in entries), default=None)

    async def list_entries(
        self, db: AsyncSession, user_id: str, limit: int, offset: int
    ) -> list[ChangeHistoryEntry]:
        # sorted() is stable with reverse=True: equal timestamps keep insertion order
        ordered = sorted(
            self._entries.get(user_id, ()), key=lambda e: e.timestamp, reverse=True
        )
        return ordered[offset:offset + limit]

    async def claim_backfill(self, db: AsyncSession, user_id: str, at: datetime) -> bool:
        if user_id in self._markers:
            return False
        self._markers[user_id] = at
        return True

    def count(self, user_id: str) -> int:
        return len(self._entries.get(user_id, ()))
