"""Repository Protocol for the change history log.

Entries are append-only: there is no update or delete operation.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_history.domain.models import ChangeHistoryEntry


class HistoryRepositoryProtocol(Protocol):
    async def append_entries(
        self, db: AsyncSession, entries: Sequence[ChangeHistoryEntry]
    ) -> None: ...

    async def latest_timestamp(self, db: AsyncSession, user_id: str) -> datetime | None: ...

    async def list_entries(
        self, db: AsyncSession, user_id: str, limit: int, offset: int
    ) -> list[ChangeHistoryEntry]: ...

    async def claim_backfill(self, db: AsyncSession, user_id: str, at: datetime) -> bool:
        """Write the user's backfill marker. False if it already existed."""
        ...
