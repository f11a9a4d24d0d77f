"""HistoryRepository: PostgreSQL implementation of HistoryRepositoryProtocol.

Ordering: created_at DESC, then id ASC, so entries sharing a timestamp keep
the order they were inserted in.

Transaction ownership: the CALLER commits (entries are written in the same
transaction as the card change they describe).
"""

import json
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.enums import ChangeAction
from src.cp_history.domain.models import ChangeHistoryEntry

_INSERT_ENTRY_SQL = text("""
    INSERT INTO change_history (user_id, action, card_ids, summary, details, created_at)
    VALUES (:user_id, :action, :card_ids, :summary, CAST(:details AS JSONB), :created_at)
""")

_LATEST_TS_SQL = text("""
    SELECT MAX(created_at) FROM change_history WHERE user_id = :user_id
""")

_LIST_ENTRIES_SQL = text("""
    SELECT id, user_id, action, card_ids, summary, details, created_at
    FROM change_history
    WHERE user_id = :user_id
    ORDER BY created_at DESC, id ASC
    LIMIT :limit OFFSET :offset
""")

# A concurrent claim blocks on the unique key until the first one commits,
# then gets no row back.
_CLAIM_BACKFILL_SQL = text("""
    INSERT INTO history_backfill_markers (user_id, backfilled_at)
    VALUES (:user_id, :at)
    ON CONFLICT (user_id) DO NOTHING
    RETURNING user_id
""")


def _row_to_entry(row: Any) -> ChangeHistoryEntry:
    details = row.details
    if isinstance(details, str):  # asyncpg without a JSONB codec returns text
        details = json.loads(details)
    return ChangeHistoryEntry(
        id=row.id,
        user_id=row.user_id,
        timestamp=row.created_at,
        action=ChangeAction(row.action),
        card_ids=tuple(row.card_ids or ()),
        summary=row.summary,
        details=details or {},
    )


class HistoryRepository:
    async def append_entries(
        self, db: AsyncSession, entries: Sequence[ChangeHistoryEntry]
    ) -> None:
        if not entries:
            return
        await db.execute(
            _INSERT_ENTRY_SQL,
            [
                {
                    "user_id": e.user_id,
                    "action": e.action.value,
                    "card_ids": list(e.card_ids),
                    "summary": e.summary,
                    "details": json.dumps(e.details),
                    "created_at": e.timestamp,
                }
                for e in entries
            ],
        )

    async def latest_timestamp(self, db: AsyncSession, user_id: str) -> datetime | None:
        result = await db.execute(_LATEST_TS_SQL, {"user_id": user_id})
        latest: datetime | None = result.scalar_one_or_none()
        return latest

    async def list_entries(
        self, db: AsyncSession, user_id: str, limit: int, offset: int
    ) -> list[ChangeHistoryEntry]:
        result = await db.execute(
            _LIST_ENTRIES_SQL, {"user_id": user_id, "limit": limit, "offset": offset}
        )
        return [_row_to_entry(row) for row in result.fetchall()]

    async def claim_backfill(self, db: AsyncSession, user_id: str, at: datetime) -> bool:
        result = await db.execute(_CLAIM_BACKFILL_SQL, {"user_id": user_id, "at": at})
        return result.scalar_one_or_none() is not None
