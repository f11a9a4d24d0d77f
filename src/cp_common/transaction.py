"""Locked unit of work shared by every mutating service.

Usage:
    async with locked_transaction(db, self._locks, [user_id]):
        cards = await repo.list_cards(db, user_id)
        ...
        await repo.replace_cards(db, user_id, new_cards)

The body runs while the users' write guards are held. On normal exit the
session is committed; on any exception it is rolled back and the exception
propagates, so a failed mutation leaves neither card changes nor history.
"""

from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.locks import UserLocks


@asynccontextmanager
async def locked_transaction(
    db: AsyncSession,
    locks: UserLocks,
    user_ids: Iterable[str],
) -> AsyncIterator[None]:
    async with locks.hold_many(user_ids):
        try:
            yield
            await db.commit()
        except Exception:
            await db.rollback()
            raise
