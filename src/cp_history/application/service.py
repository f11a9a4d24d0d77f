"""ChangeHistoryService: append, page and backfill the per-user change log.

record() never commits: it runs inside the transaction of the card mutation
it describes, so a rolled-back mutation leaves no entry behind.
backfill() owns its own locked transaction.
"""

import logging
from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.cp_cards.domain.repository import CardRepositoryProtocol
from src.cp_cards.infrastructure.persistence import CardRepository
from src.cp_common.datetime_utils import Clock, not_before, utc_now
from src.cp_common.errors import InvalidHistoryPageError
from src.cp_common.locks import UserLocks, get_user_locks
from src.cp_common.transaction import locked_transaction
from src.cp_history.application.schemas import (
    BackfillResponse,
    HistoryEntryItem,
    HistoryPageResponse,
)
from src.cp_history.domain.backfill import backfill_drafts
from src.cp_history.domain.models import ChangeHistoryEntry, HistoryDraft
from src.cp_history.domain.repository import HistoryRepositoryProtocol
from src.cp_history.infrastructure.persistence import HistoryRepository

logger = logging.getLogger(__name__)


class ChangeHistoryService:
    def __init__(
        self,
        repo: HistoryRepositoryProtocol | None = None,
        card_repo: CardRepositoryProtocol | None = None,
        locks: UserLocks | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._repo: HistoryRepositoryProtocol = repo or HistoryRepository()
        self._card_repo: CardRepositoryProtocol = card_repo or CardRepository()
        self._locks: UserLocks = locks or get_user_locks()
        self._clock = clock

    async def record(
        self, db: AsyncSession, user_id: str, drafts: Sequence[HistoryDraft]
    ) -> list[ChangeHistoryEntry]:
        """Stamp drafts with one server timestamp and append them. Caller commits."""
        if not drafts:
            return []
        latest = await self._repo.latest_timestamp(db, user_id)
        timestamp = not_before(self._clock(), latest)
        entries = [ChangeHistoryEntry.from_draft(user_id, timestamp, d) for d in drafts]
        await self._repo.append_entries(db, entries)
        return entries

    async def list_history(
        self, db: AsyncSession, user_id: str, limit: int, offset: int
    ) -> HistoryPageResponse:
        if not (1 <= limit <= settings.HISTORY_PAGE_MAX):
            raise InvalidHistoryPageError(
                f"limit must be between 1 and {settings.HISTORY_PAGE_MAX}, got {limit}"
            )
        if offset < 0:
            raise InvalidHistoryPageError(f"offset must be >= 0, got {offset}")

        # Fetch limit+1 to detect has_more without a COUNT(*) query
        entries = await self._repo.list_entries(db, user_id, limit + 1, offset)
        page = entries[:limit]
        return HistoryPageResponse(
            items=[HistoryEntryItem.from_domain(e) for e in page],
            limit=limit,
            offset=offset,
            has_more=len(entries) > limit,
        )

    async def backfill(self, db: AsyncSession, user_id: str) -> BackfillResponse:
        """One-time synthesis of history for pre-existing cards; later calls are no-ops.

        The marker is claimed before any entry is written, so two workers that
        do not share a lock still backfill at most once.
        """
        async with locked_transaction(db, self._locks, [user_id]):
            if not await self._repo.claim_backfill(db, user_id, self._clock()):
                logger.debug("History backfill skipped, already done: user=%s", user_id)
                return BackfillResponse(created_entries=0, already_backfilled=True)

            cards = await self._card_repo.list_cards(db, user_id)
            entries = await self.record(db, user_id, backfill_drafts(cards))

        logger.info("History backfilled: user=%s, entries=%d", user_id, len(entries))
        return BackfillResponse(created_entries=len(entries), already_backfilled=False)
