"""AdminService: cross-user operations, admin role required at the router.

Cross-user mutations lock every involved user (sorted order, via
hold_many) and rewrite all affected collections in one transaction.
They write no change-history entries.
"""

import logging
from dataclasses import replace

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_admin.application.schemas import RoleResponse, SwapResponse, TransferResponse
from src.cp_admin.domain.repository import UserDirectoryProtocol
from src.cp_admin.infrastructure.persistence import UserDirectory
from src.cp_cards.application.schemas import CardItem, CardListResponse
from src.cp_cards.domain.collection import find_card, remove_card
from src.cp_cards.domain.repository import CardRepositoryProtocol
from src.cp_cards.infrastructure.persistence import CardRepository
from src.cp_common.enums import UserRole
from src.cp_common.errors import (
    CardNotFoundError,
    InvalidAdminOperationError,
    UserNotFoundError,
)
from src.cp_common.locks import UserLocks, get_user_locks
from src.cp_common.transaction import locked_transaction

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(
        self,
        users: UserDirectoryProtocol | None = None,
        cards: CardRepositoryProtocol | None = None,
        locks: UserLocks | None = None,
    ) -> None:
        self._users: UserDirectoryProtocol = users or UserDirectory()
        self._cards: CardRepositoryProtocol = cards or CardRepository()
        self._locks: UserLocks = locks or get_user_locks()

    async def _require_user(self, db: AsyncSession, user_id: str) -> None:
        if await self._users.get_user(db, user_id) is None:
            raise UserNotFoundError(user_id)

    async def assign_role(
        self, db: AsyncSession, user_id: str, role: UserRole
    ) -> RoleResponse:
        try:
            record = await self._users.set_role(db, user_id, role)
            if record is None:
                raise UserNotFoundError(user_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Role assigned: user=%s, role=%s", user_id, role.value)
        return RoleResponse(user_id=record.user_id, username=record.username, role=record.role)

    async def get_cards_for_user(self, db: AsyncSession, user_id: str) -> CardListResponse:
        await self._require_user(db, user_id)
        cards = await self._cards.list_cards(db, user_id)
        return CardListResponse(items=[CardItem.from_domain(c) for c in cards], total=len(cards))

    async def transfer_card(
        self, db: AsyncSession, card_id: int, new_owner_id: str
    ) -> TransferResponse:
        """Move one card, unchanged, to the end of another user's collection."""
        await self._require_user(db, new_owner_id)
        owner_id = await self._cards.find_owner(db, card_id)
        if owner_id is None:
            raise CardNotFoundError(card_id)
        if owner_id == new_owner_id:
            raise InvalidAdminOperationError(f"card {card_id} already belongs to {new_owner_id}")

        async with locked_transaction(db, self._locks, [owner_id, new_owner_id]):
            source = await self._cards.list_cards(db, owner_id)
            card = find_card(source, card_id)
            if card is None:  # moved or deleted before the locks were taken
                raise CardNotFoundError(card_id)
            target = await self._cards.list_cards(db, new_owner_id)
            await self._cards.replace_cards(
                db, new_owner_id, [*target, replace(card, owner_id=new_owner_id)]
            )
            await self._cards.replace_cards(db, owner_id, remove_card(source, card_id))

        logger.info("Card transferred: card=%d, %s -> %s", card_id, owner_id, new_owner_id)
        return TransferResponse(
            card_id=card_id, previous_owner_id=owner_id, new_owner_id=new_owner_id
        )

    async def swap_collections(
        self, db: AsyncSession, user_a: str, user_b: str
    ) -> SwapResponse:
        """Exchange the complete card lists of two users."""
        await self._require_user(db, user_a)
        await self._require_user(db, user_b)
        if user_a == user_b:
            raise InvalidAdminOperationError("cannot swap a collection with itself")

        async with locked_transaction(db, self._locks, [user_a, user_b]):
            cards_a = await self._cards.list_cards(db, user_a)
            cards_b = await self._cards.list_cards(db, user_b)
            await self._cards.replace_cards(
                db, user_a, [replace(c, owner_id=user_a) for c in cards_b]
            )
            await self._cards.replace_cards(
                db, user_b, [replace(c, owner_id=user_b) for c in cards_a]
            )

        logger.info(
            "Collections swapped: %s (%d cards) <-> %s (%d cards)",
            user_a, len(cards_a), user_b, len(cards_b),
        )
        return SwapResponse(
            user_a=user_a,
            user_b=user_b,
            user_a_card_count=len(cards_b),
            user_b_card_count=len(cards_a),
        )
