"""In-memory CardRepositoryProtocol implementation.

Each user's collection is stored as a tuple and swapped in one assignment,
so concurrent readers see either the previous list or the new one. Used by
tests and by local runs without PostgreSQL; the ``db`` argument is ignored.
"""

from collections.abc import Sequence
from dataclasses import replace

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_cards.domain.models import Card
from src.cp_common.id_generator import MonotonicIdAllocator


class InMemoryCardRepository:
    def __init__(self, first_id: int = 0) -> None:
        self._collections: dict[str, tuple[Card, ...]] = {}
        self._owners: dict[int, str] = {}
        self._ids = MonotonicIdAllocator(first_id)

    async def list_cards(self, db: AsyncSession, owner_id: str) -> list[Card]:
        return list(self._collections.get(owner_id, ()))

    async def replace_cards(
        self, db: AsyncSession, owner_id: str, cards: Sequence[Card]
    ) -> None:
        stored = tuple(
            card if card.owner_id == owner_id else replace(card, owner_id=owner_id)
            for card in cards
        )
        for card in self._collections.get(owner_id, ()):
            if self._owners.get(card.id) == owner_id:
                del self._owners[card.id]
        for card in stored:
            self._owners[card.id] = owner_id
        self._collections[owner_id] = stored

    async def allocate_card_id(self, db: AsyncSession) -> int:
        return self._ids.next_id()

    async def find_owner(self, db: AsyncSession, card_id: int) -> str | None:
        return self._owners.get(card_id)
