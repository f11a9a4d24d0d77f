"""Card repository Protocol.

Storage is per user: a user's collection is read as one ordered list and
written back as one list. Unit tests inject the in-memory implementation;
production uses the PostgreSQL one.
"""

from collections.abc import Sequence
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_cards.domain.models import Card


class CardRepositoryProtocol(Protocol):
    async def list_cards(self, db: AsyncSession, owner_id: str) -> list[Card]: ...

    async def replace_cards(
        self, db: AsyncSession, owner_id: str, cards: Sequence[Card]
    ) -> None: ...

    async def allocate_card_id(self, db: AsyncSession) -> int: ...

    async def find_owner(self, db: AsyncSession, card_id: int) -> str | None: ...
