"""CardApplicationService: every mutation of a user's card collection.

Each mutation is one unit of work:
  1. take the user's write guard
  2. load the whole collection
  3. build the new collection with pure domain functions
  4. write it back and append the history entry
  5. commit (or roll back everything on any error)

Reads (list_cards, suggestions) run without the guard.
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import NoReturn

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_cards.application.schemas import (
    CardItem,
    CardListResponse,
    DeleteCardResponse,
    SuggestionsResponse,
    TradeResponse,
)
from src.cp_cards.domain import state_machine
from src.cp_cards.domain.collection import find_card, remove_card, replace_card
from src.cp_cards.domain.models import Card, CardAttributes, TradeReference
from src.cp_cards.domain.repository import CardRepositoryProtocol
from src.cp_cards.domain.suggestions import filter_suggestions, unique_values
from src.cp_cards.infrastructure.persistence import CardRepository
from src.cp_common.datetime_utils import Clock, utc_now
from src.cp_common.errors import (
    CardNotFoundError,
    CardOwnershipError,
    InvalidCardAttributesError,
)
from src.cp_common.locks import UserLocks, get_user_locks
from src.cp_common.money import validate_price
from src.cp_common.transaction import locked_transaction
from src.cp_history.application.service import ChangeHistoryService
from src.cp_history.domain import summaries

logger = logging.getLogger(__name__)


class CardApplicationService:
    def __init__(
        self,
        repo: CardRepositoryProtocol | None = None,
        history: ChangeHistoryService | None = None,
        locks: UserLocks | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._repo: CardRepositoryProtocol = repo or CardRepository()
        self._locks: UserLocks = locks or get_user_locks()
        self._history = history or ChangeHistoryService(
            card_repo=self._repo, locks=self._locks, clock=clock
        )
        self._clock = clock

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def list_cards(self, db: AsyncSession, user_id: str) -> CardListResponse:
        cards = await self._repo.list_cards(db, user_id)
        return CardListResponse(
            items=[CardItem.from_domain(c) for c in cards], total=len(cards)
        )

    async def suggestions(
        self, db: AsyncSession, user_id: str, field: str, query: str | None
    ) -> SuggestionsResponse:
        cards = await self._repo.list_cards(db, user_id)
        values = filter_suggestions(unique_values(cards, field), query)
        return SuggestionsResponse(field=field, values=values)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create_card(
        self,
        db: AsyncSession,
        user_id: str,
        attrs: CardAttributes,
        image_ref: str | None = None,
    ) -> CardItem:
        attrs.validate()
        async with locked_transaction(db, self._locks, [user_id]):
            cards = await self._repo.list_cards(db, user_id)
            card_id = await self._repo.allocate_card_id(db)
            card = Card.create(card_id, user_id, attrs, image_ref=image_ref)
            await self._repo.replace_cards(db, user_id, [*cards, card])
            await self._history.record(db, user_id, [summaries.card_added(card)])

        logger.info("Card created: user=%s, card=%d", user_id, card.id)
        return CardItem.from_domain(card)

    async def update_card(
        self, db: AsyncSession, user_id: str, card_id: int, attrs: CardAttributes
    ) -> CardItem:
        attrs.validate()
        async with locked_transaction(db, self._locks, [user_id]):
            cards = await self._repo.list_cards(db, user_id)
            before = await self._owned(db, cards, card_id)
            after = before.with_attributes(attrs)
            await self._repo.replace_cards(db, user_id, replace_card(cards, after))
            await self._history.record(db, user_id, [summaries.card_edited(before, after)])
        return CardItem.from_domain(after)

    async def delete_card(
        self, db: AsyncSession, user_id: str, card_id: int
    ) -> DeleteCardResponse:
        async with locked_transaction(db, self._locks, [user_id]):
            cards = await self._repo.list_cards(db, user_id)
            card = await self._owned(db, cards, card_id)
            await self._repo.replace_cards(db, user_id, remove_card(cards, card_id))
            await self._history.record(db, user_id, [summaries.card_deleted(card)])

        logger.info("Card deleted: user=%s, card=%d", user_id, card_id)
        return DeleteCardResponse(card_id=card_id, deleted=True)

    async def set_sale_price(
        self, db: AsyncSession, user_id: str, card_id: int, sale_price: float
    ) -> CardItem:
        """Asking/realised price; allowed in every state and never moves the state."""
        _check_price(sale_price)
        async with locked_transaction(db, self._locks, [user_id]):
            cards = await self._repo.list_cards(db, user_id)
            before = await self._owned(db, cards, card_id)
            after = replace(before, sale_price=sale_price)
            await self._repo.replace_cards(db, user_id, replace_card(cards, after))
            await self._history.record(
                db, user_id, [summaries.sale_price_updated(before, sale_price)]
            )
        return CardItem.from_domain(after)

    async def mark_sold(
        self,
        db: AsyncSession,
        user_id: str,
        card_id: int,
        sale_price: float,
        sale_date: datetime | None = None,
    ) -> CardItem:
        _check_price(sale_price)
        async with locked_transaction(db, self._locks, [user_id]):
            cards = await self._repo.list_cards(db, user_id)
            card = await self._owned(db, cards, card_id)
            sold = state_machine.mark_sold(card, sale_price, sale_date or self._clock())
            await self._repo.replace_cards(db, user_id, replace_card(cards, sold))
            await self._history.record(db, user_id, [summaries.card_sold(sold)])

        logger.info("Card sold: user=%s, card=%d, price=%.2f", user_id, card_id, sale_price)
        return CardItem.from_domain(sold)

    async def record_trade(
        self,
        db: AsyncSession,
        user_id: str,
        given_ids: list[int],
        received_ids: list[int],
    ) -> TradeResponse:
        """Given ids that are not the caller's forSale cards are skipped;
        received ids must all be the caller's forSale cards."""
        async with locked_transaction(db, self._locks, [user_id]):
            cards = await self._repo.list_cards(db, user_id)
            owned = {c.id for c in cards}
            given = set(given_ids)
            for card_id in received_ids:
                if card_id not in owned and card_id not in given:
                    await self._raise_missing(db, card_id)

            result = state_machine.apply_trade(cards, given_ids, received_ids)
            await self._repo.replace_cards(db, user_id, result.cards)
            await self._history.record(
                db, user_id, [summaries.trade_recorded(result.reference)]
            )

        if result.skipped_given:
            logger.info(
                "Trade skipped untradeable cards: user=%s, skipped=%s",
                user_id, list(result.skipped_given),
            )
        logger.info(
            "Trade recorded: user=%s, given=%s, received=%s",
            user_id, list(result.reference.given_cards), list(result.reference.received_cards),
        )
        return TradeResponse(
            given_card_ids=list(result.reference.given_cards),
            received_card_ids=list(result.reference.received_cards),
            skipped_card_ids=list(result.skipped_given),
        )

    async def revert_trade(
        self,
        db: AsyncSession,
        user_id: str,
        card_id: int,
        trade_reference: TradeReference | None = None,
    ) -> CardItem:
        """Return a given card to forSale. Cards received in that trade are untouched."""
        async with locked_transaction(db, self._locks, [user_id]):
            cards = await self._repo.list_cards(db, user_id)
            card = await self._owned(db, cards, card_id)
            reverted = state_machine.revert_given(card)
            await self._repo.replace_cards(db, user_id, replace_card(cards, reverted))
            reference = trade_reference or card.trade_reference
            await self._history.record(
                db, user_id, [summaries.trade_reverted(card, reference)]
            )
        return CardItem.from_domain(reverted)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _owned(self, db: AsyncSession, cards: list[Card], card_id: int) -> Card:
        card = find_card(cards, card_id)
        if card is None:
            await self._raise_missing(db, card_id)
        return card

    async def _raise_missing(self, db: AsyncSession, card_id: int) -> NoReturn:
        """Card is not in the caller's collection: someone else's, or nobody's."""
        if await self._repo.find_owner(db, card_id) is not None:
            raise CardOwnershipError(card_id)
        raise CardNotFoundError(card_id)


def _check_price(price: float) -> None:
    try:
        validate_price(price)
    except ValueError as exc:
        raise InvalidCardAttributesError(str(exc)) from None
