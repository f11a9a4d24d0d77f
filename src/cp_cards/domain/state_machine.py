"""Card lifecycle transitions.

    forSale ──mark_sold──────────▶ sold
    forSale ──record_trade(given)─▶ tradedGiven ──revert_trade──▶ forSale
    forSale ──record_trade(recv)──▶ tradedReceived

sold and tradedReceived are terminal. Nothing else may change
transaction_type; creation always starts at forSale.
"""

from dataclasses import dataclass, replace
from datetime import datetime

from src.cp_cards.domain.models import Card, TradeReference
from src.cp_common.enums import TransactionType
from src.cp_common.errors import (
    CardNotFoundError,
    InvalidCardTransitionError,
    InvalidTradeError,
    NoValidTradeCardsError,
)

ALLOWED_TRANSITIONS: dict[TransactionType, frozenset[TransactionType]] = {
    TransactionType.FOR_SALE: frozenset({
        TransactionType.SOLD,
        TransactionType.TRADED_GIVEN,
        TransactionType.TRADED_RECEIVED,
    }),
    TransactionType.SOLD: frozenset(),
    TransactionType.TRADED_GIVEN: frozenset({TransactionType.FOR_SALE}),
    TransactionType.TRADED_RECEIVED: frozenset(),
}


def can_transition(current: TransactionType, target: TransactionType) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def _ensure(card: Card, target: TransactionType) -> None:
    if not can_transition(card.transaction_type, target):
        raise InvalidCardTransitionError(card.id, card.transaction_type.value, target.value)


def mark_sold(card: Card, sale_price: float, sale_date: datetime) -> Card:
    _ensure(card, TransactionType.SOLD)
    return replace(
        card,
        transaction_type=TransactionType.SOLD,
        sale_price=sale_price,
        sale_date=sale_date,
    )


def give_in_trade(card: Card, reference: TradeReference) -> Card:
    _ensure(card, TransactionType.TRADED_GIVEN)
    return replace(card, transaction_type=TransactionType.TRADED_GIVEN, trade_reference=reference)


def receive_in_trade(card: Card, reference: TradeReference) -> Card:
    _ensure(card, TransactionType.TRADED_RECEIVED)
    return replace(card, transaction_type=TransactionType.TRADED_RECEIVED, trade_reference=reference)


def revert_given(card: Card) -> Card:
    _ensure(card, TransactionType.FOR_SALE)
    return replace(card, transaction_type=TransactionType.FOR_SALE, trade_reference=None)


@dataclass(frozen=True)
class TradeResult:
    cards: list[Card]                 # caller's full collection after the trade
    reference: TradeReference
    skipped_given: tuple[int, ...]    # requested given ids that were not tradeable


def apply_trade(
    cards: list[Card],
    given_ids: list[int],
    received_ids: list[int],
) -> TradeResult:
    """Apply one trade to a user's collection.

    Given ids that are absent or not forSale are skipped; if none remain the
    trade fails. Received ids get no such leniency: each must be present in
    ``cards`` (the caller checks presence first to report ownership vs.
    not-found) and be forSale.
    """
    overlap = set(given_ids) & set(received_ids)
    if overlap:
        raise InvalidTradeError(f"cards on both sides: {sorted(overlap)}")

    by_id = {card.id: card for card in cards}
    valid_given: list[int] = []
    skipped: list[int] = []
    for card_id in dict.fromkeys(given_ids):
        card = by_id.get(card_id)
        if card is not None and card.transaction_type == TransactionType.FOR_SALE:
            valid_given.append(card_id)
        else:
            skipped.append(card_id)
    if not valid_given:
        raise NoValidTradeCardsError()

    received = list(dict.fromkeys(received_ids))
    reference = TradeReference(given_cards=tuple(valid_given), received_cards=tuple(received))

    updated: dict[int, Card] = {}
    for card_id in valid_given:
        updated[card_id] = give_in_trade(by_id[card_id], reference)
    for card_id in received:
        if card_id not in by_id:
            raise CardNotFoundError(card_id)
        updated[card_id] = receive_in_trade(by_id[card_id], reference)

    return TradeResult(
        cards=[updated.get(card.id, card) for card in cards],
        reference=reference,
        skipped_given=tuple(skipped),
    )
