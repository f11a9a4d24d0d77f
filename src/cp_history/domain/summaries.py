"""Human-readable summaries (plus structured details) for each change action.

The summary string is what the history page shows; ``details`` carries the
same before/after values in machine-readable form.
"""

from datetime import datetime

from src.cp_cards.domain.models import Card, TradeReference
from src.cp_common.enums import ChangeAction
from src.cp_common.money import to_display
from src.cp_history.domain.models import HistoryDraft

UNKNOWN_PRICE = "unknown price"


def _date(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d") if value is not None else "unknown date"


def card_added(card: Card) -> HistoryDraft:
    return HistoryDraft(
        action=ChangeAction.ADD_CARD,
        card_ids=(card.id,),
        summary=f"Added card '{card.name}' ({card.rarity}, {card.payment_method.value})",
        details={"name": card.name, "payment_method": card.payment_method.value},
    )


def card_edited(before: Card, after: Card) -> HistoryDraft:
    if before.name == after.name:
        summary = f"Edited card '{after.name}'"
    else:
        summary = f"Edited card '{before.name}' → '{after.name}'"
    return HistoryDraft(
        action=ChangeAction.EDIT_CARD,
        card_ids=(after.id,),
        summary=summary,
        details={"old_name": before.name, "new_name": after.name},
    )


def card_deleted(card: Card) -> HistoryDraft:
    return HistoryDraft(
        action=ChangeAction.DELETE_CARD,
        card_ids=(card.id,),
        summary=f"Deleted card '{card.name}'",
        details={"name": card.name, "transaction_type": card.transaction_type.value},
    )


def sale_price_updated(card: Card, new_price: float) -> HistoryDraft:
    if card.sale_price is None:
        summary = f"Set sale price of '{card.name}' to {to_display(new_price)}"
    else:
        summary = (
            f"Updated sale price of '{card.name}': "
            f"{to_display(card.sale_price)} → {to_display(new_price)}"
        )
    return HistoryDraft(
        action=ChangeAction.UPDATE_SALE_PRICE,
        card_ids=(card.id,),
        summary=summary,
        details={"old_price": card.sale_price, "new_price": new_price},
    )


def card_sold(card: Card) -> HistoryDraft:
    """``card`` is the card after the sale, or a backfilled sold card."""
    price = to_display(card.sale_price) if card.sale_price is not None else UNKNOWN_PRICE
    return HistoryDraft(
        action=ChangeAction.MARK_SOLD,
        card_ids=(card.id,),
        summary=f"Sold '{card.name}' for {price} on {_date(card.sale_date)}",
        details={
            "sale_price": card.sale_price,
            "sale_date": card.sale_date.isoformat() if card.sale_date else None,
        },
    )


def trade_recorded(reference: TradeReference) -> HistoryDraft:
    given = len(reference.given_cards)
    received = len(reference.received_cards)
    ids = ", ".join(f"#{card_id}" for card_id in reference.given_cards)
    return HistoryDraft(
        action=ChangeAction.TRADE,
        card_ids=reference.given_cards,
        summary=f"Traded {given} card(s) ({ids}) for {received} card(s)",
        details={
            "given_cards": list(reference.given_cards),
            "received_cards": list(reference.received_cards),
        },
    )


def trade_reverted(card: Card, reference: TradeReference | None) -> HistoryDraft:
    received = list(reference.received_cards) if reference else []
    return HistoryDraft(
        action=ChangeAction.REVERT_TRADE,
        card_ids=(card.id,),
        summary=f"Reverted trade of '{card.name}'; card is for sale again",
        details={"received_cards": received},
    )
