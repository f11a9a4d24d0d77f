"""Synthesize history for cards that predate the change log.

All backfilled entries get the same "now" timestamp when stored; no original
add/sale time is reconstructed, so they sort as one contiguous recent block.
"""

from src.cp_cards.domain.models import Card
from src.cp_common.enums import TransactionType
from src.cp_history.domain.models import HistoryDraft
from src.cp_history.domain.summaries import card_added, card_sold


def backfill_drafts(cards: list[Card]) -> list[HistoryDraft]:
    """One addCard per card (any state), then one markSold per sold card."""
    drafts = [card_added(card) for card in cards]
    drafts.extend(
        card_sold(card) for card in cards if card.transaction_type == TransactionType.SOLD
    )
    return drafts
