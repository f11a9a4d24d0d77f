"""Pure helpers over one user's ordered card list."""

from src.cp_cards.domain.models import Card


def find_card(cards: list[Card], card_id: int) -> Card | None:
    for card in cards:
        if card.id == card_id:
            return card
    return None


def replace_card(cards: list[Card], updated: Card) -> list[Card]:
    """New list with ``updated`` in place of the card with the same id (position kept)."""
    return [updated if card.id == updated.id else card for card in cards]


def remove_card(cards: list[Card], card_id: int) -> list[Card]:
    return [card for card in cards if card.id != card_id]
