"""Autocomplete values for free-text card fields, drawn from the user's own cards."""

from src.cp_cards.domain.models import Card
from src.cp_common.errors import UnsupportedSuggestionFieldError

SUGGESTION_FIELDS: frozenset[str] = frozenset({"country", "league", "club", "season"})


def unique_values(cards: list[Card], field: str) -> list[str]:
    """Sorted distinct non-blank values of ``field``, whitespace-trimmed."""
    if field not in SUGGESTION_FIELDS:
        raise UnsupportedSuggestionFieldError(field)
    values = {getattr(card, field).strip() for card in cards}
    values.discard("")
    return sorted(values)


def filter_suggestions(suggestions: list[str], query: str | None) -> list[str]:
    """Case-insensitive substring match; a blank query returns everything."""
    if not query or not query.strip():
        return suggestions
    needle = query.strip().lower()
    return [s for s in suggestions if needle in s.lower()]
