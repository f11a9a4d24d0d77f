"""Unit tests for autocomplete suggestion helpers."""

import pytest

from src.cp_cards.domain.suggestions import (
    SUGGESTION_FIELDS,
    filter_suggestions,
    unique_values,
)
from src.cp_common.errors import UnsupportedSuggestionFieldError


class TestFilterSuggestions:
    def test_blank_query_returns_all(self) -> None:
        values = ["Germany", "Spain"]
        assert filter_suggestions(values, None) == values
        assert filter_suggestions(values, "   ") == values

    def test_case_insensitive_substring(self) -> None:
        assert filter_suggestions(["Premier League", "LaLiga", "Ligue 1"], "LIG") == [
            "LaLiga",
            "Ligue 1",
        ]

    def test_no_match(self) -> None:
        assert filter_suggestions(["Serie A"], "xyz") == []


class TestUniqueValues:
    def test_supported_fields(self) -> None:
        assert SUGGESTION_FIELDS == {"country", "league", "club", "season"}

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(UnsupportedSuggestionFieldError) as exc_info:
            unique_values([], "notes")
        assert exc_info.value.code == 2007

    def test_empty_collection(self) -> None:
        assert unique_values([], "season") == []
