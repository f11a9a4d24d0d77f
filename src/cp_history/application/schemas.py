"""Pydantic schemas for the cp_history API."""

from typing import Any

from pydantic import BaseModel

from src.cp_history.domain.models import ChangeHistoryEntry


class HistoryEntryItem(BaseModel):
    action: str
    card_ids: list[int]
    summary: str
    details: dict[str, Any]
    timestamp: str  # ISO8601 string

    @classmethod
    def from_domain(cls, entry: ChangeHistoryEntry) -> "HistoryEntryItem":
        return cls(
            action=entry.action.value,
            card_ids=list(entry.card_ids),
            summary=entry.summary,
            details=entry.details,
            timestamp=entry.timestamp.isoformat(),
        )


class HistoryPageResponse(BaseModel):
    items: list[HistoryEntryItem]
    limit: int
    offset: int
    has_more: bool


class BackfillResponse(BaseModel):
    created_entries: int
    already_backfilled: bool
