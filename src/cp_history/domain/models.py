"""Domain models for cp_history: append-only change log entries."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.cp_common.enums import ChangeAction


@dataclass(frozen=True)
class HistoryDraft:
    """An entry before the log assigns its timestamp."""

    action: ChangeAction
    card_ids: tuple[int, ...]
    summary: str
    details: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ChangeHistoryEntry:
    user_id: str
    timestamp: datetime
    action: ChangeAction
    card_ids: tuple[int, ...]
    summary: str
    details: dict[str, Any] = field(default_factory=dict)
    id: int | None = None   # storage sequence; None until persisted

    @classmethod
    def from_draft(
        cls, user_id: str, timestamp: datetime, draft: HistoryDraft
    ) -> "ChangeHistoryEntry":
        return cls(
            user_id=user_id,
            timestamp=timestamp,
            action=draft.action,
            card_ids=draft.card_ids,
            summary=draft.summary,
            details=dict(draft.details),
        )
