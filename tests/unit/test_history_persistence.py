"""Unit tests for HistoryRepository SQL calls and row mapping (mocked DB)."""

import json
from datetime import UTC, datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from src.cp_common.enums import ChangeAction
from src.cp_history.infrastructure.persistence import HistoryRepository, _row_to_entry

AT = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _scalar_result(value: object) -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


class TestClaimBackfill:
    async def test_first_claim_gets_row_back(self) -> None:
        db = AsyncMock()
        db.execute = AsyncMock(return_value=_scalar_result("user-1"))

        assert await HistoryRepository().claim_backfill(db, "user-1", AT)

        sql, params = db.execute.await_args.args
        assert "ON CONFLICT (user_id) DO NOTHING" in str(sql)
        assert "RETURNING user_id" in str(sql)
        assert params == {"user_id": "user-1", "at": AT}

    async def test_existing_marker_returns_false(self) -> None:
        db = AsyncMock()
        db.execute = AsyncMock(return_value=_scalar_result(None))
        assert not await HistoryRepository().claim_backfill(db, "user-1", AT)


def test_row_with_text_details() -> None:
    row = SimpleNamespace(
        id=3,
        user_id="user-1",
        action="markSold",
        card_ids=[7],
        summary="Sold",
        details=json.dumps({"sale_price": 12.5}),
        created_at=AT,
    )
    entry = _row_to_entry(row)
    assert entry.action == ChangeAction.MARK_SOLD
    assert entry.card_ids == (7,)
    assert entry.details == {"sale_price": 12.5}
