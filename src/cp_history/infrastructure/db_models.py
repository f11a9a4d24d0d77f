"""SQLAlchemy ORM models for cp_history.

These map to tables created by Alembic migrations 005 and 006.
DO NOT add/remove columns here without a corresponding migration.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import BigInteger, DateTime, String, Text
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlalchemy.orm import Mapped, mapped_column

from src.cp_common.database import Base


class ChangeHistoryORM(Base):
    __tablename__ = "change_history"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    action: Mapped[str] = mapped_column(String(20), nullable=False)
    card_ids: Mapped[list[int]] = mapped_column(ARRAY(BigInteger), nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    details: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    # No updated_at, change_history is append-only


class HistoryBackfillMarkerORM(Base):
    __tablename__ = "history_backfill_markers"

    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    backfilled_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
