"""Expense ORM — persists the expense record.

Invariants:
    - id is a UUID primary key generated by the domain (Expense.create), not the DB
    - description, amount, category, date are non-nullable
    - created_at fixed at insert; updated_at refreshed by every write

Design Decisions:
    - amount as Float: the API exchanges JSON numbers
    - indexes on date (default ordering) and category (most common filter)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Text, Float, Index
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base
from app.db.types import UTCDateTime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Expense(Base):
    """Expense row."""
    __tablename__ = "expenses"
    __table_args__ = (
        Index("ix_expenses_date", "date"),
        Index("ix_expenses_category", "category"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    category: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, nullable=False, default=_utcnow, onupdate=_utcnow,
    )
