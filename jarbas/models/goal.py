"""Goal ORM — a user's financial target denominated in a currency.

Invariants:
    - user_id and currency_id resolved before insert (services/goal_registrar.py)
    - target_amount is positive (enforced at the schema boundary)

Design Decisions:
    - No ORM relationships: Goal only references User and Currency, it owns neither
    - ON DELETE CASCADE on user_id: removing a user takes their goals with it
"""

import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from jarbas.db.base import Base, utcnow


class Goal(Base):
    """Financial goal entity."""
    __tablename__ = "goals"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    currency_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("currencies.id"), nullable=False,
    )
    title: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    target_amount: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False,
    )
    target_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
