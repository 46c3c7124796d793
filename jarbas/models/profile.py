"""Profile ORM — financial profile owned by exactly one User.

Invariants:
    - Always belongs to a User (user_id FK, unique, ON DELETE CASCADE)
    - Zero or one Profile per User
    - Edits mutate the same row; id never changes after creation

Design Decisions:
    - currency_id carries NO foreign key: profile currencies are not
      existence-checked, a dangling id reads back as currency=None
    - currency is a view-only join (foreign() annotation) loaded with selectin
"""

import uuid
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from jarbas.db.base import Base


class Profile(Base):
    """Risk and income attributes of a user."""
    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, unique=True,
    )
    target_value: Mapped[Decimal | None] = mapped_column(
        Numeric(14, 2), nullable=True,
    )
    currency_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    fixed_income: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    occupation: Mapped[str | None] = mapped_column(String(120), nullable=True)
    age_range: Mapped[str | None] = mapped_column(String(20), nullable=True)
    time_horizon: Mapped[str | None] = mapped_column(String(20), nullable=True)

    user: Mapped["User"] = relationship("User", back_populates="profile")
    currency: Mapped[Optional["Currency"]] = relationship(
        "Currency",
        primaryjoin="foreign(Profile.currency_id) == Currency.id",
        viewonly=True, lazy="selectin",
    )
