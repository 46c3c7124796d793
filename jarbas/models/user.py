"""User ORM — the account aggregate root; owns at most one Profile.

Invariants:
    - id is UUID primary key (client-side default)
    - email is unique and stored normalized (strip + lower-case)
    - username always mirrors email
    - password_hash is never serialized in API responses (schemas/user.py omits it)

Design Decisions:
    - profile is one-to-one (uselist=False) with delete-orphan cascade: a Profile cannot outlive its User
    - lazy="selectin" on profile: eager-loaded, no implicit IO on attribute access in async context
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from jarbas.db.base import Base, utcnow


class User(Base):
    """User account — identity plus credential hash."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(
        String(254), nullable=False, unique=True, index=True,
    )
    username: Mapped[str] = mapped_column(
        String(254), nullable=False, unique=True,
    )
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    profile: Mapped[Optional["Profile"]] = relationship(
        "Profile", back_populates="user", uselist=False,
        cascade="all, delete-orphan", lazy="selectin",
    )
