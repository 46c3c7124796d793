"""Declarative Base — metadata, constraint naming and shared column helpers.

Invariants:
    - Every model inherits from Base, so Base.metadata is the full schema
    - Constraint names follow NAMING_CONVENTION (stable across dialects and migrations)
    - Timestamps are timezone-aware UTC
"""

from datetime import datetime, timezone

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
