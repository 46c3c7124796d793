"""Currency ORM — reference data; read and existence-checked, never mutated by the API."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from jarbas.db.base import Base


class Currency(Base):
    """ISO currency (seeded by migration 001)."""
    __tablename__ = "currencies"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    code: Mapped[str] = mapped_column(String(3), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(60), nullable=False)
    symbol: Mapped[str] = mapped_column(String(8), nullable=False)
