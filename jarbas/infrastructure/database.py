"""Database Access — async engine, per-request sessions and the unit-of-work boundary.

Invariants:
    - transaction() commits every pending write of one operation together, or none
    - Any SQLAlchemy failure leaves the session rolled back
    - IntegrityError surfaces as ConstraintViolationError (409); every other
      SQLAlchemy failure as DatabaseError (503), labelled by failure kind
    - Driver messages are logged, never placed in the DatabaseError shown to clients

Design Decisions:
    - Module-level db_manager, created and disposed by the FastAPI lifespan
    - Pool sizing only applies to server databases; SQLite gets the dialect default
    - expire_on_commit=False: committed objects stay readable without implicit IO
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from jarbas.core.errors import ConstraintViolationError, DatabaseError, JarbasError

logger = logging.getLogger(__name__)

# OperationalError is a DBAPIError, so it must be matched first
_FAILURE_KINDS: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (OperationalError, "Connection or operational error", "operational"),
    (DBAPIError, "Database driver error", "driver"),
)


def to_database_error(e: SQLAlchemyError) -> JarbasError:
    if isinstance(e, IntegrityError):
        logger.warning(f"Constraint violation: {e.orig}")
        return ConstraintViolationError()
    message, kind = "Database operation failed", "sqlalchemy"
    for failure, failure_message, failure_kind in _FAILURE_KINDS:
        if isinstance(e, failure):
            message, kind = failure_message, failure_kind
            break
    logger.error(f"{type(e).__name__} ({kind}): {e}")
    return DatabaseError(message, kind)


@asynccontextmanager
async def transaction(db: AsyncSession) -> AsyncGenerator[AsyncSession, None]:
    """Commit on success; on any exception roll back and re-raise."""
    try:
        yield db
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise to_database_error(e) from e
    except Exception:
        await db.rollback()
        raise


def _engine_options(database_url: str, pool_size: int, max_overflow: int) -> dict:
    if make_url(database_url).get_backend_name() == "sqlite":
        return {}
    return {
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }


class DatabaseSessionManager:
    """Owns the engine and hands out sessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url, **_engine_options(database_url, pool_size, max_overflow),
        )
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self._session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                await session.rollback()
                raise to_database_error(e) from e

    async def health_check(self) -> bool:
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except (DatabaseError, OSError) as e:
            logger.error(f"DB health check failed: {e}")
            return False
        return True

    async def close(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> None:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    safe_url = make_url(database_url).render_as_string(hide_password=True)
    logger.info(f"Database engine created for {safe_url}")


async def close_db() -> None:
    global db_manager
    if db_manager is not None:
        await db_manager.close()
        db_manager = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if db_manager is None:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
