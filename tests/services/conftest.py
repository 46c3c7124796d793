"""Service test fixtures — async DB, services under test and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB
    - db_manager patched so the readiness probe hits the test DB
    - read_db is a separate session: it sees committed state, not test_db's identity map

Design Decisions:
    - SQLite in-memory on one shared connection (StaticPool) so read_db sees
      what test_db committed; PRAGMA foreign_keys=ON makes ON DELETE CASCADE
      behave as it does on PostgreSQL
    - bcrypt cost 4: real hashing, fast enough for every test
"""

import pytest
from sqlalchemy import event, func, select
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from jarbas.core.credential_policy import PasswordPolicy, PolicyCredentialValidator
from jarbas.db.base import Base
from jarbas.infrastructure.database import get_db, DatabaseSessionManager
from jarbas.infrastructure.password_hasher import BcryptHasher
from jarbas.models.currency import Currency
from jarbas.services.goal_registrar import GoalRegistrar
from jarbas.services.identity_manager import IdentityManager
import jarbas.infrastructure.database as db_module
import jarbas.models  # noqa: F401
from jarbas.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def read_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def hasher():
    return BcryptHasher(rounds=4)


@pytest.fixture
def validator():
    return PolicyCredentialValidator(PasswordPolicy())


@pytest.fixture
def manager(test_db, validator, hasher):
    return IdentityManager(test_db, validator, hasher)


@pytest.fixture
def registrar(test_db):
    return GoalRegistrar(test_db)


@pytest.fixture
async def currency(test_db):
    """Insert one currency (BRL) into the test DB."""
    brl = Currency(code="BRL", name="Real brasileiro", symbol="R$")
    test_db.add(brl)
    await test_db.commit()
    await test_db.refresh(brl)
    return brl


@pytest.fixture
async def user(manager):
    return await manager.create_user("Ana", "ana@x.com", "Str0ng!pw")


@pytest.fixture
def count_rows(read_db):
    """Count rows of an ORM model as seen by a separate session."""
    async def _count(model) -> int:
        return await read_db.scalar(select(func.count()).select_from(model))
    return _count


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
