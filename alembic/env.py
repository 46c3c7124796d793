"""Alembic environment — runs Jarbas migrations through an async engine.

Invariants:
    - The URL comes from jarbas.config.Settings when DATABASE_URL is set,
      so migrations and the API always agree on the database
    - Base.metadata is fully populated (jarbas.models imported) before autogenerate
"""

import asyncio
import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import async_engine_from_config

from jarbas.config import get_settings
from jarbas.db.base import Base
import jarbas.models  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

if os.environ.get("DATABASE_URL"):
    # configparser interpolates "%", escape it for URL-encoded passwords
    config.set_main_option(
        "sqlalchemy.url", get_settings().database_url.replace("%", "%%"),
    )

target_metadata = Base.metadata


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata, compare_type=True, **kwargs,
    )
    with context.begin_transaction():
        context.run_migrations()


async def _run_online() -> None:
    engine = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    try:
        async with engine.connect() as connection:
            await connection.run_sync(lambda sync_conn: _configure(connection=sync_conn))
    finally:
        await engine.dispose()


if context.is_offline_mode():
    _configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
else:
    asyncio.run(_run_online())
