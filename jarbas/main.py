"""Jarbas API — application factory and ASGI entry point (`uvicorn jarbas.main:app`).

Invariants:
    - Routers are included explicitly, in one place
    - Logging and the database engine live exactly as long as the lifespan
    - CORS origins come from settings
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jarbas import __version__
from jarbas.api.error_handlers import register_error_handlers
from jarbas.api.routes import goals, health, users
from jarbas.config import Settings, get_settings
from jarbas.infrastructure.database import close_db, init_db
from jarbas.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info(f"Jarbas API {__version__} started")
    try:
        yield
    finally:
        await close_db()
        logger.info("Jarbas API stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    application = FastAPI(title="Jarbas API", version=__version__, lifespan=lifespan)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    for module in (health, users, goals):
        application.include_router(module.router)
    register_error_handlers(application)
    return application


app = create_app()
