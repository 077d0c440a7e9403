"""FastAPI application instance and startup hooks."""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.orm import sessionmaker

from dairy import __version__
from dairy.core.config import Settings, get_settings
from dairy.core.log import configure_logging, get_logger
from dairy.core.security import SecurityProvider
from dairy.db import create_sync_engine, get_sessionmaker, init_db
from dairy.middleware import AuthMiddleware, RequestContextMiddleware
from dairy.routers import (
    auth_router,
    farmers_router,
    farms_router,
    payments_router,
    production_router,
    users_router,
)
from dairy.services import CurrencyConverter
from dairy.web.errors import register_error_handlers

LOGGER = get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    session_factory: sessionmaker | None = None,
    currency_converter: CurrencyConverter | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    The storage handle and the currency converter reach request handlers
    through ``app.state``. Callers may inject their own, and the app then
    leaves closing them to the caller.
    """

    settings = settings or get_settings()
    configure_logging(settings)

    # Injected resources belong to the caller and outlive the app.
    owns_engine = session_factory is None
    owns_converter = currency_converter is None
    if session_factory is None:
        engine = create_sync_engine(settings.database.sqlalchemy_url)
        session_factory = get_sessionmaker(engine=engine)
    if currency_converter is None:
        currency_converter = CurrencyConverter.from_settings(settings.currency)
    security_provider = SecurityProvider(settings.auth)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(app.state.session_factory.kw["bind"])
        LOGGER.info("Dairy payments API started")
        try:
            yield
        finally:
            if owns_converter:
                await app.state.currency_converter.aclose()
            if owns_engine:
                app.state.session_factory.kw["bind"].dispose()
            LOGGER.info("Dairy payments API stopped")

    app = FastAPI(title="Dairy Payments API", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.currency_converter = currency_converter
    app.state.security_provider = security_provider

    app.add_middleware(AuthMiddleware, security_provider=security_provider)
    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(farmers_router)
    app.include_router(farms_router)
    app.include_router(production_router)
    app.include_router(payments_router)

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    LOGGER.info("FastAPI application initialised")
    return app


app = create_app()
