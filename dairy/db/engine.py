"""Database engine factories."""
from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from dairy.core.config import get_settings
from dairy.core.log import get_logger

LOGGER = get_logger(__name__)


def get_sqlalchemy_url() -> str:
    """Return the configured SQLAlchemy URL."""

    settings = get_settings()
    return settings.database.sqlalchemy_url


def create_sync_engine(url: str | None = None, **kwargs) -> Engine:
    """Create a synchronous SQLAlchemy engine using configured defaults."""

    settings = get_settings()
    resolved_url = url or settings.database.sqlalchemy_url

    options = dict(kwargs)
    options.setdefault("echo", settings.sqlalchemy_echo)
    if resolved_url.startswith("sqlite"):
        # Sessions are used from the event loop thread and from worker threads.
        options.setdefault("connect_args", {"check_same_thread": False})
        if ":memory:" in resolved_url or resolved_url.rstrip("/") == "sqlite:":
            options.setdefault("poolclass", StaticPool)

    masked_url = resolved_url if url else settings.database.masked_url
    LOGGER.debug("Creating SQLAlchemy engine", extra={"url": masked_url, "options": options})
    return create_engine(resolved_url, future=True, **options)


def init_db(engine: Engine) -> None:
    """Create all tables and indexes that do not exist yet."""

    from dairy.models import Base

    Base.metadata.create_all(engine)
    LOGGER.info("Database schema ready (%d tables)", len(Base.metadata.tables))
