"""Opinionated SQLAlchemy session helpers."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .engine import create_sync_engine


def get_sessionmaker(url: str | None = None, *, engine: Engine | None = None, **kwargs) -> sessionmaker:
    """Return a ``sessionmaker`` bound to ``engine`` or to a freshly created one."""

    bound = engine or create_sync_engine(url, **kwargs)
    return sessionmaker(bind=bound, autoflush=False, expire_on_commit=False)


@contextmanager
def session_scope(factory: sessionmaker) -> Iterator[Session]:
    """Provide a transactional scope for imperative scripts."""

    session = factory()
    try:
        yield session
        session.commit()
    except Exception:  # pragma: no cover - re-raise for callers
        session.rollback()
        raise
    finally:
        session.close()
