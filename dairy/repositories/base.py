"""Shared helpers for ORM repositories."""
from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Mapping, TypeVar

from sqlalchemy.orm import Session

from dairy.models import Base, utcnow

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository:
    """Base repository wrapping a request-scoped session.

    Each write is committed on its own; the service layer never needs a
    multi-statement transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        return self._session

    def _add(self, instance: ModelT) -> ModelT:
        self._session.add(instance)
        self._commit()
        self._session.refresh(instance)
        return instance

    def _patch(self, instance: ModelT, fields: Mapping[str, Any]) -> ModelT:
        for key, value in fields.items():
            setattr(instance, key, value)
        instance.updated_at = utcnow()
        self._commit()
        self._session.refresh(instance)
        return instance

    def _remove(self, instance: Base) -> None:
        self._session.delete(instance)
        self._commit()

    def _commit(self) -> None:
        try:
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

    @staticmethod
    def _to_decimal(value: Any) -> Decimal:
        if isinstance(value, Decimal):
            return value
        if value is None:
            raise ValueError("Cannot convert None to Decimal")
        return Decimal(str(value))

    @staticmethod
    def _coerce_utc_naive(value: Any) -> datetime:
        """Return ``value`` as a naive UTC datetime, the stored form of dates."""

        if isinstance(value, datetime):
            if value.tzinfo is not None:
                value = value.astimezone(timezone.utc).replace(tzinfo=None)
            return value
        if isinstance(value, date):
            return datetime(value.year, value.month, value.day)
        if value is None:
            raise ValueError("Cannot convert None to datetime")
        return BaseRepository._coerce_utc_naive(datetime.fromisoformat(str(value)))
