"""Data access for monthly payment snapshots."""
from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import select

from dairy.models import MonthlyPayment

from .base import BaseRepository

_DECIMAL_FIELDS = ("price_per_liter", "total_volume_liters", "total_payment")


class PaymentRepository(BaseRepository):
    def find_by_farm_and_month(self, farm_id: str, year: int, month: int) -> MonthlyPayment | None:
        """Return the earliest snapshot stored for the period, if any."""

        statement = (
            select(MonthlyPayment)
            .where(
                MonthlyPayment.farm_id == farm_id,
                MonthlyPayment.year == year,
                MonthlyPayment.month == month,
            )
            .order_by(MonthlyPayment.created_at, MonthlyPayment.id)
            .limit(1)
        )
        return self._session.scalars(statement).first()

    def list_by_farm_and_year(self, farm_id: str, year: int) -> list[MonthlyPayment]:
        statement = (
            select(MonthlyPayment)
            .where(MonthlyPayment.farm_id == farm_id, MonthlyPayment.year == year)
            .order_by(MonthlyPayment.month, MonthlyPayment.created_at, MonthlyPayment.id)
        )
        return list(self._session.scalars(statement))

    def get_payment(self, payment_id: str) -> MonthlyPayment | None:
        return self._session.get(MonthlyPayment, payment_id)

    def create_payment(self, fields: Mapping[str, Any]) -> MonthlyPayment:
        return self._add(MonthlyPayment(**self._normalise(fields)))

    def update_payment(self, payment: MonthlyPayment, fields: Mapping[str, Any]) -> MonthlyPayment:
        return self._patch(payment, self._normalise(fields))

    def delete_payment(self, payment: MonthlyPayment) -> None:
        self._remove(payment)

    def _normalise(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        values = dict(fields)
        for key in _DECIMAL_FIELDS:
            if key in values:
                values[key] = self._to_decimal(values[key])
        return values
