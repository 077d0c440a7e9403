"""Data access for daily milk production records."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from sqlalchemy import select

from dairy.models import MilkProduction

from .base import BaseRepository


class ProductionRepository(BaseRepository):
    def list_between(self, farm_id: str, start: datetime, end: datetime) -> list[MilkProduction]:
        """Return the farm's records with ``start <= date <= end``, oldest first."""

        statement = (
            select(MilkProduction)
            .where(
                MilkProduction.farm_id == farm_id,
                MilkProduction.date >= self._coerce_utc_naive(start),
                MilkProduction.date <= self._coerce_utc_naive(end),
            )
            .order_by(MilkProduction.date, MilkProduction.created_at)
        )
        return list(self._session.scalars(statement))

    def get_production(self, production_id: str) -> MilkProduction | None:
        return self._session.get(MilkProduction, production_id)

    def create_production(self, fields: Mapping[str, Any]) -> MilkProduction:
        values = dict(fields)
        values["date"] = self._coerce_utc_naive(values["date"])
        values["volume_liters"] = self._to_decimal(values["volume_liters"])
        return self._add(MilkProduction(**values))

    def update_production(self, production: MilkProduction, fields: Mapping[str, Any]) -> MilkProduction:
        values = dict(fields)
        if "date" in values:
            values["date"] = self._coerce_utc_naive(values["date"])
        if "volume_liters" in values:
            values["volume_liters"] = self._to_decimal(values["volume_liters"])
        return self._patch(production, values)

    def delete_production(self, production: MilkProduction) -> None:
        self._remove(production)
