"""Monthly aggregation of daily milk production."""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Mapping, Union

from sqlalchemy.orm import Session

from dairy.core.errors import FarmNotFoundError, RecordNotFoundError
from dairy.core.identifiers import parse_identifier
from dairy.core.log import get_logger, timeit
from dairy.models import MilkProduction
from dairy.repositories import FarmRepository, ProductionRepository

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class DailyProduction:
    id: str
    date: datetime
    volume_liters: Decimal


@dataclass(frozen=True)
class ProductionSummary:
    """Volume delivered by one farm over one calendar month."""

    farm_id: str
    year: int
    month: int
    total_volume_liters: Decimal
    average_liters: Decimal
    daily_productions: tuple[DailyProduction, ...]

    @property
    def record_count(self) -> int:
        return len(self.daily_productions)


@dataclass(frozen=True)
class NoProductionData:
    """No record matched the requested month (not the same as zero liters)."""

    farm_id: str
    year: int
    month: int
    message: str = "No milk production data found for this period"


MonthlyProduction = Union[ProductionSummary, NoProductionData]


def month_window(year: int, month: int) -> tuple[datetime, datetime]:
    """Return the first and last instant (second precision) of a month in UTC."""

    last_day = calendar.monthrange(year, month)[1]
    start = datetime.combine(date(year, month, 1), time(0, 0, 0), tzinfo=timezone.utc)
    end = datetime.combine(date(year, month, last_day), time(23, 59, 59), tzinfo=timezone.utc)
    return start, end


def summarize_records(
    farm_id: str, year: int, month: int, records: list[MilkProduction]
) -> MonthlyProduction:
    if not records:
        return NoProductionData(farm_id=farm_id, year=year, month=month)

    daily = tuple(
        DailyProduction(id=record.id, date=record.date, volume_liters=Decimal(record.volume_liters))
        for record in records
    )
    total = sum((entry.volume_liters for entry in daily), Decimal("0"))
    average = (total / len(daily)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return ProductionSummary(
        farm_id=farm_id,
        year=year,
        month=month,
        total_volume_liters=total,
        average_liters=average,
        daily_productions=daily,
    )


def summarize_month(
    repository: ProductionRepository, farm_id: str, year: int, month: int
) -> MonthlyProduction:
    """Aggregate the farm's records for ``year``/``month``."""

    start, end = month_window(year, month)
    with timeit(f"Aggregating production for {year}-{month:02d}", logger=LOGGER, unit="records") as timer:
        records = repository.list_between(farm_id, start, end)
        timer.set_total(len(records))
    return summarize_records(farm_id, year, month, records)


class ProductionService:
    """CRUD for daily records plus the monthly view."""

    def __init__(self, session: Session) -> None:
        self._repository = ProductionRepository(session)
        self._farms = FarmRepository(session)

    def get_month(self, farm_id: str, year: int, month: int) -> MonthlyProduction:
        farm_key = parse_identifier(farm_id)
        LOGGER.info("Fetching milk production for farm=%s %d-%02d", farm_key, year, month)
        return summarize_month(self._repository, farm_key, year, month)

    def create_production(self, fields: Mapping[str, Any]) -> MilkProduction:
        LOGGER.info("Creating a new milk production record")
        values = dict(fields)
        values["farm_id"] = parse_identifier(values["farm_id"])
        if self._farms.get_farm(values["farm_id"]) is None:
            raise FarmNotFoundError(values["farm_id"])
        values["farmer_id"] = parse_identifier(values["farmer_id"])
        return self._repository.create_production(values)

    def update_production(self, production_id: str, fields: Mapping[str, Any]) -> MilkProduction:
        LOGGER.info("Updating milk production record with ID: %s", production_id)
        production = self._require(production_id)
        return self._repository.update_production(production, fields)

    def delete_production(self, production_id: str) -> None:
        LOGGER.info("Deleting milk production record with ID: %s", production_id)
        production = self._require(production_id)
        self._repository.delete_production(production)

    def _require(self, production_id: str) -> MilkProduction:
        key = parse_identifier(production_id)
        production = self._repository.get_production(key)
        if production is None:
            raise RecordNotFoundError("Milk production record", key)
        return production
