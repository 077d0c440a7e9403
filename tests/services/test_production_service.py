"""Tests for monthly production aggregation."""
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from conftest import add_production, make_farm
from dairy.core.errors import FarmNotFoundError, InvalidIdentifierError, RecordNotFoundError
from dairy.models import MilkProduction
from dairy.services import ProductionService
from dairy.services.production import (
    NoProductionData,
    ProductionSummary,
    month_window,
    summarize_records,
)


@pytest.mark.parametrize(
    ("year", "month", "last_day"),
    [(2024, 2, 29), (2023, 2, 28), (2024, 4, 30), (2024, 12, 31)],
)
def test_month_window_covers_whole_month(year: int, month: int, last_day: int) -> None:
    start, end = month_window(year, month)

    assert start == datetime(year, month, 1, 0, 0, 0, tzinfo=timezone.utc)
    assert end == datetime(year, month, last_day, 23, 59, 59, tzinfo=timezone.utc)


def test_summarize_records_rounds_average_half_up() -> None:
    records = [
        MilkProduction(id="a" * 32, date=datetime(2024, 3, 1), volume_liters=Decimal("10.005")),
    ]

    summary = summarize_records("f" * 32, 2024, 3, records)

    assert isinstance(summary, ProductionSummary)
    assert summary.total_volume_liters == Decimal("10.005")
    assert summary.average_liters == Decimal("10.01")


def test_summarize_records_without_rows_is_not_zero_liters() -> None:
    result = summarize_records("f" * 32, 2024, 3, [])

    assert isinstance(result, NoProductionData)
    assert result.message == "No milk production data found for this period"


def test_get_month_totals_and_averages(session) -> None:
    farm = make_farm(session)
    for day, volume in ((1, 100), (2, 100), (3, 101)):
        add_production(session, farm, datetime(2024, 3, day, 6, 0), volume)

    summary = ProductionService(session).get_month(farm.id, 2024, 3)

    assert isinstance(summary, ProductionSummary)
    assert summary.total_volume_liters == Decimal("301")
    assert summary.average_liters == Decimal("100.33")
    assert summary.record_count == 3
    assert [entry.date.day for entry in summary.daily_productions] == [1, 2, 3]


def test_get_month_includes_both_boundaries_only(session) -> None:
    farm = make_farm(session)
    add_production(session, farm, datetime(2024, 1, 31, 23, 59, 59), 999)
    add_production(session, farm, datetime(2024, 2, 1, 0, 0, 0), 100)
    add_production(session, farm, datetime(2024, 2, 29, 23, 59, 59), 200)
    add_production(session, farm, datetime(2024, 3, 1, 0, 0, 0), 999)

    summary = ProductionService(session).get_month(farm.id, 2024, 2)

    assert isinstance(summary, ProductionSummary)
    assert summary.total_volume_liters == Decimal("300")
    assert summary.record_count == 2


def test_get_month_ignores_other_farms(session) -> None:
    farm = make_farm(session)
    other = make_farm(session)
    add_production(session, other, datetime(2024, 5, 10), 500)

    result = ProductionService(session).get_month(farm.id, 2024, 5)

    assert isinstance(result, NoProductionData)


def test_get_month_rejects_malformed_farm_id(session) -> None:
    with pytest.raises(InvalidIdentifierError):
        ProductionService(session).get_month("not-an-id", 2024, 5)


def test_create_production_requires_existing_farm(session) -> None:
    service = ProductionService(session)

    with pytest.raises(FarmNotFoundError):
        service.create_production(
            {
                "farm_id": "0" * 32,
                "farmer_id": "1" * 32,
                "date": datetime(2024, 5, 1),
                "volume_liters": Decimal("10"),
            }
        )


def test_create_update_and_delete_production(session) -> None:
    farm = make_farm(session)
    service = ProductionService(session)

    record = service.create_production(
        {
            "farm_id": farm.id,
            "farmer_id": farm.farmer_id,
            "date": datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc),
            "volume_liters": Decimal("250.5"),
        }
    )
    assert record.date == datetime(2024, 5, 1, 9, 30)

    updated = service.update_production(record.id, {"volume_liters": Decimal("300")})
    assert updated.volume_liters == Decimal("300")

    service.delete_production(record.id)
    with pytest.raises(RecordNotFoundError):
        service.delete_production(record.id)
