"""Unit tests for the price-per-liter rules."""
from __future__ import annotations

from decimal import Decimal

import pytest

from dairy.services.pricing import (
    base_price,
    calculate_price_per_liter,
    cost_per_km,
    price_breakdown,
    volume_bonus,
)


@pytest.mark.parametrize("month", [1, 3, 6])
def test_first_semester_base_price(month: int) -> None:
    assert base_price(month) == Decimal("1.80")


@pytest.mark.parametrize("month", [7, 9, 12])
def test_second_semester_base_price(month: int) -> None:
    assert base_price(month) == Decimal("1.95")


def test_cost_per_km_switches_above_fifty_km() -> None:
    assert cost_per_km(0) == Decimal("0.05")
    assert cost_per_km(50) == Decimal("0.05")
    assert cost_per_km(Decimal("50.001")) == Decimal("0.06")
    assert cost_per_km(120) == Decimal("0.06")


def test_volume_bonus_only_in_second_semester_above_threshold() -> None:
    assert volume_bonus(3, 20_000) == Decimal("0")
    assert volume_bonus(9, 10_000) == Decimal("0")
    assert volume_bonus(9, 10_001) == Decimal("0.01")


def test_volume_bonus_is_flat_per_liter() -> None:
    assert volume_bonus(8, 10_001) == volume_bonus(8, 1_000_000)


def test_near_farm_first_semester_price() -> None:
    assert calculate_price_per_liter(30, 5000, 3) == Decimal("0.30")


def test_far_farm_second_semester_price_with_bonus() -> None:
    price = calculate_price_per_liter(80, 15000, 9)

    assert price == Decimal("1.95") - Decimal("0.06") * 80 + Decimal("0.01")
    assert price == Decimal("-2.84")


def test_price_can_reach_zero_without_floor() -> None:
    assert calculate_price_per_liter(36, 100, 1) == Decimal("0")


def test_breakdown_components_add_up() -> None:
    breakdown = price_breakdown(Decimal("40"), Decimal("12000"), 11)

    assert breakdown.base_price == Decimal("1.95")
    assert breakdown.cost_per_km == Decimal("0.05")
    assert breakdown.transport_cost == Decimal("2.00")
    assert breakdown.bonus == Decimal("0.01")
    assert breakdown.price_per_liter == Decimal("-0.04")


def test_price_is_deterministic() -> None:
    first = calculate_price_per_liter(Decimal("42.5"), Decimal("9876.5"), 7)
    second = calculate_price_per_liter(Decimal("42.5"), Decimal("9876.5"), 7)

    assert first == second
