"""Price-per-liter rules for milk delivered to the factory.

Two regimes apply, split by semester:

====================  =============  ==============
Criterion             Jan - Jun      Jul - Dec
====================  =============  ==============
Base price per liter  1.80           1.95
Cost per km (<= 50)   0.05           0.05
Cost per km (> 50)    0.06           0.06
Volume bonus          none           +0.01 (> 10,000 L)
====================  =============  ==============

``price = base - cost_per_km * distance + bonus``. No floor is applied, so a
distant farm can end up with a zero or negative price.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from dairy.core.formatting import to_decimal

FIRST_SEMESTER_BASE_PRICE = Decimal("1.80")
SECOND_SEMESTER_BASE_PRICE = Decimal("1.95")
NEAR_COST_PER_KM = Decimal("0.05")
FAR_COST_PER_KM = Decimal("0.06")
NEAR_DISTANCE_LIMIT_KM = Decimal("50")
VOLUME_BONUS = Decimal("0.01")
VOLUME_BONUS_THRESHOLD_LITERS = Decimal("10000")


@dataclass(frozen=True)
class PriceBreakdown:
    base_price: Decimal
    cost_per_km: Decimal
    transport_cost: Decimal
    bonus: Decimal

    @property
    def price_per_liter(self) -> Decimal:
        return self.base_price - self.transport_cost + self.bonus


def is_first_semester(month: int) -> bool:
    return 1 <= month <= 6


def base_price(month: int) -> Decimal:
    return FIRST_SEMESTER_BASE_PRICE if is_first_semester(month) else SECOND_SEMESTER_BASE_PRICE


def cost_per_km(distance_km: Decimal | float | int) -> Decimal:
    if to_decimal(distance_km) <= NEAR_DISTANCE_LIMIT_KM:
        return NEAR_COST_PER_KM
    return FAR_COST_PER_KM


def volume_bonus(month: int, total_volume_liters: Decimal | float | int) -> Decimal:
    # Flat per-liter bonus; it does not scale with the volume delivered.
    if not is_first_semester(month) and to_decimal(total_volume_liters) > VOLUME_BONUS_THRESHOLD_LITERS:
        return VOLUME_BONUS
    return Decimal("0")


def price_breakdown(
    distance_km: Decimal | float | int,
    total_volume_liters: Decimal | float | int,
    month: int,
) -> PriceBreakdown:
    distance = to_decimal(distance_km)
    rate = cost_per_km(distance)
    return PriceBreakdown(
        base_price=base_price(month),
        cost_per_km=rate,
        transport_cost=rate * distance,
        bonus=volume_bonus(month, total_volume_liters),
    )


def calculate_price_per_liter(
    distance_km: Decimal | float | int,
    total_volume_liters: Decimal | float | int,
    month: int,
) -> Decimal:
    """Return the price per liter for a farm ``distance_km`` away in ``month``.

    Inputs are expected to be validated upstream (non-negative distance,
    month within 1-12, finite volume).
    """

    return price_breakdown(distance_km, total_volume_liters, month).price_per_liter
