"""Monthly payment orchestration: price lookups and snapshot management."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Union

from sqlalchemy.orm import Session

from dairy.core.errors import (
    ConversionFailure,
    FarmNotFoundError,
    PaymentNotFoundError,
    ProductionDataNotFoundError,
)
from dairy.core.formatting import format_currency, round_money
from dairy.core.identifiers import parse_identifier
from dairy.core.log import get_logger, log_context, timeit
from dairy.models import Farm, MonthlyPayment
from dairy.repositories import FarmRepository, PaymentRepository, ProductionRepository
from dairy.services.currency import CurrencyConverter
from dairy.services.pricing import calculate_price_per_liter
from dairy.services.production import NoProductionData, summarize_month

LOGGER = get_logger(__name__)

UPDATABLE_FIELDS = frozenset(
    {"year", "month", "price_per_liter", "total_volume_liters", "total_payment"}
)


@dataclass(frozen=True)
class FarmNotFound:
    farm_id: str
    message: str = "Farm not found"


@dataclass(frozen=True)
class PaymentDataNotFound:
    farm_id: str
    year: int
    month: int | None = None

    @property
    def message(self) -> str:
        if self.month is None:
            return "No payment data found for this year"
        return "No payment data found for this period"


@dataclass(frozen=True)
class ConvertedPrice:
    """A price in the primary currency plus its converted counterpart."""

    primary_currency: str
    primary: Decimal
    secondary_currency: str
    secondary: Decimal

    def display(self) -> dict[str, str]:
        return {
            self.primary_currency: format_currency(self.primary, self.primary_currency),
            self.secondary_currency: format_currency(self.secondary, self.secondary_currency),
        }

    def amounts(self) -> dict[str, Decimal]:
        return {
            self.primary_currency: round_money(self.primary),
            self.secondary_currency: round_money(self.secondary),
        }


@dataclass(frozen=True)
class MonthlyPrice:
    year: int
    month: int
    price_per_liter: ConvertedPrice
    total_payment: Decimal
    total_volume_liters: Decimal


MonthlyPriceResult = Union[MonthlyPrice, FarmNotFound, PaymentDataNotFound]
YearlyPriceResult = Union[list[MonthlyPrice], FarmNotFound, PaymentDataNotFound]


class PaymentService:
    """Compose aggregation, pricing and conversion for one farm's payments."""

    def __init__(
        self,
        session: Session,
        converter: CurrencyConverter,
        *,
        primary_currency: str = "BRL",
        secondary_currency: str = "USD",
    ) -> None:
        self._farms = FarmRepository(session)
        self._payments = PaymentRepository(session)
        self._productions = ProductionRepository(session)
        self._converter = converter
        self._primary = primary_currency.upper()
        self._secondary = secondary_currency.upper()

    async def get_price_by_farm_and_month(self, farm_id: str, year: int, month: int) -> MonthlyPriceResult:
        """Price the stored snapshot of ``year``/``month`` for one farm."""

        farm_key = parse_identifier(farm_id)
        with log_context.scope(farm_id=farm_key):
            farm = self._farms.get_farm(farm_key)
            if farm is None:
                LOGGER.warning("Farm not found")
                return FarmNotFound(farm_id=farm_key)

            payment = self._payments.find_by_farm_and_month(farm_key, year, month)
            if payment is None:
                LOGGER.warning("No payment snapshot for %d-%02d", year, month)
                return PaymentDataNotFound(farm_id=farm_key, year=year, month=month)

            return await self._price_snapshot(farm, payment)

    async def get_price_by_farm_and_year(self, farm_id: str, year: int) -> YearlyPriceResult:
        """Price every stored month of ``year``; one failed conversion fails the call."""

        farm_key = parse_identifier(farm_id)
        with log_context.scope(farm_id=farm_key):
            farm = self._farms.get_farm(farm_key)
            if farm is None:
                LOGGER.warning("Farm not found")
                return FarmNotFound(farm_id=farm_key)

            payments = self._first_snapshot_per_month(
                self._payments.list_by_farm_and_year(farm_key, year)
            )
            if not payments:
                LOGGER.warning("No payment snapshots for %d", year)
                return PaymentDataNotFound(farm_id=farm_key, year=year)

            with timeit(f"Converting prices for {year}", logger=LOGGER, unit="months", total=len(payments)):
                tasks = [asyncio.ensure_future(self._price_snapshot(farm, payment)) for payment in payments]
                try:
                    return list(await asyncio.gather(*tasks))
                finally:
                    # A failed or cancelled lookup leaves no conversion running.
                    for task in tasks:
                        if not task.done():
                            task.cancel()

    def create_payment(self, farm_id: str, year: int, month: int) -> MonthlyPayment:
        """Aggregate the month's production and persist a payment snapshot."""

        farm_key = parse_identifier(farm_id)
        with log_context.scope(farm_id=farm_key):
            LOGGER.info("Creating a new payment record for %d-%02d", year, month)
            farm = self._farms.get_farm(farm_key)
            if farm is None:
                raise FarmNotFoundError(farm_key)

            production = summarize_month(self._productions, farm_key, year, month)
            if isinstance(production, NoProductionData):
                raise ProductionDataNotFoundError(farm_key, year, month)

            total_volume = production.total_volume_liters
            price_per_liter = calculate_price_per_liter(farm.distance_to_factory_km, total_volume, month)
            payment = self._payments.create_payment(
                {
                    "farm_id": farm_key,
                    "year": year,
                    "month": month,
                    "price_per_liter": price_per_liter,
                    "total_volume_liters": total_volume,
                    "total_payment": price_per_liter * total_volume,
                }
            )
            LOGGER.info(
                "Payment %s stored: %s L at %s/L", payment.id, total_volume, price_per_liter
            )
            return payment

    def get_payment(self, payment_id: str) -> MonthlyPayment:
        return self._require(payment_id)

    def update_payment(self, payment_id: str, fields: Mapping[str, Any]) -> MonthlyPayment:
        """Overwrite stored fields as given; nothing is recomputed."""

        LOGGER.info("Updating payment with ID: %s", payment_id)
        payment = self._require(payment_id)
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Invalid fields: {', '.join(sorted(unknown))}")
        return self._payments.update_payment(payment, fields)

    def delete_payment(self, payment_id: str) -> None:
        LOGGER.info("Deleting payment with ID: %s", payment_id)
        payment = self._require(payment_id)
        self._payments.delete_payment(payment)

    async def _price_snapshot(self, farm: Farm, payment: MonthlyPayment) -> MonthlyPrice:
        price = calculate_price_per_liter(
            farm.distance_to_factory_km, payment.total_volume_liters, payment.month
        )
        try:
            converted = await self._converter.convert(price, self._primary, self._secondary)
        except ConversionFailure as exc:
            LOGGER.error("Currency conversion failed for month %s: %s", payment.month, exc.reason)
            raise
        return MonthlyPrice(
            year=payment.year,
            month=payment.month,
            price_per_liter=ConvertedPrice(
                primary_currency=self._primary,
                primary=price,
                secondary_currency=self._secondary,
                secondary=converted,
            ),
            total_payment=round_money(payment.total_payment),
            total_volume_liters=round_money(payment.total_volume_liters),
        )

    @staticmethod
    def _first_snapshot_per_month(payments: list[MonthlyPayment]) -> list[MonthlyPayment]:
        seen: set[int] = set()
        unique: list[MonthlyPayment] = []
        for payment in payments:
            if payment.month in seen:
                continue
            seen.add(payment.month)
            unique.append(payment)
        return unique

    def _require(self, payment_id: str) -> MonthlyPayment:
        key = parse_identifier(payment_id)
        payment = self._payments.get_payment(key)
        if payment is None:
            raise PaymentNotFoundError(key)
        return payment
