"""Schemas for monthly payments and price lookups."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from dairy.services.payments import MonthlyPrice


class PaymentCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    farm_id: str = Field(min_length=1)
    year: int = Field(ge=1900, le=9999)
    month: int = Field(ge=1, le=12)


class PaymentUpdate(BaseModel):
    """Raw field overwrite; values are stored as sent."""

    model_config = ConfigDict(extra="forbid")

    year: int | None = Field(default=None, ge=1900, le=9999)
    month: int | None = Field(default=None, ge=1, le=12)
    price_per_liter: Decimal | None = Field(default=None, allow_inf_nan=False)
    total_volume_liters: Decimal | None = Field(default=None, ge=0, allow_inf_nan=False)
    total_payment: Decimal | None = Field(default=None, allow_inf_nan=False)


class PaymentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    farm_id: str
    year: int
    month: int
    price_per_liter: Decimal
    total_volume_liters: Decimal
    total_payment: Decimal
    created_at: datetime
    updated_at: datetime

    @field_serializer("price_per_liter", "total_volume_liters", "total_payment")
    def serialize_decimal(self, value: Decimal) -> float:
        return float(value)


class MonthlyPriceOut(BaseModel):
    month: int
    price_per_liter: dict[str, str]
    price_per_liter_amount: dict[str, Decimal]
    total_payment: Decimal
    total_volume_liters: Decimal

    @field_serializer("total_payment", "total_volume_liters")
    def serialize_decimal(self, value: Decimal) -> str:
        return f"{value:.2f}"

    @field_serializer("price_per_liter_amount")
    def serialize_amounts(self, value: dict[str, Decimal]) -> dict[str, str]:
        return {currency: f"{amount:.2f}" for currency, amount in value.items()}

    @classmethod
    def from_price(cls, price: MonthlyPrice) -> "MonthlyPriceOut":
        return cls(
            month=price.month,
            price_per_liter=price.price_per_liter.display(),
            price_per_liter_amount=price.price_per_liter.amounts(),
            total_payment=price.total_payment,
            total_volume_liters=price.total_volume_liters,
        )
