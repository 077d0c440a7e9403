"""Schemas for daily milk production records."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from dairy.services.production import ProductionSummary


class ProductionCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    farmer_id: str
    farm_id: str
    date: datetime
    volume_liters: Decimal = Field(gt=0, allow_inf_nan=False)


class ProductionUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    date: datetime | None = None
    volume_liters: Decimal | None = Field(default=None, gt=0, allow_inf_nan=False)


class ProductionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    farm_id: str
    farmer_id: str
    date: datetime
    volume_liters: Decimal
    created_at: datetime
    updated_at: datetime

    @field_serializer("volume_liters")
    def serialize_volume(self, value: Decimal) -> float:
        return float(value)


class DailyProductionOut(BaseModel):
    id: str
    date: datetime
    volume_liters: Decimal

    @field_serializer("volume_liters")
    def serialize_volume(self, value: Decimal) -> float:
        return float(value)


class MonthlyProductionOut(BaseModel):
    """Monthly view; keys keep the camelCase names clients already consume."""

    model_config = ConfigDict(populate_by_name=True)

    daily_productions: list[DailyProductionOut] = Field(alias="dailyProductions")
    average_liters: Decimal = Field(alias="averageLiters")
    total_volume_liters: Decimal = Field(alias="totalVolumeLiters")

    @field_serializer("average_liters", "total_volume_liters")
    def serialize_decimal(self, value: Decimal) -> str:
        return f"{value:.2f}"

    @classmethod
    def from_summary(cls, summary: ProductionSummary) -> "MonthlyProductionOut":
        return cls(
            daily_productions=[
                DailyProductionOut(id=entry.id, date=entry.date, volume_liters=entry.volume_liters)
                for entry in summary.daily_productions
            ],
            average_liters=summary.average_liters,
            total_volume_liters=summary.total_volume_liters,
        )
