"""Schemas for farmers and farms."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_serializer

from dairy.models import Farm, Farmer


class Location(BaseModel):
    model_config = ConfigDict(extra="forbid")

    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class FarmCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    farmer_id: str
    name: str = Field(min_length=1, max_length=160)
    location: Location
    distance_to_factory_km: Decimal = Field(ge=0, allow_inf_nan=False)

    def to_fields(self) -> dict[str, object]:
        return {
            "farmer_id": self.farmer_id,
            "name": self.name,
            "location_lat": self.location.lat,
            "location_lng": self.location.lng,
            "distance_to_factory_km": self.distance_to_factory_km,
        }


class FarmUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    farmer_id: str | None = None
    name: str | None = Field(default=None, min_length=1, max_length=160)
    location: Location | None = None
    distance_to_factory_km: Decimal | None = Field(default=None, ge=0, allow_inf_nan=False)

    def to_fields(self) -> dict[str, object]:
        values = self.model_dump(exclude_unset=True, exclude_none=True, exclude={"location"})
        if self.location is not None:
            values["location_lat"] = self.location.lat
            values["location_lng"] = self.location.lng
        return values


class FarmOut(BaseModel):
    id: str
    farmer_id: str
    name: str
    location: Location
    distance_to_factory_km: Decimal
    created_at: datetime
    updated_at: datetime

    @field_serializer("distance_to_factory_km")
    def serialize_distance(self, value: Decimal) -> float:
        return float(value)

    @classmethod
    def from_model(cls, farm: Farm) -> "FarmOut":
        return cls(
            id=farm.id,
            farmer_id=farm.farmer_id,
            name=farm.name,
            location=Location(lat=farm.location_lat, lng=farm.location_lng),
            distance_to_factory_km=farm.distance_to_factory_km,
            created_at=farm.created_at,
            updated_at=farm.updated_at,
        )


class FarmerCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=160)
    email: EmailStr
    phone: str = Field(min_length=1, max_length=40)


class FarmerUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=160)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, min_length=1, max_length=40)


class FarmerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    phone: str
    created_at: datetime
    updated_at: datetime


class FarmerDetail(FarmerOut):
    farms: list[FarmOut] = []

    @classmethod
    def from_model(cls, farmer: Farmer) -> "FarmerDetail":
        return cls(
            id=farmer.id,
            name=farmer.name,
            email=farmer.email,
            phone=farmer.phone,
            created_at=farmer.created_at,
            updated_at=farmer.updated_at,
            farms=[FarmOut.from_model(farm) for farm in farmer.farms],
        )
