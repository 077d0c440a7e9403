"""Farmer and farm models."""
from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Float, ForeignKey, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, RecordMixin


class Farmer(RecordMixin, Base):
    """A producer owning one or more farms."""

    __tablename__ = "farmer"

    name: Mapped[str] = mapped_column(String(160), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    phone: Mapped[str] = mapped_column(String(40), nullable=False)

    farms: Mapped[list["Farm"]] = relationship(
        back_populates="farmer", order_by="Farm.name"
    )


class Farm(RecordMixin, Base):
    """A production site; its distance to the factory drives the transport cost."""

    __tablename__ = "farm"
    __table_args__ = (
        Index("ix_farm_location", "location_lat", "location_lng"),
    )

    farmer_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("farmer.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(160), nullable=False, index=True)
    location_lat: Mapped[float] = mapped_column(Float, nullable=False)
    location_lng: Mapped[float] = mapped_column(Float, nullable=False)
    distance_to_factory_km: Mapped[Decimal] = mapped_column(
        Numeric(10, 3), nullable=False, index=True
    )

    farmer: Mapped[Farmer] = relationship(back_populates="farms")
