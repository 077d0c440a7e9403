"""Daily milk production records."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, RecordMixin


class MilkProduction(RecordMixin, Base):
    """One day's delivered volume for one farm.

    ``date`` is stored as a naive UTC timestamp so range filters compare
    the same way on every backend.
    """

    __tablename__ = "milk_production"
    __table_args__ = (Index("ix_milk_production_farm_date", "farm_id", "date"),)

    farm_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("farm.id"), nullable=False, index=True
    )
    farmer_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("farmer.id"), nullable=False, index=True
    )
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    volume_liters: Mapped[Decimal] = mapped_column(Numeric(14, 3), nullable=False)
