"""Monthly payment snapshots."""
from __future__ import annotations

from decimal import Decimal

from sqlalchemy import ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, RecordMixin


class MonthlyPayment(RecordMixin, Base):
    """Point-in-time price, volume and payment for one farm and month.

    Snapshots are never recomputed when production records change.
    (farm_id, year, month) is indexed but deliberately not unique.
    """

    __tablename__ = "monthly_payment"
    __table_args__ = (
        Index("ix_monthly_payment_period", "year", "month"),
        Index("ix_monthly_payment_farm_period", "farm_id", "year", "month"),
    )

    farm_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("farm.id"), nullable=False, index=True
    )
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    price_per_liter: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
    total_volume_liters: Mapped[Decimal] = mapped_column(Numeric(18, 3), nullable=False)
    total_payment: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
