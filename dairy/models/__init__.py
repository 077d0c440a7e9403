"""Database models for the dairy domain."""
from __future__ import annotations

from .base import Base, RecordMixin, utcnow
from .farmers import Farm, Farmer
from .payments import MonthlyPayment
from .production import MilkProduction
from .users import User

__all__ = [
    "Base",
    "RecordMixin",
    "utcnow",
    "Farm",
    "Farmer",
    "MilkProduction",
    "MonthlyPayment",
    "User",
]
