"""Repositories encapsulating ORM queries per aggregate."""

from .base import BaseRepository
from .farmers import FarmerRepository, FarmRepository
from .payments import PaymentRepository
from .production import ProductionRepository
from .users import UserRepository

__all__ = [
    "BaseRepository",
    "FarmRepository",
    "FarmerRepository",
    "PaymentRepository",
    "ProductionRepository",
    "UserRepository",
]
