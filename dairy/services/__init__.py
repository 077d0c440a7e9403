"""Service layer entrypoints for domain logic."""

from .auth import AuthService
from .currency import CurrencyConverter
from .farmers import FarmerService
from .farms import FarmService
from .payments import PaymentService
from .production import ProductionService

__all__ = [
    "AuthService",
    "CurrencyConverter",
    "FarmService",
    "FarmerService",
    "PaymentService",
    "ProductionService",
]
