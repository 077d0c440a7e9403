"""Exception hierarchy shared by services and routers."""
from __future__ import annotations


class DairyError(Exception):
    """Base class for errors raised by the service layer."""


class InvalidIdentifierError(DairyError, ValueError):
    """Raised when an identifier is not a well-formed record id."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid ID format: {value}")
        self.value = value


class NotFoundError(DairyError):
    """Raised when a write path references a record that does not exist."""


class FarmNotFoundError(NotFoundError):
    def __init__(self, farm_id: str) -> None:
        super().__init__("Farm not found")
        self.farm_id = farm_id


class ProductionDataNotFoundError(NotFoundError):
    def __init__(self, farm_id: str, year: int, month: int) -> None:
        super().__init__("No milk production data found for this period")
        self.farm_id = farm_id
        self.year = year
        self.month = month


class PaymentNotFoundError(NotFoundError):
    def __init__(self, payment_id: str) -> None:
        super().__init__("Payment not found")
        self.payment_id = payment_id


class RecordNotFoundError(NotFoundError):
    """Generic missing record for the farmer/farm/production/user resources."""

    def __init__(self, resource: str, record_id: str) -> None:
        super().__init__(f"{resource} not found")
        self.resource = resource
        self.record_id = record_id


class ConflictError(DairyError):
    """Raised when a unique value is already taken."""


class ConversionFailure(DairyError):
    """Raised when the exchange-rate source cannot produce a usable rate."""

    def __init__(self, from_currency: str, to_currency: str, reason: str) -> None:
        super().__init__(f"Currency conversion {from_currency}->{to_currency} failed: {reason}")
        self.from_currency = from_currency
        self.to_currency = to_currency
        self.reason = reason


__all__ = [
    "ConflictError",
    "ConversionFailure",
    "DairyError",
    "FarmNotFoundError",
    "InvalidIdentifierError",
    "NotFoundError",
    "PaymentNotFoundError",
    "ProductionDataNotFoundError",
    "RecordNotFoundError",
]
