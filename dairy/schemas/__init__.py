"""Pydantic request and response models."""

from .auth import LoginRequest, RegisterRequest, TokenResponse, UserOut
from .common import DeleteResponse, ErrorResponse, MessageResponse
from .farms import (
    FarmCreate,
    FarmerCreate,
    FarmerDetail,
    FarmerOut,
    FarmerUpdate,
    FarmOut,
    FarmUpdate,
    Location,
)
from .payments import MonthlyPriceOut, PaymentCreate, PaymentOut, PaymentUpdate
from .production import (
    DailyProductionOut,
    MonthlyProductionOut,
    ProductionCreate,
    ProductionOut,
    ProductionUpdate,
)

__all__ = [
    "DailyProductionOut",
    "DeleteResponse",
    "ErrorResponse",
    "FarmCreate",
    "FarmOut",
    "FarmUpdate",
    "FarmerCreate",
    "FarmerDetail",
    "FarmerOut",
    "FarmerUpdate",
    "Location",
    "LoginRequest",
    "MessageResponse",
    "MonthlyPriceOut",
    "MonthlyProductionOut",
    "PaymentCreate",
    "PaymentOut",
    "PaymentUpdate",
    "ProductionCreate",
    "ProductionOut",
    "ProductionUpdate",
    "RegisterRequest",
    "TokenResponse",
    "UserOut",
]
