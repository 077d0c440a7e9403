"""FastAPI routers for the dairy payments API."""

from .auth import router as auth_router
from .auth import users_router
from .farmers import router as farmers_router
from .farms import router as farms_router
from .payments import router as payments_router
from .production import router as production_router

__all__ = [
    "auth_router",
    "farmers_router",
    "farms_router",
    "payments_router",
    "production_router",
    "users_router",
]
