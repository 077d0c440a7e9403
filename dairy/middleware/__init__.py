"""ASGI middleware used by the application."""

from .auth import AuthMiddleware
from .request_context import RequestContextMiddleware

__all__ = ["AuthMiddleware", "RequestContextMiddleware"]
