"""Application middleware enforcing bearer-token authentication."""
from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from dairy.core.log import get_logger
from dairy.core.security import (
    AuthenticatedUser,
    AuthenticationError,
    SecurityProvider,
    bearer_token,
)

LOGGER = get_logger(__name__)


class AuthMiddleware(BaseHTTPMiddleware):
    """Reject requests without a valid ``Authorization: Bearer`` token."""

    def __init__(
        self,
        app,
        security_provider: SecurityProvider,
        *,
        exempt_paths: Iterable[str] | None = None,
        exempt_prefixes: Iterable[str] | None = None,
    ) -> None:
        super().__init__(app)
        self._security_provider = security_provider
        self._exempt_paths = set(exempt_paths or ()) | {
            "/openapi.json",
            "/docs",
            "/redoc",
            "/favicon.ico",
            "/health",
        }
        self._exempt_prefixes = tuple(exempt_prefixes or ("/auth/", "/docs/"))

    def _is_exempt(self, path: str) -> bool:
        """Return ``True`` when the request path should bypass authentication."""

        if path in self._exempt_paths:
            return True
        return any(path.startswith(prefix) for prefix in self._exempt_prefixes)

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request.state.user = None
        if not self._security_provider.is_enabled or self._is_exempt(request.url.path):
            return await call_next(request)

        token = bearer_token(request)
        if token is None:
            return JSONResponse(
                {"error": "Access denied. No token provided."}, status_code=401
            )

        try:
            user: AuthenticatedUser = self._security_provider.decode_token(token)
        except AuthenticationError as exc:
            LOGGER.info("Rejected access token: %s", exc)
            return JSONResponse({"error": "Invalid token."}, status_code=401)

        request.state.user = user
        return await call_next(request)


__all__ = ["AuthMiddleware"]
