"""Translate service exceptions into JSON error responses."""
from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from dairy.core.errors import (
    ConflictError,
    ConversionFailure,
    DairyError,
    InvalidIdentifierError,
    NotFoundError,
)
from dairy.core.log import get_logger
from dairy.core.security import AuthenticationError

LOGGER = get_logger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


async def _handle_invalid_identifier(request: Request, exc: InvalidIdentifierError) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, str(exc))


async def _handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    LOGGER.warning("%s %s: %s", request.method, request.url.path, exc)
    return _error(status.HTTP_404_NOT_FOUND, str(exc))


async def _handle_conflict(request: Request, exc: ConflictError) -> JSONResponse:
    return _error(status.HTTP_409_CONFLICT, str(exc))


async def _handle_conversion_failure(request: Request, exc: ConversionFailure) -> JSONResponse:
    LOGGER.error("%s %s: %s", request.method, request.url.path, exc)
    return _error(status.HTTP_502_BAD_GATEWAY, "Currency conversion failed")


async def _handle_authentication(request: Request, exc: AuthenticationError) -> JSONResponse:
    return _error(status.HTTP_401_UNAUTHORIZED, str(exc))


async def _handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, str(exc))


async def _handle_dairy_error(request: Request, exc: DairyError) -> JSONResponse:
    LOGGER.exception("Unhandled service error on %s %s", request.method, request.url.path)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Unexpected failure on %s %s", request.method, request.url.path)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidIdentifierError, _handle_invalid_identifier)
    app.add_exception_handler(NotFoundError, _handle_not_found)
    app.add_exception_handler(ConflictError, _handle_conflict)
    app.add_exception_handler(ConversionFailure, _handle_conversion_failure)
    app.add_exception_handler(DairyError, _handle_dairy_error)
    app.add_exception_handler(AuthenticationError, _handle_authentication)
    app.add_exception_handler(ValueError, _handle_value_error)
    app.add_exception_handler(Exception, _handle_unexpected)
