"""Payloads shared by several routers."""
from __future__ import annotations

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Informational payload returned when a lookup finds nothing."""

    message: str


class ErrorResponse(BaseModel):
    error: str


class DeleteResponse(BaseModel):
    """Number of rows removed per record type."""

    deleted: dict[str, int]
