"""Farmer management."""
from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy.orm import Session

from dairy.core.errors import ConflictError, RecordNotFoundError
from dairy.core.identifiers import parse_identifier
from dairy.core.log import get_logger
from dairy.models import Farmer
from dairy.repositories import FarmerRepository

LOGGER = get_logger(__name__)


class FarmerService:
    def __init__(self, session: Session) -> None:
        self._repository = FarmerRepository(session)

    def list_farmers(self) -> list[Farmer]:
        LOGGER.info("Fetching all farmers")
        return self._repository.list_farmers()

    def get_farmer(self, farmer_id: str) -> Farmer:
        """Return the farmer with its farms loaded."""

        LOGGER.info("Fetching farmer and farms with ID: %s", farmer_id)
        key = parse_identifier(farmer_id)
        farmer = self._repository.get_farmer(key)
        if farmer is None:
            raise RecordNotFoundError("Farmer", key)
        return farmer

    def create_farmer(self, fields: Mapping[str, Any]) -> Farmer:
        LOGGER.info("Creating a new farmer")
        self._ensure_email_free(fields.get("email"))
        return self._repository.create_farmer(fields)

    def update_farmer(self, farmer_id: str, fields: Mapping[str, Any]) -> Farmer:
        LOGGER.info("Updating farmer with ID: %s", farmer_id)
        farmer = self.get_farmer(farmer_id)
        if fields.get("email") and fields["email"] != farmer.email:
            self._ensure_email_free(fields["email"])
        return self._repository.update_farmer(farmer, fields)

    def delete_farmer(self, farmer_id: str) -> dict[str, int]:
        """Delete the farmer and everything recorded under its farms."""

        LOGGER.info("Deleting farmer and farms with ID: %s", farmer_id)
        key = parse_identifier(farmer_id)
        result = self._repository.delete_farmer_cascade(key)
        if not result["farmer"]:
            raise RecordNotFoundError("Farmer", key)
        return result

    def _ensure_email_free(self, email: str | None) -> None:
        if email and self._repository.get_by_email(email) is not None:
            raise ConflictError(f"Farmer with email {email} already exists")
