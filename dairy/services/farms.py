"""Farm management."""
from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy.orm import Session

from dairy.core.errors import RecordNotFoundError
from dairy.core.identifiers import parse_identifier
from dairy.core.log import get_logger
from dairy.models import Farm
from dairy.repositories import FarmerRepository, FarmRepository

LOGGER = get_logger(__name__)


class FarmService:
    def __init__(self, session: Session) -> None:
        self._repository = FarmRepository(session)
        self._farmers = FarmerRepository(session)

    def get_farm(self, farm_id: str) -> Farm:
        LOGGER.info("Fetching farm with ID: %s", farm_id)
        key = parse_identifier(farm_id)
        farm = self._repository.get_farm(key)
        if farm is None:
            raise RecordNotFoundError("Farm", key)
        return farm

    def create_farm(self, fields: Mapping[str, Any]) -> Farm:
        LOGGER.info("Creating a new farm")
        values = dict(fields)
        values["farmer_id"] = self._require_farmer(values["farmer_id"])
        return self._repository.create_farm(values)

    def update_farm(self, farm_id: str, fields: Mapping[str, Any]) -> Farm:
        LOGGER.info("Updating farm with ID: %s", farm_id)
        farm = self.get_farm(farm_id)
        values = dict(fields)
        if "farmer_id" in values:
            values["farmer_id"] = self._require_farmer(values["farmer_id"])
        return self._repository.update_farm(farm, values)

    def delete_farm(self, farm_id: str) -> dict[str, int]:
        LOGGER.info("Deleting farm with ID: %s", farm_id)
        key = parse_identifier(farm_id)
        result = self._repository.delete_farm_cascade(key)
        if not result["farms"]:
            raise RecordNotFoundError("Farm", key)
        return result

    def _require_farmer(self, farmer_id: str) -> str:
        key = parse_identifier(farmer_id)
        if self._farmers.get_farmer(key) is None:
            raise RecordNotFoundError("Farmer", key)
        return key
