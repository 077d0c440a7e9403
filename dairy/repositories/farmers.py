"""Data access for farmers and farms."""
from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import delete, select
from sqlalchemy.orm import selectinload

from dairy.models import Farm, Farmer, MilkProduction, MonthlyPayment

from .base import BaseRepository


class FarmerRepository(BaseRepository):
    def list_farmers(self) -> list[Farmer]:
        statement = select(Farmer).order_by(Farmer.name)
        return list(self._session.scalars(statement))

    def get_farmer(self, farmer_id: str) -> Farmer | None:
        statement = (
            select(Farmer)
            .options(selectinload(Farmer.farms))
            .where(Farmer.id == farmer_id)
        )
        return self._session.scalars(statement).first()

    def get_by_email(self, email: str) -> Farmer | None:
        return self._session.scalars(select(Farmer).where(Farmer.email == email)).first()

    def create_farmer(self, fields: Mapping[str, Any]) -> Farmer:
        return self._add(Farmer(**fields))

    def update_farmer(self, farmer: Farmer, fields: Mapping[str, Any]) -> Farmer:
        return self._patch(farmer, fields)

    def delete_farmer_cascade(self, farmer_id: str) -> dict[str, int]:
        """Delete a farmer together with its farms, productions and payments."""

        farm_ids = select(Farm.id).where(Farm.farmer_id == farmer_id)
        try:
            payments = self._session.execute(
                delete(MonthlyPayment).where(MonthlyPayment.farm_id.in_(farm_ids))
            ).rowcount
            productions = self._session.execute(
                delete(MilkProduction).where(MilkProduction.farmer_id == farmer_id)
            ).rowcount
            farms = self._session.execute(
                delete(Farm).where(Farm.farmer_id == farmer_id)
            ).rowcount
            farmers = self._session.execute(
                delete(Farmer).where(Farmer.id == farmer_id)
            ).rowcount
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        return {
            "farmer": farmers,
            "farms": farms,
            "milk_production": productions,
            "payments": payments,
        }


class FarmRepository(BaseRepository):
    def get_farm(self, farm_id: str) -> Farm | None:
        return self._session.get(Farm, farm_id)

    def create_farm(self, fields: Mapping[str, Any]) -> Farm:
        return self._add(Farm(**fields))

    def update_farm(self, farm: Farm, fields: Mapping[str, Any]) -> Farm:
        return self._patch(farm, fields)

    def delete_farm_cascade(self, farm_id: str) -> dict[str, int]:
        """Delete a farm together with its productions and payments."""

        try:
            payments = self._session.execute(
                delete(MonthlyPayment).where(MonthlyPayment.farm_id == farm_id)
            ).rowcount
            productions = self._session.execute(
                delete(MilkProduction).where(MilkProduction.farm_id == farm_id)
            ).rowcount
            farms = self._session.execute(delete(Farm).where(Farm.id == farm_id)).rowcount
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        return {"farms": farms, "milk_production": productions, "payments": payments}
