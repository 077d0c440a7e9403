"""Routes for daily milk production records."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from dairy.schemas import (
    DeleteResponse,
    MessageResponse,
    MonthlyProductionOut,
    ProductionCreate,
    ProductionOut,
    ProductionUpdate,
)
from dairy.services import ProductionService
from dairy.services.production import NoProductionData
from dairy.web.dependencies import get_production_service

router = APIRouter(prefix="/milk-productions", tags=["milk-productions"])


@router.get("/{farm_id}", response_model=MonthlyProductionOut | MessageResponse)
def get_monthly_production(
    farm_id: str,
    year: int = Query(..., ge=1900),
    month: int = Query(..., ge=1, le=12),
    service: ProductionService = Depends(get_production_service),
):
    result = service.get_month(farm_id, year, month)
    if isinstance(result, NoProductionData):
        return MessageResponse(message=result.message)
    return MonthlyProductionOut.from_summary(result)


@router.post("", response_model=ProductionOut, status_code=status.HTTP_201_CREATED)
def create_production(
    payload: ProductionCreate,
    service: ProductionService = Depends(get_production_service),
) -> ProductionOut:
    return ProductionOut.model_validate(service.create_production(payload.model_dump()))


@router.patch("/{production_id}", response_model=ProductionOut)
def update_production(
    production_id: str,
    payload: ProductionUpdate,
    service: ProductionService = Depends(get_production_service),
) -> ProductionOut:
    fields = payload.model_dump(exclude_unset=True, exclude_none=True)
    return ProductionOut.model_validate(service.update_production(production_id, fields))


@router.delete("/{production_id}", response_model=DeleteResponse)
def delete_production(
    production_id: str,
    service: ProductionService = Depends(get_production_service),
) -> DeleteResponse:
    service.delete_production(production_id)
    return DeleteResponse(deleted={"milk_production": 1})


__all__ = ["router"]
