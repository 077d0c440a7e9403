"""Routes for farms."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from dairy.schemas import DeleteResponse, FarmCreate, FarmOut, FarmUpdate
from dairy.services import FarmService
from dairy.web.dependencies import get_farm_service

router = APIRouter(prefix="/farms", tags=["farms"])


@router.get("/{farm_id}", response_model=FarmOut)
def get_farm(farm_id: str, service: FarmService = Depends(get_farm_service)) -> FarmOut:
    return FarmOut.from_model(service.get_farm(farm_id))


@router.post("", response_model=FarmOut, status_code=status.HTTP_201_CREATED)
def create_farm(payload: FarmCreate, service: FarmService = Depends(get_farm_service)) -> FarmOut:
    return FarmOut.from_model(service.create_farm(payload.to_fields()))


@router.patch("/{farm_id}", response_model=FarmOut)
def update_farm(
    farm_id: str,
    payload: FarmUpdate,
    service: FarmService = Depends(get_farm_service),
) -> FarmOut:
    return FarmOut.from_model(service.update_farm(farm_id, payload.to_fields()))


@router.delete("/{farm_id}", response_model=DeleteResponse)
def delete_farm(farm_id: str, service: FarmService = Depends(get_farm_service)) -> DeleteResponse:
    return DeleteResponse(deleted=service.delete_farm(farm_id))


__all__ = ["router"]
