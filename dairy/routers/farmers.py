"""Routes for farmers."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from dairy.schemas import DeleteResponse, FarmerCreate, FarmerDetail, FarmerOut, FarmerUpdate
from dairy.services import FarmerService
from dairy.web.dependencies import get_farmer_service

router = APIRouter(prefix="/farmers", tags=["farmers"])


@router.get("", response_model=list[FarmerOut])
def list_farmers(service: FarmerService = Depends(get_farmer_service)) -> list[FarmerOut]:
    return [FarmerOut.model_validate(farmer) for farmer in service.list_farmers()]


@router.get("/{farmer_id}", response_model=FarmerDetail)
def get_farmer(farmer_id: str, service: FarmerService = Depends(get_farmer_service)) -> FarmerDetail:
    return FarmerDetail.from_model(service.get_farmer(farmer_id))


@router.post("", response_model=FarmerOut, status_code=status.HTTP_201_CREATED)
def create_farmer(
    payload: FarmerCreate, service: FarmerService = Depends(get_farmer_service)
) -> FarmerOut:
    return FarmerOut.model_validate(service.create_farmer(payload.model_dump()))


@router.patch("/{farmer_id}", response_model=FarmerOut)
def update_farmer(
    farmer_id: str,
    payload: FarmerUpdate,
    service: FarmerService = Depends(get_farmer_service),
) -> FarmerOut:
    fields = payload.model_dump(exclude_unset=True, exclude_none=True)
    return FarmerOut.model_validate(service.update_farmer(farmer_id, fields))


@router.delete("/{farmer_id}", response_model=DeleteResponse)
def delete_farmer(farmer_id: str, service: FarmerService = Depends(get_farmer_service)) -> DeleteResponse:
    return DeleteResponse(deleted=service.delete_farmer(farmer_id))


__all__ = ["router"]
