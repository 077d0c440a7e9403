"""Routes for payment snapshots and price-per-liter lookups."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from dairy.schemas import (
    DeleteResponse,
    ErrorResponse,
    MessageResponse,
    MonthlyPriceOut,
    PaymentCreate,
    PaymentOut,
    PaymentUpdate,
)
from dairy.services import PaymentService
from dairy.services.payments import FarmNotFound, PaymentDataNotFound
from dairy.web.dependencies import get_payment_service

router = APIRouter(prefix="/payments", tags=["payments"])

NOT_FOUND = {404: {"model": ErrorResponse}}


@router.get(
    "/{farm_id}/price-per-liter",
    response_model=MonthlyPriceOut | MessageResponse,
    responses={502: {"model": ErrorResponse}},
)
async def get_price_per_liter_by_month(
    farm_id: str,
    year: int = Query(..., ge=1900),
    month: int = Query(..., ge=1, le=12),
    service: PaymentService = Depends(get_payment_service),
):
    """Price per liter (BRL and USD) of the stored snapshot for one month."""

    result = await service.get_price_by_farm_and_month(farm_id, year, month)
    if isinstance(result, (FarmNotFound, PaymentDataNotFound)):
        return MessageResponse(message=result.message)
    return MonthlyPriceOut.from_price(result)


@router.get(
    "/{farm_id}/price-per-liter-year",
    response_model=list[MonthlyPriceOut] | MessageResponse,
    responses={502: {"model": ErrorResponse}},
)
async def get_price_per_liter_by_year(
    farm_id: str,
    year: int = Query(..., ge=1900),
    service: PaymentService = Depends(get_payment_service),
):
    """Price per liter for every month of ``year`` that has a snapshot."""

    result = await service.get_price_by_farm_and_year(farm_id, year)
    if isinstance(result, (FarmNotFound, PaymentDataNotFound)):
        return MessageResponse(message=result.message)
    return [MonthlyPriceOut.from_price(price) for price in result]


@router.post("", response_model=PaymentOut, status_code=status.HTTP_201_CREATED, responses=NOT_FOUND)
def create_payment(
    payload: PaymentCreate,
    service: PaymentService = Depends(get_payment_service),
) -> PaymentOut:
    payment = service.create_payment(payload.farm_id, payload.year, payload.month)
    return PaymentOut.model_validate(payment)


@router.get("/{payment_id}", response_model=PaymentOut, responses=NOT_FOUND)
def get_payment(
    payment_id: str,
    service: PaymentService = Depends(get_payment_service),
) -> PaymentOut:
    return PaymentOut.model_validate(service.get_payment(payment_id))


@router.patch("/{payment_id}", response_model=PaymentOut, responses=NOT_FOUND)
def update_payment(
    payment_id: str,
    payload: PaymentUpdate,
    service: PaymentService = Depends(get_payment_service),
) -> PaymentOut:
    fields = payload.model_dump(exclude_unset=True, exclude_none=True)
    return PaymentOut.model_validate(service.update_payment(payment_id, fields))


@router.delete("/{payment_id}", response_model=DeleteResponse, responses=NOT_FOUND)
def delete_payment(
    payment_id: str,
    service: PaymentService = Depends(get_payment_service),
) -> DeleteResponse:
    service.delete_payment(payment_id)
    return DeleteResponse(deleted={"payments": 1})


__all__ = ["router"]
