"""Authentication and user management routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from dairy.schemas import DeleteResponse, LoginRequest, RegisterRequest, TokenResponse, UserOut
from dairy.services import AuthService
from dairy.web.dependencies import get_auth_service

router = APIRouter(prefix="/auth", tags=["auth"])
users_router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, service: AuthService = Depends(get_auth_service)) -> UserOut:
    user = service.register(payload.name, payload.email, payload.password)
    return UserOut.model_validate(user)


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, service: AuthService = Depends(get_auth_service)) -> TokenResponse:
    issued = service.login(payload.email, payload.password)
    return TokenResponse(
        access_token=issued.access_token,
        token_type=issued.token_type,
        expires_in=issued.expires_in,
    )


@users_router.get("", response_model=list[UserOut])
def list_users(service: AuthService = Depends(get_auth_service)) -> list[UserOut]:
    return [UserOut.model_validate(user) for user in service.list_users()]


@users_router.delete("/{user_id}", response_model=DeleteResponse)
def delete_user(
    user_id: str,
    service: AuthService = Depends(get_auth_service),
) -> DeleteResponse:
    service.delete_user(user_id)
    return DeleteResponse(deleted={"users": 1})


__all__ = ["router", "users_router"]
