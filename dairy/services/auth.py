"""User registration, login and account management."""
from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from dairy.core.errors import ConflictError, RecordNotFoundError
from dairy.core.identifiers import parse_identifier
from dairy.core.log import get_logger
from dairy.core.security import (
    AuthenticatedUser,
    AuthenticationError,
    SecurityProvider,
    hash_password,
    verify_password,
)
from dairy.models import User
from dairy.repositories import UserRepository

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class IssuedToken:
    access_token: str
    expires_in: int
    token_type: str = "bearer"


class AuthService:
    def __init__(self, session: Session, security: SecurityProvider) -> None:
        self._repository = UserRepository(session)
        self._security = security

    def register(self, name: str, email: str, password: str) -> User:
        if self._repository.get_by_email(email) is not None:
            raise ConflictError("User already exists")
        user = self._repository.create_user(
            {"name": name, "email": email, "password_hash": hash_password(password)}
        )
        LOGGER.info("Registered user %s", user.id)
        return user

    def login(self, email: str, password: str) -> IssuedToken:
        user = self._repository.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            LOGGER.info("Invalid login attempt")
            raise AuthenticationError("Invalid credentials")
        token = self._security.create_access_token(AuthenticatedUser(user_id=user.id, email=user.email))
        LOGGER.info("User %s logged in", user.id)
        return IssuedToken(access_token=token, expires_in=self._security.token_ttl_seconds)

    def list_users(self) -> list[User]:
        return self._repository.list_users()

    def delete_user(self, user_id: str) -> None:
        key = parse_identifier(user_id)
        user = self._repository.get_user(key)
        if user is None:
            raise RecordNotFoundError("User", key)
        self._repository.delete_user(user)
        LOGGER.info("Deleted user %s", key)
