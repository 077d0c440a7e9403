"""Data access for API users."""
from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import select

from dairy.models import User

from .base import BaseRepository


class UserRepository(BaseRepository):
    def list_users(self) -> list[User]:
        return list(self._session.scalars(select(User).order_by(User.email)))

    def get_user(self, user_id: str) -> User | None:
        return self._session.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        return self._session.scalars(select(User).where(User.email == email)).first()

    def create_user(self, fields: Mapping[str, Any]) -> User:
        return self._add(User(**fields))

    def delete_user(self, user: User) -> None:
        self._remove(user)
