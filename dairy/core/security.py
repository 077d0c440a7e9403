"""JWT access tokens and password hashing."""
from __future__ import annotations

import hashlib
import hmac
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from jwt import ExpiredSignatureError, InvalidTokenError
from starlette.requests import Request

from dairy.core.config import AuthSettings

_HASH_ALGORITHM = "sha256"
_HASH_ITERATIONS = 260_000


class AuthenticationError(Exception):
    """Raised when authentication or token validation fails."""


# Immutable dataclass for the token principal
@dataclass(frozen=True, slots=True)
class AuthenticatedUser:
    """Representation of the authenticated principal."""

    user_id: str
    email: str


def hash_password(password: str, *, salt: str | None = None) -> str:
    """Return ``pbkdf2:<algo>:<iterations>$<salt>$<hex digest>``."""

    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        _HASH_ALGORITHM, password.encode("utf-8"), salt.encode("utf-8"), _HASH_ITERATIONS
    )
    return f"pbkdf2:{_HASH_ALGORITHM}:{_HASH_ITERATIONS}${salt}${digest.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        method, salt, expected = password_hash.split("$", 2)
        _, algorithm, iterations = method.split(":", 2)
        digest = hashlib.pbkdf2_hmac(
            algorithm, password.encode("utf-8"), salt.encode("utf-8"), int(iterations)
        )
    except ValueError:
        return False
    return hmac.compare_digest(digest.hex(), expected)


class SecurityProvider:
    """Issue and verify JWT access tokens."""

    def __init__(self, settings: AuthSettings) -> None:
        self._settings = settings

    @property
    def token_ttl_seconds(self) -> int:
        """Return the access token lifetime in seconds."""

        return int(self._settings.access_token_expire_minutes * 60)

    @property
    def is_enabled(self) -> bool:
        return self._settings.enabled

    def create_access_token(self, user: AuthenticatedUser, *, now: datetime | None = None) -> str:
        """Create a signed JWT for the authenticated user."""

        issued = now or datetime.now(tz=timezone.utc)
        expires = issued + timedelta(minutes=self._settings.access_token_expire_minutes)
        payload: dict[str, object] = {
            "sub": user.user_id,
            "email": user.email,
            "iat": int(issued.timestamp()),
            "exp": int(expires.timestamp()),
        }
        return jwt.encode(payload, self._settings.secret_key, algorithm=self._settings.algorithm)

    def decode_token(self, token: str) -> AuthenticatedUser:
        """Decode a JWT and return the corresponding ``AuthenticatedUser``."""

        try:
            payload = jwt.decode(
                token,
                self._settings.secret_key,
                algorithms=[self._settings.algorithm],
            )
        except ExpiredSignatureError as exc:
            raise AuthenticationError("Token expired") from exc
        except InvalidTokenError as exc:
            raise AuthenticationError("Invalid token") from exc

        user_id = payload.get("sub")
        email = payload.get("email")
        if not isinstance(user_id, str) or not isinstance(email, str):
            raise AuthenticationError("Token payload missing required claims")
        return AuthenticatedUser(user_id=user_id, email=email)


def bearer_token(request: Request) -> str | None:
    """Extract the token from ``Authorization: Bearer <token>``.

    The legacy ``auth`` header carrying the same value is also accepted.
    """

    header = request.headers.get("authorization") or request.headers.get("auth") or ""
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


__all__ = [
    "AuthenticatedUser",
    "AuthenticationError",
    "SecurityProvider",
    "bearer_token",
    "hash_password",
    "verify_password",
]
