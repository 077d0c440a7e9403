"""Environment driven configuration for the dairy payments service."""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

_FALSE_VALUES = {"0", "false", "False", "no"}


@dataclass(slots=True)
class DatabaseSettings:
    """Connection details for the relational store."""

    driver: str
    host: str
    port: int
    user: str
    password: str
    name: str
    url: str | None = None

    @property
    def sqlalchemy_url(self) -> str:
        """Build a SQLAlchemy compatible URL."""

        if self.url:
            return self.url
        if self.driver.startswith("sqlite"):
            return f"{self.driver}:///{self.name}"
        if self.password:
            credentials = f"{self.user}:{self.password}"
        else:
            credentials = self.user
        return f"{self.driver}://{credentials}@{self.host}:{self.port}/{self.name}"

    @property
    def masked_url(self) -> str:
        if self.url or self.driver.startswith("sqlite"):
            return self.sqlalchemy_url.split("@")[-1]
        return "{driver}://{user}:{pwd}@{host}:{port}/{name}".format(
            driver=self.driver,
            user=self.user,
            pwd="***" if self.password else "",
            host=self.host,
            port=self.port,
            name=self.name,
        )


@dataclass(slots=True)
class AuthSettings:
    """JWT settings loaded from environment variables."""

    secret_key: str
    algorithm: str
    access_token_expire_minutes: int
    enabled: bool = True


@dataclass(slots=True)
class CurrencySettings:
    """Where exchange rates come from and which currencies are displayed."""

    rates_base_url: str
    timeout_seconds: float
    primary_currency: str = "BRL"
    secondary_currency: str = "USD"


@dataclass(slots=True)
class Settings:
    """Top-level application configuration container."""

    database: DatabaseSettings
    auth: AuthSettings
    currency: CurrencySettings
    sqlalchemy_echo: bool = False
    log_level: str = "INFO"
    log_dir: str | None = "logs"

    @classmethod
    def from_env(cls) -> "Settings":
        """Load configuration values from environment variables."""

        def _get_env(name: str, default: str) -> str:
            return os.getenv(name, default)

        db = DatabaseSettings(
            driver=_get_env("DB_DRIVER", "sqlite"),
            host=_get_env("DB_HOST", "127.0.0.1"),
            port=int(_get_env("DB_PORT", "3306")),
            user=_get_env("DB_USER", "dairy"),
            password=_get_env("DB_PASSWORD", "dairy"),
            name=_get_env("DB_NAME", "dairy.db"),
            url=os.getenv("DB_URL") or None,
        )
        auth = AuthSettings(
            secret_key=_get_env("JWT_SECRET_KEY", "change-me"),
            algorithm=_get_env("JWT_ALGORITHM", "HS256"),
            access_token_expire_minutes=int(_get_env("JWT_EXPIRE_MINUTES", "60")),
            enabled=_get_env("AUTH_ENABLED", "1") not in _FALSE_VALUES,
        )
        currency = CurrencySettings(
            rates_base_url=_get_env("RATES_BASE_URL", "https://open.er-api.com/v6/latest"),
            timeout_seconds=float(_get_env("RATES_TIMEOUT_SECONDS", "10")),
            primary_currency=_get_env("PRIMARY_CURRENCY", "BRL").upper(),
            secondary_currency=_get_env("SECONDARY_CURRENCY", "USD").upper(),
        )
        log_dir = _get_env("LOG_DIR", "logs")
        return cls(
            database=db,
            auth=auth,
            currency=currency,
            sqlalchemy_echo=_get_env("SQLALCHEMY_ECHO", "0") not in _FALSE_VALUES,
            log_level=_get_env("LOG_LEVEL", "INFO"),
            log_dir=log_dir or None,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance."""

    settings = Settings.from_env()

    # Import locally to avoid circular dependencies during module import time.
    from .log import get_logger

    logger = get_logger(__name__)
    logger.debug(
        "Settings initialised",
        extra={
            "sqlalchemy_echo": settings.sqlalchemy_echo,
            "database": settings.database.masked_url,
            "auth": {
                "algorithm": settings.auth.algorithm,
                "token_ttl": settings.auth.access_token_expire_minutes,
                "enabled": settings.auth.enabled,
            },
            "currency": {
                "rates_base_url": settings.currency.rates_base_url,
                "pair": f"{settings.currency.primary_currency}/{settings.currency.secondary_currency}",
            },
        },
    )
    return settings
