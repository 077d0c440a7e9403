"""Currency conversion against an HTTP exchange-rate source."""
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

import httpx

from dairy.core.config import CurrencySettings
from dairy.core.errors import ConversionFailure
from dairy.core.formatting import to_decimal
from dairy.core.log import get_logger

LOGGER = get_logger(__name__)


class CurrencyConverter:
    """Convert amounts using the latest rate published for the source currency.

    The rate source answers ``GET {base_url}/{FROM}`` with a JSON object
    holding a ``rates`` mapping keyed by currency code. Every failure surfaces
    as :class:`ConversionFailure`; there is no fallback rate.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: CurrencySettings, client: httpx.AsyncClient | None = None) -> "CurrencyConverter":
        return cls(settings.rates_base_url, timeout=settings.timeout_seconds, client=client)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def rate(self, from_currency: str, to_currency: str) -> Decimal:
        """Return how many ``to_currency`` units one ``from_currency`` unit buys."""

        source = from_currency.upper()
        target = to_currency.upper()
        url = f"{self._base_url}/{source}"
        try:
            response = await self._client.get(url)
            response.raise_for_status()
            payload: Any = response.json()
        except httpx.HTTPError as exc:
            LOGGER.error("Rate request %s failed: %s", url, exc)
            raise ConversionFailure(source, target, str(exc) or exc.__class__.__name__) from exc
        except ValueError as exc:
            LOGGER.error("Rate source returned a non-JSON body for %s", source)
            raise ConversionFailure(source, target, "invalid response body") from exc

        rates = payload.get("rates") if isinstance(payload, dict) else None
        if not isinstance(rates, dict) or target not in rates:
            raise ConversionFailure(source, target, "rate not available")

        raw_rate = rates[target]
        if isinstance(raw_rate, bool):
            raise ConversionFailure(source, target, f"invalid rate {raw_rate!r}")
        try:
            value = to_decimal(raw_rate)
        except (InvalidOperation, TypeError, ValueError) as exc:
            raise ConversionFailure(source, target, f"invalid rate {raw_rate!r}") from exc
        if not value.is_finite() or value <= 0:
            raise ConversionFailure(source, target, f"invalid rate {raw_rate!r}")
        return value

    async def convert(
        self,
        amount: Decimal | float | int,
        from_currency: str = "BRL",
        to_currency: str = "USD",
    ) -> Decimal:
        """Convert ``amount`` from ``from_currency`` into ``to_currency``."""

        value = to_decimal(amount)
        if from_currency.upper() == to_currency.upper():
            return value
        rate = await self.rate(from_currency, to_currency)
        LOGGER.debug("Converted %s %s at rate %s", value, from_currency.upper(), rate)
        return value * rate
