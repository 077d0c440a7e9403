"""Helper functions for formatting numbers and currencies."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


@dataclass(frozen=True)
class CurrencyStyle:
    """Display conventions for one currency in its home locale."""

    symbol: str
    thousands_sep: str
    decimal_sep: str
    symbol_gap: str = ""


NBSP = "\u00a0"

CURRENCY_STYLES: dict[str, CurrencyStyle] = {
    # pt-BR
    "BRL": CurrencyStyle(symbol="R$", thousands_sep=".", decimal_sep=",", symbol_gap=NBSP),
    # en-US
    "USD": CurrencyStyle(symbol="$", thousands_sep=",", decimal_sep="."),
}


def to_decimal(value: int | float | str | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: int | float | str | Decimal) -> Decimal:
    """Round to cents, halves away from zero."""

    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_number(
    value: int | float | Decimal,
    *,
    thousands_sep: str = ",",
    decimal_sep: str = ".",
    decimals: int = 2,
) -> str:
    """Format ``value`` with digit grouping and a fixed number of decimals."""

    quantum = Decimal(1).scaleb(-decimals)
    d = to_decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if d < 0 else ""
    whole, _, fraction = f"{abs(d):f}".partition(".")
    grouped = f"{int(whole):,}".replace(",", thousands_sep)
    if decimals:
        return f"{sign}{grouped}{decimal_sep}{fraction}"
    return f"{sign}{grouped}"


def format_currency(value: int | float | Decimal, currency: str) -> str:
    """Format a monetary amount the way the currency's home locale displays it.

    ``format_currency(Decimal("1234.5"), "BRL")`` gives ``"R$ 1.234,50"`` (with a
    non-breaking space) and ``format_currency(-3.24, "USD")`` gives ``"-$3.24"``.
    """

    style = CURRENCY_STYLES.get(currency.upper())
    if style is None:
        amount = format_number(value)
        return f"{currency.upper()}{NBSP}{amount}"

    amount = format_number(
        value,
        thousands_sep=style.thousands_sep,
        decimal_sep=style.decimal_sep,
    )
    sign = ""
    if amount.startswith("-"):
        sign, amount = "-", amount[1:]
    return f"{sign}{style.symbol}{style.symbol_gap}{amount}"
