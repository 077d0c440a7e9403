from decimal import Decimal

from dairy.core.formatting import format_currency, format_number, round_money


def test_format_currency_brl_uses_brazilian_separators() -> None:
    assert format_currency(Decimal("1234.5"), "BRL") == "R$\u00a01.234,50"
    assert format_currency(Decimal("-3.24"), "brl") == "-R$\u00a03,24"


def test_format_currency_usd_uses_us_separators() -> None:
    assert format_currency(Decimal("1234567.891"), "USD") == "$1,234,567.89"
    assert format_currency(Decimal("-3.24"), "USD") == "-$3.24"


def test_format_currency_unknown_code_falls_back_to_code_prefix() -> None:
    assert format_currency(Decimal("1234.5"), "GBP") == "GBP\u00a01,234.50"
    assert format_currency(Decimal("1234.5"), "EUR") == "EUR\u00a01,234.50"


def test_format_number_without_decimals() -> None:
    assert format_number(Decimal("9876.5"), decimals=0) == "9,877"


def test_round_money_rounds_halves_away_from_zero() -> None:
    assert round_money(Decimal("2.345")) == Decimal("2.35")
    assert round_money(Decimal("-2.345")) == Decimal("-2.35")
    assert round_money("0.3") == Decimal("0.30")
