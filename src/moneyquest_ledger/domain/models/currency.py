"""Domain models for currencies and exchange rates."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class CurrencyFormat:
    """Display rules for a supported currency.

    Attributes:
        code: ISO 4217 code.
        symbol: Short symbol shown next to currency pickers.
        name: Human readable currency name.
        locale: Locale whose separators are used.
        decimal_places: Fraction digits shown.
        display_symbol: Prefix used by formatted amounts when it differs
            from `symbol`.
    """

    code: str
    symbol: str
    name: str
    locale: str = "pt-BR"
    decimal_places: int = 2
    display_symbol: str | None = None


@dataclass(frozen=True)
class ExchangeRate:
    """Directional rate converting one unit of base into target."""

    base_currency: str
    target_currency: str
    rate: Decimal
    updated_at: datetime | None = None


SUPPORTED_CURRENCIES: dict[str, CurrencyFormat] = {
    "BRL": CurrencyFormat(code="BRL", symbol="R$", name="Real Brasileiro"),
    "USD": CurrencyFormat(
        code="USD",
        symbol="$",
        name="Dólar Americano",
        display_symbol="US$",
    ),
    "EUR": CurrencyFormat(code="EUR", symbol="€", name="Euro"),
}


__all__ = ["CurrencyFormat", "ExchangeRate", "SUPPORTED_CURRENCIES"]
