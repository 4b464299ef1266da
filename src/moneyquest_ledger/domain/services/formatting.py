"""Currency formatting for display."""

from decimal import Decimal

from moneyquest_ledger.domain.constants import DEFAULT_LOCALE
from moneyquest_ledger.domain.models import SUPPORTED_CURRENCIES, CurrencyFormat
from moneyquest_ledger.domain.services.normalization import normalize_currency
from moneyquest_ledger.utils.decimal_utils import coerce_decimal, round_money

# (thousands separator, decimal separator)
LOCALE_SEPARATORS: dict[str, tuple[str, str]] = {
    "pt-BR": (".", ","),
    "en-US": (",", "."),
    "de-DE": (".", ","),
}


def currency_format_for(currency: str | None) -> CurrencyFormat:
    """Return display rules for a code, inventing them for unknown codes."""
    code = normalize_currency(currency)
    known = SUPPORTED_CURRENCIES.get(code)
    if known is not None:
        return known
    return CurrencyFormat(code=code, symbol=code, name=code)


def format_currency(
    amount,
    currency: str | None = None,
    locale: str | None = None,
) -> str:
    """Format an amount like `R$ 1.234,56`.

    Args:
        amount: Numeric amount.
        currency: Currency code; defaults to the base currency.
        locale: Locale whose separators to use; defaults to the currency's.

    Returns:
        str: Symbol, space, and the amount with two decimals.
    """
    fmt = currency_format_for(currency)
    places = Decimal(1).scaleb(-fmt.decimal_places)
    value = round_money(coerce_decimal(amount), places)
    thousands, decimal_sep = LOCALE_SEPARATORS.get(
        locale or fmt.locale,
        LOCALE_SEPARATORS[DEFAULT_LOCALE],
    )
    digits = f"{abs(value):,.{fmt.decimal_places}f}"
    digits = (
        digits.replace(",", "\0")
        .replace(".", decimal_sep)
        .replace("\0", thousands)
    )
    sign = "-" if value < 0 else ""
    return f"{sign}{fmt.display_symbol or fmt.symbol} {digits}"


def format_percent(value, places: int = 0) -> str:
    """Format a percent change with an explicit sign, e.g. `+12%`."""
    number = coerce_decimal(value)
    sign = "+" if number > 0 else ""
    return f"{sign}{number:.{places}f}%"


__all__ = [
    "LOCALE_SEPARATORS",
    "currency_format_for",
    "format_currency",
    "format_percent",
]
