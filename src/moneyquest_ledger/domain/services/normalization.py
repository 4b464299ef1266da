"""Domain normalization helpers.

Raw rows from the data platform pass through `normalize_transaction` once, at
ingestion, so aggregation always receives fully populated records.
"""

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from moneyquest_ledger.domain.constants import BASE_CURRENCY, EXPENSE, INCOME
from moneyquest_ledger.domain.models import Transaction, Wallet
from moneyquest_ledger.utils.decimal_utils import coerce_decimal


def normalize_currency(
    currency: str | None,
    default: str = BASE_CURRENCY,
) -> str:
    """Normalize a currency code, defaulting when missing.

    Args:
        currency: Raw currency code from a repository.
        default: Code used when the raw value is empty.

    Returns:
        str: Upper-cased currency code.
    """
    if not currency:
        return default
    cleaned = str(currency).strip().upper()
    return cleaned or default


def normalize_transaction_type(value: str | None) -> str:
    """Return INCOME or EXPENSE; anything that is not income is an expense."""
    if value and str(value).strip().upper() == INCOME:
        return INCOME
    return EXPENSE


def parse_calendar_date(value: Any) -> date | None:
    """Parse a stored date into a calendar date.

    Date-only strings are read as calendar dates, never as UTC midnight, so a
    transaction never shifts to the previous day.

    Args:
        value: `date`, `datetime`, or an ISO formatted string.

    Returns:
        date | None: Parsed date, or None when the value is unusable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if len(text) < 10:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def normalize_transaction(
    raw: Mapping[str, Any],
    default_currency: str = BASE_CURRENCY,
) -> Transaction:
    """Build a Transaction from a raw row mapping.

    Args:
        raw: Row mapping with transaction columns.
        default_currency: Currency assumed when the row has none.

    Returns:
        Transaction: Record with currency, type and amount populated.
    """
    subtype = raw.get("transaction_subtype", raw.get("subtype"))
    return Transaction(
        id=str(raw.get("id", "")),
        amount=abs(coerce_decimal(raw.get("amount"))),
        currency=normalize_currency(raw.get("currency"), default_currency),
        type=normalize_transaction_type(raw.get("type")),
        category=str(raw.get("category") or ""),
        date=parse_calendar_date(raw.get("date")),
        wallet_id=_optional_str(raw.get("wallet_id")),
        description=str(raw.get("description") or ""),
        subtype=_optional_str(subtype),
        credit_card_id=_optional_str(raw.get("credit_card_id")),
    )


def normalize_wallet(
    raw: Mapping[str, Any],
    default_currency: str = BASE_CURRENCY,
) -> Wallet:
    """Build a Wallet from a raw row mapping."""
    is_active = raw.get("is_active")
    return Wallet(
        id=str(raw.get("id", "")),
        name=str(raw.get("name") or ""),
        currency=normalize_currency(raw.get("currency"), default_currency),
        current_balance=coerce_decimal(raw.get("current_balance")),
        is_active=True if is_active is None else bool(is_active),
    )


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


__all__ = [
    "normalize_currency",
    "normalize_transaction_type",
    "parse_calendar_date",
    "normalize_transaction",
    "normalize_wallet",
]
