"""Domain constants for currency conversion and ledger aggregation."""

from decimal import Decimal

BASE_CURRENCY = "BRL"
DEFAULT_LOCALE = "pt-BR"

INCOME = "INCOME"
EXPENSE = "EXPENSE"
TRANSACTION_TYPES = (INCOME, EXPENSE)

# Rates older than this are flagged as stale; they are still used.
STALE_AFTER_HOURS = 48

# Used when the rate table has no row for a pair.
FALLBACK_RATES: dict[str, dict[str, Decimal]] = {
    "BRL": {"BRL": Decimal("1"), "USD": Decimal("0.17"), "EUR": Decimal("0.15")},
    "USD": {"BRL": Decimal("5.80"), "USD": Decimal("1"), "EUR": Decimal("0.92")},
    "EUR": {"BRL": Decimal("6.30"), "USD": Decimal("1.09"), "EUR": Decimal("1")},
}

TRANSFER_SUBTYPES = ("transfer_out", "transfer_in", "card_payment")
ADJUSTMENT_SUBTYPES = ("cash_adjustment",)

EXCELLENT_MAX_RATIO = Decimal("0.5")
GOOD_MAX_RATIO = Decimal("0.8")
NEAR_LIMIT_PERCENTAGE = Decimal("80")


__all__ = [
    "BASE_CURRENCY",
    "DEFAULT_LOCALE",
    "INCOME",
    "EXPENSE",
    "TRANSACTION_TYPES",
    "STALE_AFTER_HOURS",
    "FALLBACK_RATES",
    "TRANSFER_SUBTYPES",
    "ADJUSTMENT_SUBTYPES",
    "EXCELLENT_MAX_RATIO",
    "GOOD_MAX_RATIO",
    "NEAR_LIMIT_PERCENTAGE",
]
