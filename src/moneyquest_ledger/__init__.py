"""Currency-aware ledger aggregation for the MoneyQuest finance tracker."""

__version__ = "0.1.0"
