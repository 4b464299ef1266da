"""Helpers shared by the command-line adapters."""

import os

from moneyquest_ledger.domain.models import Period
from moneyquest_ledger.domain.services.periods import (
    current_month,
    month_period,
)

REPORT_MONTH_ENV = "LEDGER_REPORT_MONTH"


def parse_month(value: str | None, logger) -> Period | None:
    """Parse a YYYY-MM string into a calendar month.

    Args:
        value: Month string such as 2024-03.
        logger: Logger used for warnings.

    Returns:
        Period | None: Month period or None when invalid.
    """
    if not value:
        return None
    try:
        year, month = (int(part) for part in value.strip().split("-", 1))
        return month_period(year, month)
    except ValueError:
        logger.warning(f"Invalid month '{value}'. Expected format YYYY-MM.")
        return None


def report_month(logger) -> Period:
    """Return the month named by LEDGER_REPORT_MONTH or the current one."""
    return parse_month(os.getenv(REPORT_MONTH_ENV), logger) or current_month()


def rates_banner(state) -> str | None:
    """Return a warning line for stale or unavailable rates."""
    if state.error:
        return f"Exchange rates unavailable ({state.error}); using fallbacks."
    if state.is_stale:
        return (
            "Exchange rates are stale "
            f"(last update: {state.last_update or 'never'})."
        )
    return None


__all__ = ["parse_month", "report_month", "rates_banner", "REPORT_MONTH_ENV"]
