"""Calendar period helpers for reports."""

import calendar
from collections.abc import Iterator
from datetime import date, timedelta

from moneyquest_ledger.domain.models import Period

DAILY = "daily"
WEEKLY = "weekly"
MONTHLY = "monthly"

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
MONTH_ABBREVIATIONS_PT = (
    "jan",
    "fev",
    "mar",
    "abr",
    "mai",
    "jun",
    "jul",
    "ago",
    "set",
    "out",
    "nov",
    "dez",
)


def month_period(year: int, month: int) -> Period:
    """Return the full calendar month."""
    last_day = calendar.monthrange(year, month)[1]
    return Period(start=date(year, month, 1), end=date(year, month, last_day))


def current_month(today: date | None = None) -> Period:
    """Return the month containing `today`."""
    today = today or date.today()
    return month_period(today.year, today.month)


def previous_month(period: Period) -> Period:
    """Return the calendar month before the one `period` starts in."""
    first = period.start.replace(day=1)
    last_of_previous = first - timedelta(days=1)
    return month_period(last_of_previous.year, last_of_previous.month)


def last_n_days(days: int, today: date | None = None) -> Period:
    """Return the `days` days ending today, inclusive."""
    today = today or date.today()
    length = max(days, 1)
    return Period(start=today - timedelta(days=length - 1), end=today)


def previous_period(period: Period) -> Period:
    """Return a period of the same length ending the day before `period`."""
    end = period.start - timedelta(days=1)
    start = end - timedelta(days=period.days - 1)
    return Period(start=start, end=end)


def choose_granularity(period: Period) -> str:
    """Pick daily, weekly or monthly buckets from the period length."""
    if period.days > 90:
        return MONTHLY
    if period.days > 31:
        return WEEKLY
    return DAILY


def iter_buckets(
    period: Period,
    granularity: str,
) -> Iterator[tuple[date, date, str]]:
    """Yield `(start, end, label)` buckets covering the period.

    Weekly buckets start on Monday and monthly buckets on the first of the
    month, so the first bucket may begin before `period.start`.
    """
    if granularity == MONTHLY:
        cursor = period.start.replace(day=1)
        while cursor <= period.end:
            month = month_period(cursor.year, cursor.month)
            label = (
                f"{MONTH_ABBREVIATIONS_PT[cursor.month - 1]} "
                f"{cursor.year % 100:02d}"
            )
            yield month.start, month.end, label
            cursor = month.end + timedelta(days=1)
        return

    if granularity == WEEKLY:
        cursor = period.start - timedelta(days=period.start.weekday())
        step = timedelta(days=7)
    elif granularity == DAILY:
        cursor = period.start
        step = timedelta(days=1)
    else:
        raise ValueError(f"Unsupported granularity: {granularity}")

    while cursor <= period.end:
        end = cursor + step - timedelta(days=1)
        yield cursor, end, cursor.strftime("%d/%m")
        cursor += step


__all__ = [
    "DAILY",
    "WEEKLY",
    "MONTHLY",
    "MONTH_NAMES",
    "month_period",
    "current_month",
    "previous_month",
    "last_n_days",
    "previous_period",
    "choose_granularity",
    "iter_buckets",
]
