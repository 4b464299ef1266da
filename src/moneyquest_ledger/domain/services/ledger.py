"""Domain services for ledger aggregation.

Every function converts amounts into the display currency with the given
rate table and returns fresh result objects. Nothing here raises for bad
data: empty input produces zeroed results.
"""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from moneyquest_ledger.domain.constants import (
    ADJUSTMENT_SUBTYPES,
    INCOME,
    TRANSFER_SUBTYPES,
)
from moneyquest_ledger.domain.models import (
    AggregationResult,
    CashflowPoint,
    CategoryChange,
    CategoryTotal,
    Period,
    PeriodComparison,
    ReportFilters,
    Transaction,
    Wallet,
    WalletBalances,
)
from moneyquest_ledger.domain.services.fx import RateTable
from moneyquest_ledger.domain.services.periods import (
    choose_granularity,
    iter_buckets,
    previous_period,
)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def filter_transactions(
    transactions: Iterable[Transaction],
    period: Period,
    filters: ReportFilters | None = None,
    today: date | None = None,
) -> list[Transaction]:
    """Keep transactions inside the period that pass the report filters.

    Args:
        transactions: Normalized transactions.
        period: Inclusive calendar range.
        filters: Optional report filters; None keeps everything in range.
        today: Reference date for excluding future entries.

    Returns:
        list[Transaction]: Matching transactions in input order.
    """
    if filters is None:
        return [tx for tx in transactions if period.contains(tx.date)]
    today = today or date.today()
    return [
        tx
        for tx in transactions
        if period.contains(tx.date) and _passes(tx, filters, today)
    ]


def _passes(tx: Transaction, filters: ReportFilters, today: date) -> bool:
    if not filters.include_future and tx.date is not None and tx.date > today:
        return False
    if not filters.include_transfers and tx.subtype in TRANSFER_SUBTYPES:
        return False
    if not filters.include_adjustments and tx.subtype in ADJUSTMENT_SUBTYPES:
        return False
    if filters.transaction_type and tx.type != filters.transaction_type:
        return False
    if filters.wallet_ids and tx.wallet_id not in filters.wallet_ids:
        return False
    if filters.categories and tx.category not in filters.categories:
        return False
    if filters.search_text:
        needle = filters.search_text.lower()
        if (
            needle not in tx.description.lower()
            and needle not in tx.category.lower()
        ):
            return False
    if filters.min_amount is not None and tx.amount < filters.min_amount:
        return False
    if filters.max_amount is not None and tx.amount > filters.max_amount:
        return False
    return True


def aggregate(
    transactions: Iterable[Transaction],
    period: Period | None,
    *,
    rate_table: RateTable,
    target_currency: str,
    filters: ReportFilters | None = None,
    today: date | None = None,
) -> AggregationResult:
    """Summarize income, expenses and expense categories for a period.

    Args:
        transactions: Normalized transactions, any currency.
        period: Inclusive calendar range; None yields an empty result.
        rate_table: Rates used to convert into `target_currency`.
        target_currency: Display currency for every total.
        filters: Optional report filters.
        today: Reference date for the future-transaction filter.

    Returns:
        AggregationResult: Totals with categories sorted by total, largest
        first; ties keep first-seen order.
    """
    if period is None:
        return empty_result(target_currency)

    selected = filter_transactions(transactions, period, filters, today)
    total_income = ZERO
    total_expenses = ZERO
    category_totals: dict[str, Decimal] = {}
    category_counts: dict[str, int] = {}
    for tx in selected:
        amount = rate_table.convert(tx.amount, tx.currency, target_currency)
        if tx.type == INCOME:
            total_income += amount
            continue
        total_expenses += amount
        category_totals[tx.category] = (
            category_totals.get(tx.category, ZERO) + amount
        )
        category_counts[tx.category] = category_counts.get(tx.category, 0) + 1

    by_category = [
        CategoryTotal(
            category=category,
            total=total,
            percentage=_share(total, total_expenses),
            count=category_counts[category],
        )
        for category, total in category_totals.items()
    ]
    by_category.sort(key=lambda item: item.total, reverse=True)

    return AggregationResult(
        total_income=total_income,
        total_expenses=total_expenses,
        net_result=total_income - total_expenses,
        by_category=by_category,
        period_start=period.start,
        period_end=period.end,
        currency_code=target_currency,
        transaction_count=len(selected),
    )


def empty_result(
    target_currency: str,
    period: Period | None = None,
) -> AggregationResult:
    """Return a zeroed aggregation."""
    return AggregationResult(
        total_income=ZERO,
        total_expenses=ZERO,
        net_result=ZERO,
        by_category=[],
        period_start=period.start if period else None,
        period_end=period.end if period else None,
        currency_code=target_currency,
        transaction_count=0,
    )


def percent_change(current: Decimal, previous: Decimal) -> Decimal:
    """Return the percent change from `previous` to `current`.

    A non-positive previous value yields 0 rather than an infinite change.
    """
    if previous > 0:
        return (current - previous) / previous * HUNDRED
    return ZERO


def compare_periods(
    transactions: Iterable[Transaction],
    period: Period,
    *,
    rate_table: RateTable,
    target_currency: str,
    filters: ReportFilters | None = None,
    today: date | None = None,
    top_n: int = 5,
    previous: Period | None = None,
) -> PeriodComparison:
    """Aggregate the period and the one before it and compute deltas.

    Args:
        transactions: Transactions covering both periods.
        period: Current period.
        rate_table: Rates used for conversion.
        target_currency: Display currency.
        filters: Optional report filters applied to both periods.
        today: Reference date for the future-transaction filter.
        top_n: Number of current top categories compared.
        previous: Period compared against; defaults to the same-length
            period ending the day before `period`.

    Returns:
        PeriodComparison: Both aggregations and their percent changes.
    """
    rows = list(transactions)
    current = aggregate(
        rows,
        period,
        rate_table=rate_table,
        target_currency=target_currency,
        filters=filters,
        today=today,
    )
    previous_result = aggregate(
        rows,
        previous or previous_period(period),
        rate_table=rate_table,
        target_currency=target_currency,
        filters=filters,
        today=today,
    )
    previous_totals = {
        item.category: item.total for item in previous_result.by_category
    }
    top_categories = [
        CategoryChange(
            category=item.category,
            current_total=item.total,
            previous_total=previous_totals.get(item.category, ZERO),
            change=percent_change(
                item.total,
                previous_totals.get(item.category, ZERO),
            ),
        )
        for item in current.top_categories(top_n)
    ]
    return PeriodComparison(
        current=current,
        previous=previous_result,
        income_change=percent_change(
            current.total_income,
            previous_result.total_income,
        ),
        expense_change=percent_change(
            current.total_expenses,
            previous_result.total_expenses,
        ),
        result_change=percent_change(
            current.net_result,
            previous_result.net_result,
        ),
        top_categories=top_categories,
    )


def cashflow_timeline(
    transactions: Iterable[Transaction],
    period: Period,
    *,
    rate_table: RateTable,
    target_currency: str,
    granularity: str | None = None,
    filters: ReportFilters | None = None,
    today: date | None = None,
) -> list[CashflowPoint]:
    """Bucket income and expenses over the period with a running balance.

    Args:
        transactions: Normalized transactions.
        period: Inclusive calendar range.
        rate_table: Rates used for conversion.
        target_currency: Display currency.
        granularity: daily, weekly or monthly; chosen from the period
            length when omitted.
        filters: Optional report filters.
        today: Reference date for the future-transaction filter.

    Returns:
        list[CashflowPoint]: One point per bucket, in date order.
    """
    selected = filter_transactions(transactions, period, filters, today)
    converted = [
        (
            tx.date,
            tx.type,
            rate_table.convert(tx.amount, tx.currency, target_currency),
        )
        for tx in selected
    ]
    points: list[CashflowPoint] = []
    cumulative = ZERO
    for start, end, label in iter_buckets(
        period,
        granularity or choose_granularity(period),
    ):
        income = ZERO
        expenses = ZERO
        for tx_date, tx_type, amount in converted:
            if not start <= tx_date <= end:
                continue
            if tx_type == INCOME:
                income += amount
            else:
                expenses += amount
        net_flow = income - expenses
        cumulative += net_flow
        points.append(
            CashflowPoint(
                period_start=start,
                period_end=end,
                label=label,
                income=income,
                expenses=expenses,
                net_flow=net_flow,
                cumulative_balance=cumulative,
            )
        )
    return points


def wallet_balances(
    wallets: Iterable[Wallet],
    *,
    rate_table: RateTable,
    target_currency: str,
) -> WalletBalances:
    """Group active wallet balances by currency and total them.

    Args:
        wallets: Wallets with balances in their own currency.
        rate_table: Rates used for the converted total.
        target_currency: Display currency of the total.

    Returns:
        WalletBalances: Per-currency sums and the converted grand total.
    """
    by_currency: dict[str, Decimal] = {}
    total = ZERO
    for wallet in wallets:
        if not wallet.is_active:
            continue
        by_currency[wallet.currency] = (
            by_currency.get(wallet.currency, ZERO) + wallet.current_balance
        )
        total += rate_table.convert(
            wallet.current_balance,
            wallet.currency,
            target_currency,
        )
    return WalletBalances(
        by_currency=by_currency,
        total=total,
        currency_code=target_currency,
    )


def _share(part: Decimal, whole: Decimal) -> Decimal:
    if whole <= 0:
        return ZERO
    return part / whole * HUNDRED


__all__ = [
    "filter_transactions",
    "aggregate",
    "empty_result",
    "percent_change",
    "compare_periods",
    "cashflow_timeline",
    "wallet_balances",
]
