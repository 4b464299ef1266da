"""Domain services for currency conversion."""

from collections.abc import Callable, Iterable, Mapping
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from logging import Logger

from moneyquest_ledger.domain.constants import (
    FALLBACK_RATES,
    STALE_AFTER_HOURS,
)
from moneyquest_ledger.domain.models import ExchangeRate
from moneyquest_ledger.domain.services.events import ChangeNotifier
from moneyquest_ledger.domain.services.normalization import normalize_currency
from moneyquest_ledger.utils.decimal_utils import coerce_decimal, round_money

ONE = Decimal("1")
CROSS_RATE_PLACES = Decimal("0.000001")


class RateTable:
    """In-memory cache of directional exchange rates.

    One table is built per session and passed to every conversion call. A
    refresh replaces the whole table; readers never see a partial merge.
    """

    def __init__(
        self,
        rates: Iterable[ExchangeRate] | None = None,
        *,
        fallback_rates: Mapping[str, Mapping[str, Decimal]] | None = None,
        stale_after_hours: int = STALE_AFTER_HOURS,
        logger: Logger | None = None,
    ) -> None:
        """Initialize the table.

        Args:
            rates: Optional initial rate rows.
            fallback_rates: Static rates used when a pair is missing.
            stale_after_hours: Age after which `is_stale` reports True.
            logger: Optional logger for fallback diagnostics.
        """
        self._rates: dict[tuple[str, str], ExchangeRate] = {}
        self._last_update: datetime | None = None
        self._fallback_rates = (
            FALLBACK_RATES if fallback_rates is None else fallback_rates
        )
        self._stale_after = timedelta(hours=stale_after_hours)
        self._logger = logger
        self._changes: ChangeNotifier[RateTable] = ChangeNotifier()
        if rates:
            self.replace(rates)

    @property
    def last_update(self) -> datetime | None:
        return self._last_update

    @property
    def rates(self) -> list[ExchangeRate]:
        """Return a snapshot of the stored rates."""
        return list(self._rates.values())

    def get_rate(self, from_currency: str, to_currency: str) -> Decimal:
        """Return the rate converting `from_currency` into `to_currency`.

        Lookup order is the stored directional rate, then the static
        fallback table, then identity. Missing rates are never an error.

        Args:
            from_currency: Source currency code.
            to_currency: Target currency code.

        Returns:
            Decimal: Multiplier applied to source amounts.
        """
        source = normalize_currency(from_currency)
        target = normalize_currency(to_currency)
        if source == target:
            return ONE
        stored = self._rates.get((source, target))
        if stored is not None:
            return stored.rate
        fallback = self._fallback_rates.get(source, {}).get(target)
        if fallback is not None:
            self._debug(f"Using fallback FX rate for {source} to {target}")
            return fallback
        self._debug(
            f"Missing FX rate for {source} to {target}; using face value"
        )
        return ONE

    def convert(
        self,
        amount,
        from_currency: str,
        to_currency: str,
    ) -> Decimal:
        """Convert an amount, rounding the result once to cents.

        Identity conversions return the amount untouched.
        """
        value = coerce_decimal(amount)
        rate = self.get_rate(from_currency, to_currency)
        if rate == ONE:
            return value
        return round_money(value * rate)

    def is_stale(self, now: datetime | None = None) -> bool:
        """Return True when the newest rate is older than the threshold.

        Advisory only: stale rates are still used by `convert`.
        """
        if self._last_update is None:
            return True
        current = _as_utc(now or datetime.now(timezone.utc))
        return current - self._last_update > self._stale_after

    def replace(self, rates: Iterable[ExchangeRate]) -> int:
        """Swap in a new set of rates.

        Identity pairs and non-positive rates are skipped. When a pair
        appears twice the most recently updated row wins. An empty input
        leaves the current table in place.

        Args:
            rates: Rate rows fetched from the rate source.

        Returns:
            int: Number of pairs now held, or 0 when nothing was replaced.
        """
        table: dict[tuple[str, str], ExchangeRate] = {}
        for row in rates:
            base = normalize_currency(row.base_currency)
            target = normalize_currency(row.target_currency)
            rate = coerce_decimal(row.rate)
            if base == target or rate <= 0:
                continue
            normalized = ExchangeRate(
                base_currency=base,
                target_currency=target,
                rate=rate,
                updated_at=(
                    _as_utc(row.updated_at) if row.updated_at else None
                ),
            )
            current = table.get((base, target))
            if current is None or _newer(normalized, current):
                table[(base, target)] = normalized
        if not table:
            self._debug("Ignoring empty FX rate refresh")
            return 0

        stamps = [row.updated_at for row in table.values() if row.updated_at]
        self._rates = table
        self._last_update = max(stamps) if stamps else None
        self._changes.notify(self)
        return len(table)

    def on_change(
        self,
        callback: Callable[["RateTable"], None],
    ) -> Callable[[], None]:
        """Subscribe to table replacements; returns an unsubscribe handle."""
        return self._changes.subscribe(callback)

    def _debug(self, message: str) -> None:
        if self._logger is not None:
            self._logger.debug(message)


def convert_amount(
    amount,
    from_currency: str,
    to_currency: str,
    rate_table: RateTable | None = None,
) -> Decimal:
    """Convert with the given table, or with fallback rates only."""
    table = rate_table or RateTable()
    return table.convert(amount, from_currency, to_currency)


def identity_rate_table() -> RateTable:
    """Return a table that converts every amount at face value."""
    return RateTable(fallback_rates={})


def build_cross_rates(
    anchor_rates: Mapping[str, Decimal],
    currencies: Iterable[str],
    *,
    anchor_currency: str,
    updated_at: datetime,
) -> list[ExchangeRate]:
    """Derive every directional pair from rates quoted against one anchor.

    `rate(base -> target) = anchor[target] / anchor[base]`, rounded to six
    places. Identity pairs are never emitted, since the table computes
    them; pairs whose legs are missing are skipped.

    Args:
        anchor_rates: Units of each currency per one anchor unit.
        currencies: Currency codes to pair.
        anchor_currency: Code the quotes are expressed against.
        updated_at: Timestamp stamped on every row.

    Returns:
        list[ExchangeRate]: Rows ready to upsert.
    """
    quotes = {
        normalize_currency(code): coerce_decimal(value)
        for code, value in anchor_rates.items()
    }
    quotes[normalize_currency(anchor_currency)] = ONE
    codes = [normalize_currency(code) for code in currencies]
    rows = []
    for base in codes:
        for target in codes:
            if base == target:
                continue
            base_quote = quotes.get(base)
            target_quote = quotes.get(target)
            if not base_quote or not target_quote:
                continue
            rate = round_money(target_quote / base_quote, CROSS_RATE_PLACES)
            rows.append(
                ExchangeRate(
                    base_currency=base,
                    target_currency=target,
                    rate=rate,
                    updated_at=updated_at,
                )
            )
    return rows


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _newer(candidate: ExchangeRate, current: ExchangeRate) -> bool:
    if candidate.updated_at is None:
        return False
    if current.updated_at is None:
        return True
    return candidate.updated_at > current.updated_at


__all__ = [
    "RateTable",
    "build_cross_rates",
    "convert_amount",
    "identity_rate_table",
]
