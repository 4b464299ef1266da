"""Per-session display currency context.

The context is built once per user session from the stored profile
preference. Presentation code receives it explicitly and uses it to format
and convert amounts; subscribers are notified when the currency changes.
"""

from collections.abc import Callable
from decimal import Decimal

from moneyquest_ledger.application.errors import DataSourceUnavailable
from moneyquest_ledger.application.ports.profile_source import (
    ProfileSourcePort,
)
from moneyquest_ledger.domain.constants import BASE_CURRENCY
from moneyquest_ledger.domain.models import SUPPORTED_CURRENCIES
from moneyquest_ledger.domain.services.events import ChangeNotifier
from moneyquest_ledger.domain.services.formatting import (
    currency_format_for,
    format_currency,
)
from moneyquest_ledger.domain.services.fx import (
    RateTable,
    identity_rate_table,
)
from moneyquest_ledger.domain.services.normalization import normalize_currency
from moneyquest_ledger.infrastructure.logging.logger import get_app_logger


class UserCurrencyContext:
    """Display currency of one user plus the rates used to reach it."""

    def __init__(
        self,
        currency: str = BASE_CURRENCY,
        *,
        rate_table: RateTable | None = None,
        profile_source: ProfileSourcePort | None = None,
        user_id: str | None = None,
        logger=None,
    ) -> None:
        """Initialize the context.

        Args:
            currency: Initial display currency; must be supported.
            rate_table: Rates used by the conversion helpers.
            profile_source: Port persisting preference changes; None makes
                `set_currency` update memory only.
            user_id: Profile owner, required when `profile_source` is set.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._currency = _require_supported(currency)
        self._rate_table = rate_table or RateTable()
        self._profile_source = profile_source
        self._user_id = user_id
        self._logger = logger or get_app_logger()
        self._changes: ChangeNotifier[str] = ChangeNotifier()

    @classmethod
    def load(
        cls,
        profile_source: ProfileSourcePort,
        user_id: str,
        *,
        rate_table: RateTable | None = None,
        logger=None,
    ) -> "UserCurrencyContext":
        """Build the context from the user's stored preference.

        Profile failures and unsupported values fall back to BRL.
        """
        logger = logger or get_app_logger()
        currency = BASE_CURRENCY
        try:
            preferred = profile_source.get_preferred_currency(user_id)
        except DataSourceUnavailable as exc:
            logger.warning(
                f"Could not load preferred currency for {user_id}: {exc}; "
                f"using {BASE_CURRENCY}"
            )
        else:
            code = normalize_currency(preferred, default="")
            if code in SUPPORTED_CURRENCIES:
                currency = code
            elif preferred:
                logger.warning(
                    f"Unsupported preferred currency {preferred!r} for "
                    f"{user_id}; using {BASE_CURRENCY}"
                )
        return cls(
            currency,
            rate_table=rate_table,
            profile_source=profile_source,
            user_id=user_id,
            logger=logger,
        )

    @property
    def currency(self) -> str:
        return self._currency

    @property
    def locale(self) -> str:
        return currency_format_for(self._currency).locale

    @property
    def currency_symbol(self) -> str:
        return currency_format_for(self._currency).symbol

    @property
    def rate_table(self) -> RateTable:
        return self._rate_table

    def format_currency(self, amount) -> str:
        """Format an amount already expressed in the display currency."""
        return format_currency(amount, self._currency, self.locale)

    def convert_to_user_currency(self, amount, from_currency: str) -> Decimal:
        return self._rate_table.convert(amount, from_currency, self._currency)

    def format_converted(self, amount, from_currency: str) -> str:
        """Convert an amount into the display currency and format it."""
        return self.format_currency(
            self.convert_to_user_currency(amount, from_currency)
        )

    def set_currency(self, code: str) -> None:
        """Persist and apply a new display currency.

        Raises:
            ValueError: If the code is not a supported currency.
            DataSourceUnavailable: If the preference could not be stored;
                the in-memory currency is left unchanged.
        """
        currency = _require_supported(code)
        if self._profile_source is not None and self._user_id is not None:
            self._profile_source.set_preferred_currency(self._user_id, currency)
        self._logger.info(f"Display currency set to {currency}")
        self._apply(currency)

    def apply_remote_change(self, code: str) -> None:
        """Apply a preference change pushed by another session.

        Unsupported codes are logged and ignored.
        """
        currency = normalize_currency(code, default="")
        if currency not in SUPPORTED_CURRENCIES:
            self._logger.warning(
                f"Ignoring unsupported remote currency change {code!r}"
            )
            return
        self._apply(currency)

    def on_change(self, callback: Callable[[str], None]) -> Callable[[], None]:
        """Subscribe to currency changes; returns an unsubscribe handle."""
        return self._changes.subscribe(callback)

    def _apply(self, currency: str) -> None:
        if currency == self._currency:
            return
        self._currency = currency
        self._changes.notify(currency)


class _DefaultCurrencyContext(UserCurrencyContext):
    """Session-less context: BRL, face-value conversions, no persistence."""

    def set_currency(self, code: str) -> None:
        self._logger.debug(
            f"Ignoring currency change to {code!r} without a user session"
        )


def default_currency_context(logger=None) -> UserCurrencyContext:
    """Return a BRL / pt-BR context usable before a session exists."""
    return _DefaultCurrencyContext(
        BASE_CURRENCY,
        rate_table=identity_rate_table(),
        logger=logger,
    )


def _require_supported(code: str) -> str:
    currency = normalize_currency(code, default="")
    if currency not in SUPPORTED_CURRENCIES:
        raise ValueError(f"Unsupported currency: {code!r}")
    return currency


__all__ = ["UserCurrencyContext", "default_currency_context"]
