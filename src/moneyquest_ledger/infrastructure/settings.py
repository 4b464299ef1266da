"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from typing import Optional

import dotenv

from moneyquest_ledger.domain.constants import BASE_CURRENCY, STALE_AFTER_HOURS
from moneyquest_ledger.domain.models import SUPPORTED_CURRENCIES
from moneyquest_ledger.infrastructure.logging.logger import get_app_logger

DEFAULT_FX_API_URL = "https://api.frankfurter.dev/v1"
DEFAULT_FX_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class LedgerSettings:
    """Runtime settings for the ledger services.

    Attributes:
        base_currency: Currency assumed for rows without one.
        rates_stale_hours: Age after which exchange rates are stale.
        fx_api_url: Base URL of the Frankfurter API.
        fx_timeout_seconds: HTTP timeout for rate downloads.
        user_id: Default user for command-line reports.
    """

    base_currency: str = BASE_CURRENCY
    rates_stale_hours: int = STALE_AFTER_HOURS
    fx_api_url: str = DEFAULT_FX_API_URL
    fx_timeout_seconds: float = DEFAULT_FX_TIMEOUT_SECONDS
    user_id: Optional[str] = None

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Invalid values are logged and replaced by their defaults.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        base_currency = (
            os.getenv("LEDGER_BASE_CURRENCY", BASE_CURRENCY).strip().upper()
        )
        if base_currency not in SUPPORTED_CURRENCIES:
            logger.warning(
                f"Unsupported LEDGER_BASE_CURRENCY {base_currency!r}; "
                f"using {BASE_CURRENCY}"
            )
            base_currency = BASE_CURRENCY
        stale_hours = cls._parse_number(
            "LEDGER_RATES_STALE_HOURS",
            STALE_AFTER_HOURS,
            int,
            logger=logger,
        )
        timeout = cls._parse_number(
            "LEDGER_FX_TIMEOUT_SECONDS",
            DEFAULT_FX_TIMEOUT_SECONDS,
            float,
            logger=logger,
        )
        fx_api_url = os.getenv("LEDGER_FX_API_URL", "").strip().rstrip("/")
        user_id = os.getenv("LEDGER_USER_ID", "").strip() or None
        return cls(
            base_currency=base_currency,
            rates_stale_hours=stale_hours,
            fx_api_url=fx_api_url or DEFAULT_FX_API_URL,
            fx_timeout_seconds=timeout,
            user_id=user_id,
        )

    @staticmethod
    def _parse_number(name: str, default, cast, logger):
        """Read a positive number from the environment.

        Args:
            name: Environment variable name.
            default: Value used when missing or invalid.
            cast: Type applied to the raw string.
            logger: Logger used for warnings.

        Returns:
            The parsed value, or `default`.
        """
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = cast(raw.strip())
        except ValueError:
            logger.warning(f"Invalid {name} value {raw!r}; using {default}")
            return default
        if value <= 0:
            logger.warning(f"Non-positive {name} value {raw!r}; using {default}")
            return default
        return value


__all__ = ["LedgerSettings"]
