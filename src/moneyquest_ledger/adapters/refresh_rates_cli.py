"""CLI adapter to refresh stored exchange rates from Frankfurter.

This module wires the ExchangeRateService to the concrete adapters and
prints the resulting rate table state.
"""

from moneyquest_ledger.adapters.cli_common import rates_banner
from moneyquest_ledger.infrastructure.container import (
    build_exchange_rate_service,
)
from moneyquest_ledger.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


def main() -> None:
    """Refresh rates and print the pair count and staleness."""
    logger = get_app_logger()
    service = build_exchange_rate_service()

    state = service.refresh_rates()
    get_usage_logger().info(f"refresh_rates pairs={state.pair_count}")

    if state.error:
        logger.error(f"Exchange rate refresh failed: {state.error}")
    print(
        f"Exchange rates: {state.pair_count} pairs, "
        f"last update {state.last_update or 'never'}."
    )
    banner = rates_banner(state)
    if banner:
        print(banner)


if __name__ == "__main__":  # pragma: no cover
    main()
