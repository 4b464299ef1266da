"""Port for the user profile currency preference."""

from typing import Protocol


class ProfileSourcePort(Protocol):
    """Read and write the preferred display currency."""

    def get_preferred_currency(self, user_id: str) -> str | None:
        """Return the stored currency code, or None when unset."""

    def set_preferred_currency(self, user_id: str, currency: str) -> None:
        """Persist a new currency code."""


__all__ = ["ProfileSourcePort"]
