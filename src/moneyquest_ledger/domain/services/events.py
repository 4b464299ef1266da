"""Minimal change notification used by rate tables and currency contexts."""

from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class ChangeNotifier(Generic[T]):
    """Keep a list of callbacks and call them with each new value."""

    def __init__(self) -> None:
        self._callbacks: list[Callable[[T], None]] = []

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register a callback.

        Args:
            callback: Called with the new value after every change.

        Returns:
            Callable[[], None]: Handle that removes the callback; calling it
            twice is harmless.
        """
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def notify(self, value: T) -> None:
        for callback in list(self._callbacks):
            callback(value)

    def __len__(self) -> int:
        return len(self._callbacks)


__all__ = ["ChangeNotifier"]
