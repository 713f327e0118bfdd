"""Abstract key-value store interface."""

import logging
from abc import ABC, abstractmethod
from typing import Any

logger = logging.getLogger(__name__)

USER_SETTINGS_KEY = "userSettings"
UNBILLED_ITEMS_KEY = "unbilledItems"
INVOICES_KEY = "invoices"

_MISSING = object()


class Store(ABC):
    """Synchronous key-value store holding JSON-compatible values."""

    def connect(self) -> None:
        """Open any underlying resources."""

    def disconnect(self) -> None:
        """Release any underlying resources."""

    @abstractmethod
    def load(self, key: str, default: Any = None) -> Any:
        """Load the value stored under ``key``, or ``default`` if absent."""
        pass

    @abstractmethod
    def save(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        pass

    def save_many(self, values: dict[str, Any]) -> None:
        """Store several keys so that either all or none are updated.

        The default implementation stages the previous value of every key,
        writes them in order and, if a write fails, restores the keys that
        were already written before re-raising. Stores that can write a
        combined snapshot or use a real transaction override this.
        """
        staged = {key: self.load(key, _MISSING) for key in values}
        written: list[str] = []
        try:
            for key, value in values.items():
                self.save(key, value)
                written.append(key)
        except Exception:
            logger.warning("Store write failed, rolling back keys: %s", written)
            for key in reversed(written):
                previous = staged[key]
                if previous is _MISSING:
                    self.delete(key)
                else:
                    self.save(key, previous)
            raise
