"""In-memory store implementation."""

import copy
from typing import Any

from timebill.database.base import Store


class MemoryStore(Store):
    """Dict-backed store; values are deep-copied in and out."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def load(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def save(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def save_many(self, values: dict[str, Any]) -> None:
        """Swap in all values at once."""
        updated = dict(self._data)
        for key, value in values.items():
            updated[key] = copy.deepcopy(value)
        self._data = updated
