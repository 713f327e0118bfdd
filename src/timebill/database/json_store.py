"""JSON file store implementation.

All keys live in one JSON document. Every write replaces the whole document
through a temporary file and ``os.replace``, so readers never observe a
half-written file and multi-key writes are a single snapshot.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from timebill.database.base import Store
from timebill.domain.errors import ValidationError, malformed_record

logger = logging.getLogger(__name__)


class JSONFileStore(Store):
    """Store backed by a single JSON file."""

    def __init__(self, path: str | Path):
        """Initialize JSON file store.

        Args:
            path: Path to the JSON document; created on first write
        """
        self.path = Path(path)

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(malformed_record(str(self.path), f"invalid JSON: {e}")) from e
        if not isinstance(data, dict):
            raise ValidationError(malformed_record(str(self.path), "expected a JSON object"))
        return data

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise
        logger.debug("Wrote store snapshot %s", self.path)

    def load(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def save(self, key: str, value: Any) -> None:
        self.save_many({key: value})

    def delete(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def save_many(self, values: dict[str, Any]) -> None:
        """Write all values in one combined snapshot."""
        data = self._read()
        data.update(values)
        self._write(data)
