"""Generic SQLAlchemy store implementation."""

import json
import logging
from typing import Any, Optional
from sqlalchemy.orm import Session

from timebill.database.base import Store
from timebill.database.models import KeyValueEntry, create_session_factory
from timebill.domain.errors import ValidationError, malformed_record

logger = logging.getLogger(__name__)


class SQLAlchemyStore(Store):
    """SQLAlchemy-based implementation of the Store interface.

    Each key is a row holding its JSON-encoded value. Multi-key writes share
    one session transaction.
    """

    def __init__(self, database_url: str, database_path: Optional[str] = None):
        """Initialize SQLAlchemy store.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
            database_path: Filesystem path of a file-backed database, if any
        """
        self.database_url = database_url
        self.database_path = database_path
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def load(self, key: str, default: Any = None) -> Any:
        session = self._get_session()
        entry = session.get(KeyValueEntry, key)
        if entry is None:
            return default
        try:
            return json.loads(entry.value)
        except json.JSONDecodeError as e:
            raise ValidationError(malformed_record(key, f"invalid JSON: {e}")) from e

    def save(self, key: str, value: Any) -> None:
        self.save_many({key: value})

    def delete(self, key: str) -> None:
        session = self._get_session()
        entry = session.get(KeyValueEntry, key)
        if entry is not None:
            session.delete(entry)
            session.commit()

    def save_many(self, values: dict[str, Any]) -> None:
        """Write all values in a single transaction."""
        session = self._get_session()
        try:
            for key, value in values.items():
                encoded = json.dumps(value, ensure_ascii=False)
                entry = session.get(KeyValueEntry, key)
                if entry is None:
                    session.add(KeyValueEntry(key=key, value=encoded))
                else:
                    entry.value = encoded
            session.commit()
        except Exception:
            logger.warning("Rolling back store transaction for keys: %s", list(values))
            session.rollback()
            raise
