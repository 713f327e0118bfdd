"""Store factory functions."""

import os
from pathlib import Path
from typing import Optional

from timebill.database.json_store import JSONFileStore
from timebill.database.sqlalchemy_store import SQLAlchemyStore


def default_data_dir() -> Path:
    """Return ~/.timebill, creating it if needed."""
    data_dir = Path.home() / ".timebill"
    data_dir.mkdir(exist_ok=True)
    return data_dir


def create_sqlite_store(database_path: Optional[str] = None) -> SQLAlchemyStore:
    """Create a SQLite-backed store.

    Args:
        database_path: Path to SQLite database file. If None, checks TIMEBILL_DB_PATH
            environment variable, then defaults to ~/.timebill/timebill.db

    Returns:
        SQLAlchemyStore instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("TIMEBILL_DB_PATH")

    if database_path is None:
        database_path = str(default_data_dir() / "timebill.db")

    return SQLAlchemyStore(f"sqlite:///{database_path}", database_path=database_path)


def create_json_store(path: Optional[str] = None) -> JSONFileStore:
    """Create a JSON-file-backed store, defaulting to ~/.timebill/timebill.json."""
    if path is None:
        path = str(default_data_dir() / "timebill.json")
    return JSONFileStore(path)
