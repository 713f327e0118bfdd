"""Persistence layer for timebill."""

from timebill.database.base import (
    Store,
    USER_SETTINGS_KEY,
    UNBILLED_ITEMS_KEY,
    INVOICES_KEY,
)
from timebill.database.memory import MemoryStore
from timebill.database.json_store import JSONFileStore
from timebill.database.sqlalchemy_store import SQLAlchemyStore
from timebill.database.factories import create_sqlite_store, create_json_store

__all__ = [
    "Store",
    "USER_SETTINGS_KEY",
    "UNBILLED_ITEMS_KEY",
    "INVOICES_KEY",
    "MemoryStore",
    "JSONFileStore",
    "SQLAlchemyStore",
    "create_sqlite_store",
    "create_json_store",
]
