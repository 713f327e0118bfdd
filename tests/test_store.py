"""Tests for store implementations and multi-key atomicity."""

import pytest

from timebill.database.base import Store
from timebill.database.json_store import JSONFileStore
from timebill.database.memory import MemoryStore
from timebill.domain.errors import ValidationError


class FlakyStore(MemoryStore):
    """Memory store whose writes to one key fail."""

    def __init__(self, failing_key: str, **kwargs):
        super().__init__(**kwargs)
        self.failing_key = failing_key

    def save(self, key, value):
        if key == self.failing_key:
            raise OSError(f"disk full while writing {key}")
        super().save(key, value)

    # Use the staged write from the base class
    save_many = Store.save_many


@pytest.fixture(params=["memory", "json", "sqlite"])
def any_store(request, tmp_path, temp_store):
    if request.param == "memory":
        return MemoryStore()
    if request.param == "json":
        return JSONFileStore(tmp_path / "store.json")
    return temp_store


class TestStoreContract:
    def test_load_default(self, any_store):
        assert any_store.load("invoices", []) == []
        assert any_store.load("userSettings") is None

    def test_save_and_load(self, any_store):
        any_store.save("userSettings", {"name": "Jane", "address": "", "hourlyRate": 100})
        assert any_store.load("userSettings") == {"name": "Jane", "address": "", "hourlyRate": 100}

    def test_save_many(self, any_store):
        any_store.save_many({"unbilledItems": [], "invoices": [{"id": "i1"}]})
        assert any_store.load("unbilledItems") == []
        assert any_store.load("invoices") == [{"id": "i1"}]

    def test_overwrite(self, any_store):
        any_store.save("invoices", [1])
        any_store.save("invoices", [1, 2])
        assert any_store.load("invoices") == [1, 2]

    def test_delete(self, any_store):
        any_store.save("invoices", [1])
        any_store.delete("invoices")
        assert any_store.load("invoices", "gone") == "gone"

    def test_loaded_values_are_copies(self, any_store):
        any_store.save("invoices", [{"id": "i1"}])
        loaded = any_store.load("invoices")
        loaded.append({"id": "i2"})
        assert any_store.load("invoices") == [{"id": "i1"}]


class TestStagedRollback:
    def test_failed_write_restores_earlier_keys(self):
        store = FlakyStore("invoices", initial={"unbilledItems": [{"id": "e1"}], "invoices": []})

        with pytest.raises(OSError):
            store.save_many({"unbilledItems": [], "invoices": [{"id": "i1"}]})

        assert store.load("unbilledItems") == [{"id": "e1"}]
        assert store.load("invoices") == []

    def test_failed_write_removes_new_keys(self):
        store = FlakyStore("invoices")

        with pytest.raises(OSError):
            store.save_many({"unbilledItems": [], "invoices": []})

        assert store.load("unbilledItems", "absent") == "absent"


class TestJSONFileStore:
    def test_single_document(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        store = JSONFileStore(path)
        store.save_many({"unbilledItems": [], "invoices": []})
        assert path.exists()
        assert list(path.parent.iterdir()) == [path]

    def test_invalid_json_is_validation_error(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValidationError, match="invalid JSON"):
            JSONFileStore(path).load("invoices")


class TestSQLAlchemyStore:
    def test_persists_across_instances(self, temp_store):
        from timebill.database.factories import create_sqlite_store

        temp_store.save("invoices", [{"id": "i1"}])
        other = create_sqlite_store(temp_store.database_path)
        try:
            assert other.load("invoices") == [{"id": "i1"}]
        finally:
            other.disconnect()

    def test_sqlite_factory_records_path(self, tmp_path, monkeypatch):
        from timebill.database.factories import create_sqlite_store

        path = str(tmp_path / "explicit.db")
        assert create_sqlite_store(path).database_path == path

        env_path = str(tmp_path / "from-env.db")
        monkeypatch.setenv("TIMEBILL_DB_PATH", env_path)
        store = create_sqlite_store()
        assert store.database_path == env_path
        assert store.database_url == f"sqlite:///{env_path}"

    def test_url_only_store_has_no_path(self):
        from timebill.database.sqlalchemy_store import SQLAlchemyStore

        assert SQLAlchemyStore("sqlite://").database_path is None

    def test_unserializable_value_rolls_back(self, temp_store):
        temp_store.save("unbilledItems", [{"id": "e1"}])
        with pytest.raises(TypeError):
            temp_store.save_many({"unbilledItems": [], "invoices": [object()]})
        assert temp_store.load("unbilledItems") == [{"id": "e1"}]
        assert temp_store.load("invoices") is None

    def test_env_var_path(self, tmp_path, monkeypatch):
        from timebill.database.factories import create_sqlite_store

        path = tmp_path / "env.db"
        monkeypatch.setenv("TIMEBILL_DB_PATH", str(path))
        store = create_sqlite_store()
        try:
            store.save("invoices", [])
        finally:
            store.disconnect()
        assert path.exists()
