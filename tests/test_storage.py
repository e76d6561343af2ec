"""Tests for the key-value storage backends."""

import json

import pytest

from mywallet.config import StorageSettings
from mywallet.services.storage import (
    InvalidFormatError,
    JsonFileKeyValueStore,
    MemoryKeyValueStore,
    StorageError,
    create_key_value_store,
)


class TestMemoryKeyValueStore:
    """Tests for the in-memory backend."""

    def test_set_get_remove(self):
        """Test the basic round of operations."""
        store = MemoryKeyValueStore()
        assert store.get("transactions") is None

        store.set("transactions", "[]")
        assert store.get("transactions") == "[]"
        assert store.keys() == ["transactions"]

        store.remove("transactions")
        assert store.get("transactions") is None

    def test_remove_missing_key(self):
        """Test that removing an absent key is not an error."""
        MemoryKeyValueStore().remove("nothing")

    def test_initial_data_copied(self):
        """Test that the initial mapping is not shared."""
        initial = {"settings": "{}"}
        store = MemoryKeyValueStore(initial)
        store.set("settings", '{"darkMode": true}')
        assert initial["settings"] == "{}"

    def test_is_available(self):
        """Test the availability check leaves no key behind."""
        store = MemoryKeyValueStore()
        assert store.is_available()
        assert store.keys() == []


class TestJsonFileKeyValueStore:
    """Tests for the JSON file backend."""

    def test_missing_file_is_empty(self, tmp_path):
        """Test that a missing file reads as an empty store."""
        store = JsonFileKeyValueStore(tmp_path / "wallet.json")
        assert store.get("transactions") is None
        assert store.keys() == []

    def test_values_persist_across_instances(self, tmp_path):
        """Test that a second instance sees the first one's writes."""
        path = tmp_path / "nested" / "wallet.json"
        JsonFileKeyValueStore(path).set("budgets", "[1]")

        assert JsonFileKeyValueStore(path).get("budgets") == "[1]"
        assert json.loads(path.read_text(encoding="utf-8")) == {"budgets": "[1]"}

    def test_remove(self, tmp_path):
        """Test removing a key rewrites the file without it."""
        store = JsonFileKeyValueStore(tmp_path / "wallet.json")
        store.set("a", "1")
        store.set("b", "2")
        store.remove("a")
        assert store.keys() == ["b"]

    def test_no_temp_files_left(self, tmp_path):
        """Test the atomic write cleans up after itself."""
        store = JsonFileKeyValueStore(tmp_path / "wallet.json")
        store.set("a", "1")
        assert [p.name for p in tmp_path.iterdir()] == ["wallet.json"]

    def test_invalid_json_raises(self, tmp_path):
        """Test that a corrupt file is reported as InvalidFormatError."""
        path = tmp_path / "wallet.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(InvalidFormatError):
            JsonFileKeyValueStore(path).get("transactions")

    def test_non_string_values_rejected(self, tmp_path):
        """Test that a file with non-string values is rejected."""
        path = tmp_path / "wallet.json"
        path.write_text('{"transactions": []}', encoding="utf-8")
        with pytest.raises(InvalidFormatError):
            JsonFileKeyValueStore(path).get("transactions")

    def test_write_retried_then_raises(self, tmp_path, monkeypatch):
        """Test that failing writes are retried and then surface as StorageError."""
        store = JsonFileKeyValueStore(tmp_path / "wallet.json", write_attempts=3)
        calls = []

        def failing_write(data):
            calls.append(data)
            raise OSError("disk full")

        monkeypatch.setattr(store, "_write_file", failing_write)
        monkeypatch.setattr("time.sleep", lambda seconds: None)

        with pytest.raises(StorageError, match="disk full"):
            store.set("transactions", "[]")
        assert len(calls) == 3

    def test_write_recovers_after_transient_error(self, tmp_path, monkeypatch):
        """Test that a write succeeding on retry is not an error."""
        store = JsonFileKeyValueStore(tmp_path / "wallet.json", write_attempts=3)
        real_write = store._write_file
        attempts = []

        def flaky_write(data):
            attempts.append(1)
            if len(attempts) == 1:
                raise OSError("busy")
            real_write(data)

        monkeypatch.setattr(store, "_write_file", flaky_write)
        monkeypatch.setattr("time.sleep", lambda seconds: None)

        store.set("transactions", "[]")
        assert store.get("transactions") == "[]"
        assert len(attempts) == 2


class TestCreateKeyValueStore:
    """Tests for backend selection."""

    def test_memory_backend(self):
        """Test the memory backend is selected from settings."""
        settings = StorageSettings(backend="memory")
        assert isinstance(create_key_value_store(settings), MemoryKeyValueStore)

    def test_file_backend(self, tmp_path):
        """Test the file backend gets the configured path."""
        settings = StorageSettings(backend="file", data_path=tmp_path / "w.json", write_attempts=2)
        store = create_key_value_store(settings)
        assert isinstance(store, JsonFileKeyValueStore)
        assert store.path == tmp_path / "w.json"
