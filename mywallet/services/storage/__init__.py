"""
Storage Services Package

Provides the key-value persistence interface and its backends.
The backend is chosen once, at startup, from StorageSettings.
"""

from mywallet.config import StorageSettings
from mywallet.services.storage.interface import (
    AUDIT_LOG_KEY,
    BUDGETS_KEY,
    SETTINGS_KEY,
    TRANSACTIONS_KEY,
    DuplicateError,
    InvalidFormatError,
    KeyValueStore,
    NotFoundError,
    StorageError,
)
from mywallet.services.storage.json_file import JsonFileKeyValueStore
from mywallet.services.storage.memory import MemoryKeyValueStore


def create_key_value_store(settings: StorageSettings) -> KeyValueStore:
    """Build the backend named in the settings."""
    if settings.backend == "memory":
        return MemoryKeyValueStore()
    return JsonFileKeyValueStore(
        settings.data_path,
        write_attempts=settings.write_attempts,
    )


__all__ = [
    # Interface
    "KeyValueStore",
    "create_key_value_store",
    # Keys
    "AUDIT_LOG_KEY",
    "BUDGETS_KEY",
    "SETTINGS_KEY",
    "TRANSACTIONS_KEY",
    # Exceptions
    "DuplicateError",
    "InvalidFormatError",
    "NotFoundError",
    "StorageError",
    # Backends
    "JsonFileKeyValueStore",
    "MemoryKeyValueStore",
]
