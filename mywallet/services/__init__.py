"""Services package."""

from mywallet.services.storage import (
    DuplicateError,
    InvalidFormatError,
    JsonFileKeyValueStore,
    KeyValueStore,
    MemoryKeyValueStore,
    NotFoundError,
    StorageError,
    create_key_value_store,
)

__all__ = [
    # Storage services
    "DuplicateError",
    "InvalidFormatError",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "NotFoundError",
    "StorageError",
    "create_key_value_store",
]
