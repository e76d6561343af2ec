"""
Abstract Storage Interface

DESIGN DECISION: All persistence goes through one key-value interface.
This allows us to:
1. Use in-memory storage for tests
2. Use a JSON file for the real app
3. Plug in any other string store (browser-style storage, a sync cache)
   without touching the stores or the reports

Values are opaque strings. Serialization belongs to the callers, which
know the shape of what they save.
"""

from abc import ABC, abstractmethod
from typing import Optional


# Fixed keys used by the wallet
TRANSACTIONS_KEY = "transactions"
BUDGETS_KEY = "budgets"
SETTINGS_KEY = "settings"
AUDIT_LOG_KEY = "auditLog"


class KeyValueStore(ABC):
    """
    Abstract interface for string key-value persistence.

    Any backend (memory, JSON file, ...) must implement these methods.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read a value.

        Args:
            key: The key to read

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Write a value, replacing any previous one.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """
        Delete a key. Removing an absent key is not an error.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List the keys currently stored."""
        pass

    def is_available(self) -> bool:
        """Check the backend accepts a write and a delete."""
        marker = "__storage_check__"
        try:
            self.set(marker, marker)
            self.remove(marker)
            return True
        except StorageError:
            return False


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass


class InvalidFormatError(StorageError):
    """Data could not be parsed or does not match the expected schema."""
    pass
