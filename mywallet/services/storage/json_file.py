"""
JSON File Storage Implementation

DESIGN DECISION: A single JSON file holds every key as one object
({key: serialized_string}). This is the durable backend for the app:
1. Nothing to install or run
2. The user can back the file up or open it in an editor
3. Personal volumes (thousands of rows) rewrite in milliseconds

TRADEOFFS:
- Every write rewrites the whole file (fine at this scale)
- Concurrent writers are not coordinated; the last write wins

Writes go to a temporary file that is renamed over the original, so a
crash mid-write leaves the previous version intact.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import structlog
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from mywallet.services.storage.interface import (
    InvalidFormatError,
    KeyValueStore,
    StorageError,
)


logger = structlog.get_logger(__name__)


class JsonFileKeyValueStore(KeyValueStore):
    """
    File-backed implementation of the key-value interface.

    The file is read on every access so that changes made by another
    process are picked up by the next read.
    """

    def __init__(
        self,
        path: Union[str, Path],
        write_attempts: int = 3,
    ):
        self._path = Path(path)
        self._write_attempts = write_attempts

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        """Load the whole file. A missing file is an empty store."""
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise StorageError(f"Failed to read {self._path}: {e}")

        if not raw.strip():
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise InvalidFormatError(f"Storage file {self._path} is not valid JSON: {e}")

        if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
            raise InvalidFormatError(f"Storage file {self._path} is not a key-value object")
        return data

    def _write_file(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.",
            suffix=".tmp",
            dir=self._path.parent,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, ensure_ascii=False, indent=2)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self._path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def _write_all(self, data: dict[str, str]) -> None:
        """Write the whole file, retrying transient OS errors."""
        try:
            for attempt in Retrying(
                stop=stop_after_attempt(self._write_attempts),
                wait=wait_exponential(multiplier=0.1, min=0.1, max=2),
                retry=retry_if_exception_type(OSError),
                reraise=True,
            ):
                with attempt:
                    self._write_file(data)
        except OSError as e:
            logger.error("storage_write_failed", path=str(self._path), error=str(e))
            raise StorageError(f"Failed to write {self._path}: {e}")

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)

    def keys(self) -> list[str]:
        return list(self._read_all())
