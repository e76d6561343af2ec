"""
Record Store Base

A record store keeps one collection (transactions or budgets) in memory
and mirrors it to a single key of the key-value store as a JSON array.

DESIGN DECISION: The in-memory list is the source of truth for the
session. Every mutation updates it first and then writes the whole
collection back. A failed write is logged and audited but does not undo
the change, so the user keeps working with what they see and the next
successful write catches storage up.

Loading is lenient: an unreadable key starts the collection empty and a
single bad record is skipped, so one corrupt row never hides the rest.
"""

import json
from typing import Any, Generic, Optional, TypeVar, Union

import structlog
from pydantic import BaseModel, ValidationError

from mywallet.audit import AuditLogger
from mywallet.models.audit import AuditEventBuilder
from mywallet.services.storage import (
    DuplicateError,
    KeyValueStore,
    NotFoundError,
    StorageError,
)


logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class RecordStore(Generic[ModelT]):
    """
    In-memory collection persisted under one key.

    Subclasses set `model`, `update_model`, `key` and `entity`.
    """

    model: type[ModelT]
    update_model: type[BaseModel]
    key: str
    entity: str

    def __init__(
        self,
        storage: KeyValueStore,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._audit = audit_logger or AuditLogger()
        self._records: list[ModelT] = self._load()

    def __len__(self) -> int:
        return len(self._records)

    # ------------------------------------------------------------------
    # Loading and saving
    # ------------------------------------------------------------------

    def _load(self) -> list[ModelT]:
        """Read the collection from storage, skipping anything unreadable."""
        try:
            raw = self._storage.get(self.key)
        except StorageError as e:
            self._audit.log(AuditEventBuilder.load_failed(self.key, str(e)))
            return []

        if not raw:
            return []

        try:
            items = json.loads(raw)
        except json.JSONDecodeError as e:
            self._audit.log(AuditEventBuilder.load_failed(self.key, str(e)))
            return []

        if not isinstance(items, list):
            self._audit.log(AuditEventBuilder.load_failed(
                self.key, f"expected a JSON array, got {type(items).__name__}"
            ))
            return []

        records = []
        for position, item in enumerate(items):
            try:
                records.append(self.model.model_validate(item))
            except ValidationError as e:
                logger.warning(
                    "record_skipped",
                    key=self.key,
                    position=position,
                    errors=e.error_count(),
                )
        return records

    def _persist(self) -> bool:
        """
        Write the whole collection back.

        Returns False if the write failed; the in-memory view is kept.
        """
        payload = json.dumps([
            record.model_dump(mode="json", by_alias=True)
            for record in self._records
        ])
        try:
            self._storage.set(self.key, payload)
            return True
        except StorageError as e:
            logger.error("store_save_failed", key=self.key, error=str(e))
            self._audit.log(AuditEventBuilder.save_failed(self.key, str(e)))
            return False

    def reload(self) -> None:
        """Re-read the collection from storage, dropping unsaved changes."""
        self._records = self._load()

    # ------------------------------------------------------------------
    # Helpers for subclasses
    # ------------------------------------------------------------------

    def _coerce(self, record: Union[ModelT, dict[str, Any]]) -> ModelT:
        if isinstance(record, self.model):
            return record
        return self.model.model_validate(record)

    def _index_of(self, record_id: str) -> int:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        raise NotFoundError(f"No {self.entity} with id '{record_id}'")

    def _ensure_new(self, record: ModelT) -> None:
        if any(existing.id == record.id for existing in self._records):
            raise DuplicateError(f"A {self.entity} with id '{record.id}' already exists")

    def _merge(
        self,
        current: ModelT,
        changes: Union[BaseModel, dict[str, Any]],
    ) -> tuple[ModelT, list[str]]:
        """
        Apply a partial update and validate the result as a whole record.

        Returns the merged record and the names of the fields that changed.
        """
        if not isinstance(changes, self.update_model):
            changes = self.update_model.model_validate(changes)

        updates = changes.model_dump(exclude_unset=True)
        merged = current.model_dump()
        merged.update(updates)
        merged["id"] = current.id
        updated = self.model.model_validate(merged)

        changed = [
            name for name in updates
            if getattr(updated, name) != getattr(current, name)
        ]
        return updated, changed

    # ------------------------------------------------------------------
    # Shared read and bulk operations
    # ------------------------------------------------------------------

    def get(self, record_id: str) -> ModelT:
        """
        Look a record up by id.

        Raises:
            NotFoundError: If no record has that id
        """
        return self._records[self._index_of(record_id)]

    def all(self) -> list[ModelT]:
        """Every record, in stored order."""
        return list(self._records)

    def replace_all(self, records: list[Union[ModelT, dict[str, Any]]]) -> None:
        """Swap the whole collection. Every record is validated before anything changes."""
        validated = [self._coerce(record) for record in records]
        ids = [record.id for record in validated]
        if len(ids) != len(set(ids)):
            raise DuplicateError(f"Duplicate {self.entity} ids in replacement set")
        self._records = validated
        self._persist()

    def clear(self) -> None:
        """Remove every record."""
        self._records = []
        self._persist()
