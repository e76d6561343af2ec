"""
Audit Logger

DESIGN DECISION: Every change to wallet data is logged.
This provides:
1. Traceability of imports, resets and edits
2. Debugging capability when storage misbehaves
3. A history the user can look at in the app

The audit logger:
- Always logs locally through structlog
- Optionally keeps the most recent events in the key-value store
- Gracefully handles failures (a failed audit write never breaks the
  operation that triggered it)
"""

import json
from typing import Optional

import structlog
from pydantic import ValidationError

from mywallet.models.audit import AuditEvent
from mywallet.services.storage import AUDIT_LOG_KEY, KeyValueStore, StorageError


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. The key-value store under "auditLog" (for user visibility)
    """

    def __init__(
        self,
        storage: Optional[KeyValueStore] = None,
        limit: int = 500,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
            limit: Number of events kept in storage; older ones are dropped.
        """
        self._storage = storage
        self._limit = limit
        self._logger = structlog.get_logger("mywallet.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value == "error":
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage is None or self._limit == 0:
            return True

        try:
            events = self._read_raw()
            events.append(event.model_dump(mode="json"))
            self._storage.set(AUDIT_LOG_KEY, json.dumps(events[-self._limit:]))
            return True
        except StorageError as e:
            # Log failure but don't raise
            self._logger.error(
                "audit_storage_failed",
                error=str(e),
                event_id=str(event.event_id),
            )
            return False

    def recent_events(self, limit: int = 50) -> list[AuditEvent]:
        """Stored events, newest first."""
        if self._storage is None:
            return []
        try:
            raw = self._read_raw()
        except StorageError as e:
            self._logger.error("audit_read_failed", error=str(e))
            return []

        events = []
        for item in reversed(raw):
            try:
                events.append(AuditEvent.model_validate(item))
            except ValidationError:
                continue  # Skip malformed entries
            if len(events) >= limit:
                break
        return events

    def _read_raw(self) -> list[dict]:
        """Stored audit entries as plain dicts; unreadable content counts as empty."""
        raw = self._storage.get(AUDIT_LOG_KEY)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            self._logger.warning("audit_log_unreadable", key=AUDIT_LOG_KEY)
            return []
        return data if isinstance(data, list) else []
