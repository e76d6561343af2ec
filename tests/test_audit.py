"""Tests for the audit logger."""

import json

from mywallet.audit import AuditLogger
from mywallet.models import AuditEventBuilder, AuditEventType
from mywallet.services.storage import AUDIT_LOG_KEY, MemoryKeyValueStore, StorageError


class BrokenStore(MemoryKeyValueStore):
    """Backend whose writes always fail."""

    def set(self, key, value):
        raise StorageError("read-only")


class TestAuditLogger:
    """Tests for AuditLogger."""

    def test_local_only(self):
        """Test that logging without storage succeeds and keeps nothing."""
        logger = AuditLogger()
        assert logger.log(AuditEventBuilder.data_cleared()) is True
        assert logger.recent_events() == []

    def test_events_persisted_newest_first(self):
        """Test persistence and read-back order."""
        storage = MemoryKeyValueStore()
        logger = AuditLogger(storage)
        logger.log(AuditEventBuilder.transaction_added("t1", "expense", "5", "food"))
        logger.log(AuditEventBuilder.transaction_deleted("t1"))

        events = logger.recent_events()
        assert [e.event_type for e in events] == [
            AuditEventType.TRANSACTION_DELETED,
            AuditEventType.TRANSACTION_ADDED,
        ]
        assert len(json.loads(storage.get(AUDIT_LOG_KEY))) == 2

    def test_limit_drops_oldest(self):
        """Test that only the most recent events are kept."""
        storage = MemoryKeyValueStore()
        logger = AuditLogger(storage, limit=3)
        for i in range(5):
            logger.log(AuditEventBuilder.transaction_deleted(f"t{i}"))

        assert [e.entity_id for e in logger.recent_events()] == ["t4", "t3", "t2"]

    def test_storage_failure_not_raised(self):
        """Test that a failed audit write is reported, not raised."""
        logger = AuditLogger(BrokenStore())
        assert logger.log(AuditEventBuilder.data_cleared()) is False

    def test_malformed_entries_skipped(self):
        """Test that unreadable stored entries are ignored."""
        good = AuditEventBuilder.data_cleared().model_dump(mode="json")
        storage = MemoryKeyValueStore({AUDIT_LOG_KEY: json.dumps([{"bogus": True}, good])})
        events = AuditLogger(storage).recent_events()
        assert [e.event_type for e in events] == [AuditEventType.DATA_CLEARED]

    def test_corrupt_log_treated_as_empty(self):
        """Test that a corrupt audit key is replaced on the next write."""
        storage = MemoryKeyValueStore({AUDIT_LOG_KEY: "{{{"})
        logger = AuditLogger(storage)
        assert logger.recent_events() == []
        assert logger.log(AuditEventBuilder.data_cleared())
        assert len(logger.recent_events()) == 1
