"""
Tests for the wallet models

Covers the input normalization done at the model boundary: amount signs,
timestamp coercion, camelCase aliases and budget date handling.
"""

import pytest
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from pydantic import ValidationError

from mywallet.models import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
    Budget,
    CategoryId,
    PaymentMethodId,
    Snapshot,
    Transaction,
    TransactionType,
    UserSettings,
    categories_for,
    get_category,
    get_payment_method,
)


class TestTransactionModel:
    """Tests for the Transaction model."""

    def test_expense_negative_amount_normalized(self):
        """Test that a signed expense amount is stored as its magnitude."""
        t = Transaction(
            amount=Decimal("-50"),
            type=TransactionType.EXPENSE,
            category=CategoryId.FOOD,
            timestamp=datetime(2024, 1, 5),
        )
        assert t.amount == Decimal("50")
        assert t.signed_amount == Decimal("-50")

    def test_income_negative_amount_rejected(self):
        """Test that a negative income is rejected as inconsistent."""
        with pytest.raises(ValidationError):
            Transaction(
                amount=Decimal("-10"),
                type=TransactionType.INCOME,
                category=CategoryId.SALARY,
                timestamp=datetime(2024, 1, 5),
            )

    def test_zero_amount_rejected(self):
        """Test that a zero amount is rejected."""
        with pytest.raises(ValidationError):
            Transaction(
                amount=Decimal("0"),
                type=TransactionType.EXPENSE,
                category=CategoryId.FOOD,
                timestamp=datetime(2024, 1, 5),
            )

    def test_id_generated(self):
        """Test that an id is generated when not given."""
        a = Transaction(amount=1, type="expense", category="food", timestamp=datetime(2024, 1, 5))
        b = Transaction(amount=1, type="expense", category="food", timestamp=datetime(2024, 1, 5))
        assert a.id and b.id
        assert a.id != b.id

    def test_unknown_category_rejected(self):
        """Test that a category outside the reference table fails validation."""
        with pytest.raises(ValidationError):
            Transaction(amount=1, type="expense", category="groceries", timestamp=datetime(2024, 1, 5))

    def test_date_only_string_means_midnight(self):
        """Test that a bare date becomes midnight local time."""
        t = Transaction(amount=1, type="expense", category="food", timestamp="2024-01-05")
        assert t.timestamp == datetime(2024, 1, 5, 0, 0)

    def test_date_key_accepted(self):
        """Test that the legacy 'date' key is read as the timestamp."""
        t = Transaction.model_validate(
            {"amount": 1, "type": "expense", "category": "food", "date": "2024-01-05T10:30:00"}
        )
        assert t.timestamp == datetime(2024, 1, 5, 10, 30)

    def test_aware_timestamp_stored_naive(self):
        """Test that timezone-aware timestamps are converted and stored naive."""
        aware = datetime(2024, 1, 5, 12, 0, tzinfo=timezone.utc)
        t = Transaction(amount=1, type="expense", category="food", timestamp=aware)
        assert t.timestamp.tzinfo is None
        assert t.timestamp == aware.astimezone().replace(tzinfo=None)

    def test_camel_case_payment_method(self):
        """Test that camelCase input is accepted and produced."""
        t = Transaction.model_validate({
            "amount": "12.50",
            "type": "expense",
            "category": "food",
            "timestamp": "2024-01-05T09:00:00",
            "paymentMethod": "credit_card",
        })
        assert t.payment_method == PaymentMethodId.CREDIT_CARD
        dumped = t.model_dump(mode="json", by_alias=True)
        assert dumped["paymentMethod"] == "credit_card"
        assert "payment_method" not in dumped

    def test_description_length_limit(self):
        """Test that overly long descriptions are rejected."""
        with pytest.raises(ValidationError):
            Transaction(
                amount=1,
                type="expense",
                category="food",
                timestamp=datetime(2024, 1, 5),
                description="x" * 501,
            )


class TestBudgetModel:
    """Tests for the Budget model."""

    def test_date_only_end_covers_whole_day(self):
        """Test that a date-only end date runs through the end of that day."""
        budget = Budget(category="food", amount=100, start_date="2024-01-01", end_date="2024-01-31")
        assert budget.start_date == datetime(2024, 1, 1)
        assert budget.is_active(datetime(2024, 1, 31, 18, 0))
        assert not budget.is_active(datetime(2024, 2, 1, 0, 0))

    def test_date_objects_accepted(self):
        """Test that date objects are widened like date strings."""
        budget = Budget(category="food", amount=100, start_date=date(2024, 1, 1), end_date=date(2024, 1, 1))
        assert budget.end_date - budget.start_date < timedelta(days=1)
        assert budget.is_active(datetime(2024, 1, 1, 23, 59))

    def test_end_before_start_rejected(self):
        """Test the start <= end invariant."""
        with pytest.raises(ValidationError, match="end date cannot be before start date"):
            Budget(category="food", amount=100, start_date="2024-02-01", end_date="2024-01-01")

    def test_negative_amount_rejected(self):
        """Test that budget amounts cannot be negative."""
        with pytest.raises(ValidationError):
            Budget(category="food", amount=-1, start_date="2024-01-01", end_date="2024-01-31")

    def test_income_category_rejected(self):
        """Test that budgets can only cap expense categories."""
        with pytest.raises(ValidationError, match="expense categories"):
            Budget(category="salary", amount=100, start_date="2024-01-01", end_date="2024-01-31")

    def test_category_id_alias(self):
        """Test that stored budgets using categoryId load."""
        budget = Budget.model_validate({
            "categoryId": "food",
            "amount": "100",
            "startDate": "2024-01-01T00:00:00",
            "endDate": "2024-01-31T23:59:59",
        })
        assert budget.category == CategoryId.FOOD

    def test_overlap_same_category(self):
        """Test overlap detection between budgets of one category."""
        january = Budget(category="food", amount=100, start_date="2024-01-01", end_date="2024-01-31")
        mid = Budget(category="food", amount=50, start_date="2024-01-15", end_date="2024-02-15")
        february = Budget(category="food", amount=50, start_date="2024-02-01", end_date="2024-02-29")
        transport = Budget(category="transportation", amount=50, start_date="2024-01-01", end_date="2024-01-31")

        assert january.overlaps(mid)
        assert not january.overlaps(february)
        assert not january.overlaps(transport)


class TestReferenceData:
    """Tests for the category and payment method tables."""

    def test_lookup_known_category(self):
        """Test lookup by id returns the table entry."""
        category = get_category(CategoryId.FOOD)
        assert category.name == "Food & Groceries"
        assert category.type == TransactionType.EXPENSE

    def test_unknown_ids_fall_back_to_other(self):
        """Test that unknown ids resolve to the explicit OTHER entry."""
        assert get_category("nonexistent").id == CategoryId.OTHER
        assert get_category(None).id == CategoryId.OTHER
        assert get_payment_method("barter").id == PaymentMethodId.OTHER

    def test_categories_for_type(self):
        """Test filtering categories by transaction type."""
        income = categories_for(TransactionType.INCOME)
        assert income
        assert all(c.type == TransactionType.INCOME for c in income)
        assert len(categories_for()) == len(income) + len(categories_for(TransactionType.EXPENSE))


class TestSettingsAndSnapshotModels:
    """Tests for UserSettings and Snapshot."""

    def test_user_settings_defaults(self):
        """Test the default preferences."""
        settings = UserSettings()
        assert settings.language == "en"
        assert settings.currency == "$"
        assert settings.dark_mode is False

    def test_user_settings_camel_case(self):
        """Test that persisted camelCase settings load."""
        settings = UserSettings.model_validate({"darkMode": True, "reminderEnabled": True})
        assert settings.dark_mode is True
        assert settings.reminder_enabled is True

    def test_snapshot_serializes_exported_at(self):
        """Test the snapshot document carries version and exportedAt."""
        dumped = Snapshot().model_dump(mode="json", by_alias=True)
        assert dumped["version"] == 1
        assert "exportedAt" in dumped
        assert dumped["transactions"] == []


class TestAuditModels:
    """Tests for audit event models."""

    def test_audit_event_creation(self):
        """Test AuditEvent creation."""
        event = AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            description="Test event",
        )
        assert event.event_id is not None
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.BUDGET_DELETED,
            entity_type="budget",
            entity_id="b1",
            description="Budget deleted",
        )
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "budget_deleted"
        assert log_dict["entity_id"] == "b1"

    def test_builder_save_failed(self):
        """Test the save_failed builder produces an error event."""
        event = AuditEventBuilder.save_failed("transactions", "disk full")
        assert event.event_type == AuditEventType.SAVE_FAILED
        assert event.severity == AuditSeverity.ERROR
        assert event.entity_id == "transactions"
        assert event.error_message == "disk full"

    def test_builder_budget_rejected(self):
        """Test the budget_rejected builder records the conflicting budget."""
        event = AuditEventBuilder.budget_rejected("new", "food", "old")
        assert event.severity == AuditSeverity.WARNING
        assert event.details["conflicting_budget_id"] == "old"
