"""Shared fixtures for the My Wallet tests."""

from datetime import datetime
from decimal import Decimal

import pytest

from mywallet.audit import AuditLogger
from mywallet.models import Budget, CategoryId, Transaction, TransactionType
from mywallet.services.storage import MemoryKeyValueStore
from mywallet.stores import BudgetStore, PreferencesStore, TransactionStore


# A fixed clock: Saturday 2024-01-20, midday
NOW = datetime(2024, 1, 20, 12, 0)


def make_transaction(
    amount="10",
    type_=TransactionType.EXPENSE,
    category=CategoryId.FOOD,
    timestamp=NOW,
    **kwargs,
) -> Transaction:
    return Transaction(
        amount=Decimal(amount),
        type=type_,
        category=category,
        timestamp=timestamp,
        **kwargs,
    )


def make_budget(
    amount="100",
    category=CategoryId.FOOD,
    start="2024-01-01",
    end="2024-01-31",
    **kwargs,
) -> Budget:
    return Budget(
        amount=Decimal(amount),
        category=category,
        start_date=start,
        end_date=end,
        **kwargs,
    )


@pytest.fixture
def storage():
    return MemoryKeyValueStore()


@pytest.fixture
def audit_logger(storage):
    return AuditLogger(storage, limit=100)


@pytest.fixture
def transaction_store(storage, audit_logger):
    return TransactionStore(storage, audit_logger)


@pytest.fixture
def budget_store(storage, audit_logger):
    return BudgetStore(storage, audit_logger)


@pytest.fixture
def preferences_store(storage, audit_logger):
    return PreferencesStore(storage, audit_logger)
