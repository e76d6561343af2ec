"""
Stores Package

Session-owned collections of wallet data, each persisted under one key
of the key-value store.
"""

from mywallet.stores.base import RecordStore
from mywallet.stores.budgets import BudgetConflictError, BudgetStore
from mywallet.stores.preferences import PreferencesStore
from mywallet.stores.transactions import TransactionStore

__all__ = [
    "RecordStore",
    "BudgetConflictError",
    "BudgetStore",
    "PreferencesStore",
    "TransactionStore",
]
