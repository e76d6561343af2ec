"""
Transaction Store

Owns the user's transactions for one session. New transactions are
prepended, reads come back newest first.
"""

from collections import OrderedDict
from datetime import datetime
from typing import Any, Union

from mywallet.analytics.periods import month_bounds
from mywallet.models.audit import AuditEventBuilder
from mywallet.models.reference import CategoryId
from mywallet.models.transaction import Transaction, TransactionUpdate
from mywallet.services.storage import TRANSACTIONS_KEY
from mywallet.stores.base import RecordStore


class TransactionStore(RecordStore[Transaction]):
    """Persistent list of transactions."""

    model = Transaction
    update_model = TransactionUpdate
    key = TRANSACTIONS_KEY
    entity = "transaction"

    def add(self, transaction: Union[Transaction, dict[str, Any]]) -> Transaction:
        """
        Record a new transaction.

        Raises:
            pydantic.ValidationError: If the input is malformed
            DuplicateError: If the id is already taken
        """
        transaction = self._coerce(transaction)
        self._ensure_new(transaction)

        self._records.insert(0, transaction)
        self._persist()

        self._audit.log(AuditEventBuilder.transaction_added(
            transaction.id,
            transaction.type.value,
            str(transaction.amount),
            transaction.category.value,
        ))
        return transaction

    def update(
        self,
        transaction_id: str,
        changes: Union[TransactionUpdate, dict[str, Any]],
    ) -> Transaction:
        """
        Merge changes onto a stored transaction.

        Raises:
            NotFoundError: If no transaction has that id
            pydantic.ValidationError: If the merged transaction is invalid
        """
        index = self._index_of(transaction_id)
        updated, changed = self._merge(self._records[index], changes)

        self._records[index] = updated
        self._persist()

        self._audit.log(AuditEventBuilder.transaction_updated(transaction_id, changed))
        return updated

    def remove(self, transaction_id: str) -> Transaction:
        """
        Delete a transaction.

        Raises:
            NotFoundError: If no transaction has that id
        """
        removed = self._records.pop(self._index_of(transaction_id))
        self._persist()

        self._audit.log(AuditEventBuilder.transaction_deleted(transaction_id))
        return removed

    def recent(self, limit: int = 5) -> list[Transaction]:
        return self.list()[:max(limit, 0)]

    def grouped_by_date(self) -> "OrderedDict[str, list[Transaction]]":
        """Transactions keyed by YYYY-MM-DD, newest day first."""
        groups: OrderedDict[str, list[Transaction]] = OrderedDict()
        for transaction in self.list():
            day = transaction.timestamp.date().isoformat()
            groups.setdefault(day, []).append(transaction)
        return groups

    def for_category_in_month(
        self,
        category: CategoryId,
        month: datetime,
    ) -> list[Transaction]:
        """Transactions of one category in the calendar month containing `month`."""
        start, end = month_bounds(month)
        return [
            t for t in self.list()
            if t.category == category and start <= t.timestamp < end
        ]

    # Defined last: the name shadows the builtin for later annotations in this class.
    def list(self) -> list[Transaction]:
        """All transactions, newest first."""
        return sorted(self._records, key=lambda t: t.timestamp, reverse=True)
