"""
Snapshot Service

Export and import of the whole wallet as one JSON document.

DESIGN DECISION: Import is all or nothing. The document is parsed and
every record validated before any store is touched, so a bad file (or a
bad sync payload) can never leave the wallet half replaced.
"""

import json
from typing import Optional

import structlog
from pydantic import ValidationError

from mywallet.audit import AuditLogger
from mywallet.models.audit import AuditEventBuilder
from mywallet.models.snapshot import SNAPSHOT_VERSION, Snapshot
from mywallet.services.storage import InvalidFormatError
from mywallet.stores.budgets import BudgetConflictError, BudgetStore
from mywallet.stores.preferences import PreferencesStore
from mywallet.stores.transactions import TransactionStore


logger = structlog.get_logger(__name__)


class SnapshotService:
    """Moves the complete wallet state in and out of the stores."""

    def __init__(
        self,
        transactions: TransactionStore,
        budgets: BudgetStore,
        preferences: PreferencesStore,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._transactions = transactions
        self._budgets = budgets
        self._preferences = preferences
        self._audit = audit_logger or AuditLogger()

    def snapshot(self) -> Snapshot:
        """Current state as a model."""
        return Snapshot(
            transactions=self._transactions.all(),
            budgets=self._budgets.all(),
            settings=self._preferences.get(),
        )

    @staticmethod
    def render(snapshot: Snapshot) -> str:
        """A snapshot as a JSON document with camelCase keys. Nothing is audited."""
        return snapshot.model_dump_json(by_alias=True, indent=2)

    def record_export(self, snapshot: Snapshot) -> None:
        """Audit a snapshot that actually left the app."""
        self._audit.log(AuditEventBuilder.snapshot_exported(
            len(snapshot.transactions),
            len(snapshot.budgets),
        ))

    def export_snapshot(self) -> str:
        """Current state as a JSON document, recorded as exported."""
        snapshot = self.snapshot()
        self.record_export(snapshot)
        return self.render(snapshot)

    def parse_snapshot(self, document: str) -> Snapshot:
        """
        Parse and validate a document without applying it.

        Raises:
            InvalidFormatError: If the document is not valid JSON, does not
                match the snapshot schema, or contains overlapping budgets
        """
        try:
            data = json.loads(document)
        except (json.JSONDecodeError, TypeError) as e:
            raise InvalidFormatError(f"Snapshot is not valid JSON: {e}")

        if not isinstance(data, dict):
            raise InvalidFormatError("Snapshot must be a JSON object")

        try:
            snapshot = Snapshot.model_validate(data)
        except ValidationError as e:
            raise InvalidFormatError(f"Snapshot does not match the expected schema: {e}")

        if snapshot.version > SNAPSHOT_VERSION:
            raise InvalidFormatError(
                f"Snapshot version {snapshot.version} is newer than supported "
                f"version {SNAPSHOT_VERSION}"
            )

        budgets = snapshot.budgets
        for i, budget in enumerate(budgets):
            for other in budgets[i + 1:]:
                if budget.overlaps(other):
                    raise InvalidFormatError(str(BudgetConflictError(other, budget)))

        for name, records in (("transaction", snapshot.transactions), ("budget", budgets)):
            ids = [record.id for record in records]
            if len(ids) != len(set(ids)):
                raise InvalidFormatError(f"Snapshot contains duplicate {name} ids")

        return snapshot

    def import_snapshot(self, document: str) -> Snapshot:
        """
        Replace transactions, budgets and settings with the document's.

        Raises:
            InvalidFormatError: If the document is rejected; nothing changes
        """
        try:
            snapshot = self.parse_snapshot(document)
        except InvalidFormatError as e:
            self._audit.log(AuditEventBuilder.snapshot_rejected(str(e)))
            raise

        self._transactions.replace_all(snapshot.transactions)
        self._budgets.replace_all(snapshot.budgets)
        self._preferences.save(snapshot.settings)

        self._audit.log(AuditEventBuilder.snapshot_imported(
            len(snapshot.transactions),
            len(snapshot.budgets),
        ))
        logger.info(
            "snapshot_imported",
            transactions=len(snapshot.transactions),
            budgets=len(snapshot.budgets),
        )
        return snapshot

    def clear_all(self) -> None:
        """Empty every collection and restore default settings."""
        self._transactions.clear()
        self._budgets.clear()
        self._preferences.reset()
        self._audit.log(AuditEventBuilder.data_cleared())
