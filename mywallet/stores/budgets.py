"""
Budget Store

Owns the user's budgets. At most one budget may cap a given category at
any moment: adding or moving a budget so that its period intersects
another budget of the same category is rejected.
"""

from datetime import datetime
from typing import Any, Optional, Union

from mywallet.analytics.periods import resolve_now
from mywallet.models.audit import AuditEventBuilder
from mywallet.models.budget import Budget, BudgetUpdate
from mywallet.services.storage import BUDGETS_KEY
from mywallet.stores.base import RecordStore


class BudgetConflictError(ValueError):
    """A budget overlaps an existing budget of the same category."""

    def __init__(self, budget: Budget, conflicting: Budget):
        self.budget = budget
        self.conflicting = conflicting
        super().__init__(
            f"Budget for '{budget.category.value}' overlaps budget "
            f"'{conflicting.id}' ({conflicting.start_date:%Y-%m-%d} to "
            f"{conflicting.end_date:%Y-%m-%d})"
        )


class BudgetStore(RecordStore[Budget]):
    """Persistent list of budgets."""

    model = Budget
    update_model = BudgetUpdate
    key = BUDGETS_KEY
    entity = "budget"

    def _check_overlap(self, budget: Budget) -> None:
        for existing in self._records:
            if existing.id != budget.id and existing.overlaps(budget):
                self._audit.log(AuditEventBuilder.budget_rejected(
                    budget.id,
                    budget.category.value,
                    existing.id,
                ))
                raise BudgetConflictError(budget, existing)

    def add(self, budget: Union[Budget, dict[str, Any]]) -> Budget:
        """
        Create a budget.

        Raises:
            pydantic.ValidationError: If the input is malformed
            BudgetConflictError: If it overlaps a budget of the same category
            DuplicateError: If the id is already taken
        """
        budget = self._coerce(budget)
        self._ensure_new(budget)
        self._check_overlap(budget)

        self._records.append(budget)
        self._persist()

        self._audit.log(AuditEventBuilder.budget_added(
            budget.id,
            budget.category.value,
            str(budget.amount),
        ))
        return budget

    def update(
        self,
        budget_id: str,
        changes: Union[BudgetUpdate, dict[str, Any]],
    ) -> Budget:
        """
        Merge changes onto a stored budget.

        Raises:
            NotFoundError: If no budget has that id
            pydantic.ValidationError: If the merged budget is invalid
            BudgetConflictError: If the new period overlaps another budget
        """
        index = self._index_of(budget_id)
        updated, changed = self._merge(self._records[index], changes)
        self._check_overlap(updated)

        self._records[index] = updated
        self._persist()

        self._audit.log(AuditEventBuilder.budget_updated(budget_id, changed))
        return updated

    def remove(self, budget_id: str) -> Budget:
        """
        Delete a budget.

        Raises:
            NotFoundError: If no budget has that id
        """
        removed = self._records.pop(self._index_of(budget_id))
        self._persist()

        self._audit.log(AuditEventBuilder.budget_deleted(budget_id))
        return removed

    def replace_all(self, records: list[Union[Budget, dict[str, Any]]]) -> None:
        """Swap the whole collection; overlapping budgets are rejected first."""
        validated = [self._coerce(record) for record in records]
        for i, budget in enumerate(validated):
            for other in validated[i + 1:]:
                if budget.overlaps(other):
                    raise BudgetConflictError(other, budget)
        super().replace_all(validated)

    # Defined last: the name shadows the builtin for later annotations in this class.
    def list(self, as_of: Optional[datetime] = None) -> list[Budget]:
        """Budgets active at `as_of` (now by default)."""
        moment = resolve_now(as_of)
        return [b for b in self._records if b.is_active(moment)]
