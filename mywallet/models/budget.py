"""
Budget Models

A budget caps spending in one expense category over a closed date range.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional
from uuid import uuid4

from pydantic import (
    AliasChoices,
    Field,
    field_validator,
    model_validator,
)

from mywallet.models.common import WalletModel, date_only_to_datetime, to_naive_local
from mywallet.models.reference import CategoryId, TransactionType, get_category


def _new_id() -> str:
    return str(uuid4())


def _require_expense_category(v: Optional[CategoryId]) -> Optional[CategoryId]:
    if v is not None and get_category(v).type != TransactionType.EXPENSE:
        raise ValueError(f"Budgets can only cap expense categories, not '{v.value}'")
    return v


class Budget(WalletModel):
    """
    Spending cap for one category.

    A date-only end date covers the whole of that day, so a budget for
    2024-01-01..2024-01-31 includes an expense at 18:00 on the 31st.
    """

    id: str = Field(
        default_factory=_new_id,
        min_length=1,
        description="Local identifier (UUID string)"
    )
    category: CategoryId = Field(
        ...,
        validation_alias=AliasChoices("category", "categoryId", "category_id"),
        description="Expense category being capped"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Spending cap for the period"
    )
    start_date: datetime = Field(
        ...,
        description="First instant covered by the budget"
    )
    end_date: datetime = Field(
        ...,
        description="Last instant covered by the budget"
    )

    @field_validator('category')
    @classmethod
    def validate_category(cls, v: CategoryId) -> CategoryId:
        return _require_expense_category(v)

    @field_validator('start_date', mode='before')
    @classmethod
    def start_of_day(cls, v: Any) -> Any:
        return date_only_to_datetime(v)

    @field_validator('end_date', mode='before')
    @classmethod
    def end_of_day(cls, v: Any) -> Any:
        return date_only_to_datetime(v, end_of_day=True)

    @field_validator('start_date', 'end_date')
    @classmethod
    def strip_timezone(cls, v: datetime) -> datetime:
        return to_naive_local(v)

    @model_validator(mode='after')
    def validate_dates(self) -> 'Budget':
        """Validate date relationships."""
        if self.end_date < self.start_date:
            raise ValueError("Budget end date cannot be before start date")
        return self

    def is_active(self, at: datetime) -> bool:
        """True if the budget period contains the given moment."""
        return self.start_date <= at <= self.end_date

    def overlaps(self, other: 'Budget') -> bool:
        """True if both budgets cap the same category over intersecting periods."""
        return (
            self.category == other.category
            and self.start_date <= other.end_date
            and other.start_date <= self.end_date
        )


class BudgetUpdate(WalletModel):
    """Partial update for a budget; the merge is re-validated as a Budget."""

    category: Optional[CategoryId] = Field(
        default=None,
        validation_alias=AliasChoices("category", "categoryId", "category_id"),
    )
    amount: Optional[Decimal] = Field(default=None, ge=0)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @field_validator('category')
    @classmethod
    def validate_category(cls, v: Optional[CategoryId]) -> Optional[CategoryId]:
        return _require_expense_category(v)

    @field_validator('start_date', mode='before')
    @classmethod
    def start_of_day(cls, v: Any) -> Any:
        return date_only_to_datetime(v)

    @field_validator('end_date', mode='before')
    @classmethod
    def end_of_day(cls, v: Any) -> Any:
        return date_only_to_datetime(v, end_of_day=True)
