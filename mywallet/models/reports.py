"""
Report Models

Outputs of the aggregation functions. These are never persisted; they are
what the dashboard renders.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from mywallet.models.reference import CategoryId
from mywallet.models.transaction import Transaction


class TimeFrame(str, Enum):
    """Bucket width for cash-flow series."""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class CategorySpending(BaseModel):
    """Expense total for one category."""

    category_id: CategoryId
    name: str
    icon: str
    amount: Decimal = Field(ge=0)
    count: int = Field(ge=0)
    percentage: float = Field(
        ge=0.0,
        le=100.0,
        description="Share of total expense magnitude, 0-100"
    )


class CashFlowBucket(BaseModel):
    """Income and expense totals for the half-open interval [start, end)."""

    label: str
    start: datetime
    end: datetime
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")

    @property
    def net(self) -> Decimal:
        return self.income - self.expense


class CashFlowSeries(BaseModel):
    """Dense, oldest-first series of buckets."""

    time_frame: TimeFrame
    buckets: list[CashFlowBucket] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.buckets)

    @property
    def labels(self) -> list[str]:
        return [bucket.label for bucket in self.buckets]

    @property
    def income(self) -> list[Decimal]:
        return [bucket.income for bucket in self.buckets]

    @property
    def expense(self) -> list[Decimal]:
        return [bucket.expense for bucket in self.buckets]


class CategoryTrendPoint(BaseModel):
    """Expense totals per category for one calendar month."""

    label: str
    start: datetime
    totals: dict[CategoryId, Decimal] = Field(default_factory=dict)


class BudgetStatus(BaseModel):
    """How much of one budget has been used."""

    budget_id: str
    category: CategoryId
    spent: Decimal = Field(ge=0)
    remaining: Decimal = Field(ge=0)
    percentage: int = Field(ge=0, le=100)

    @property
    def is_exhausted(self) -> bool:
        return self.percentage >= 100


class BudgetOverview(BaseModel):
    """Totals across all budgets active today."""

    total_budget: Decimal = Decimal("0")
    remaining_budget: Decimal = Decimal("0")
    budget_percentage: int = Field(
        default=0,
        description="Remaining share of the total budget, rounded"
    )
    days_remaining: int = Field(ge=0)
    daily_allowance: Decimal = Decimal("0")
    active_budgets: int = Field(default=0, ge=0)


class MonthlyStats(BaseModel):
    """Income, expenses and savings for one calendar month."""

    month_start: datetime
    income: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")
    remaining: Decimal = Decimal("0")
    savings: Decimal = Decimal("0")


class DashboardSummary(BaseModel):
    """Everything the dashboard page shows, computed in one pass."""

    generated_at: datetime
    currency: str
    total_balance: Decimal
    monthly_change: float
    monthly_stats: MonthlyStats
    category_spending: list[CategorySpending] = Field(default_factory=list)
    budget_overview: BudgetOverview
    budget_statuses: list[BudgetStatus] = Field(default_factory=list)
    recent_transactions: list[Transaction] = Field(default_factory=list)
    cash_flow: Optional[CashFlowSeries] = None
