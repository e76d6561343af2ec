"""
Budget Progress

How much of each budget has been spent, and what is left to spend for
the rest of the month across every active budget.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from mywallet.analytics.periods import days_remaining_in_month, resolve_now
from mywallet.models.budget import Budget
from mywallet.models.reports import BudgetOverview, BudgetStatus
from mywallet.models.transaction import Transaction


ZERO = Decimal("0")


def _rounded_percentage(part: Decimal, whole: Decimal) -> int:
    if whole == 0:
        return 0
    return int((part / whole * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def budget_spent(budget: Budget, transactions: list[Transaction]) -> Decimal:
    """Expenses in the budget's category within its period, ends included."""
    return sum(
        (
            t.amount for t in transactions
            if t.is_expense
            and t.category == budget.category
            and budget.start_date <= t.timestamp <= budget.end_date
        ),
        ZERO,
    )


def budget_status(budget: Budget, transactions: list[Transaction]) -> BudgetStatus:
    """
    Spending progress for one budget.

    The percentage is capped at 100 and is 0 for a zero-amount budget.
    """
    spent = budget_spent(budget, transactions)
    return BudgetStatus(
        budget_id=budget.id,
        category=budget.category,
        spent=spent,
        remaining=max(ZERO, budget.amount - spent),
        percentage=min(100, _rounded_percentage(spent, budget.amount)),
    )


def budget_overview(
    budgets: list[Budget],
    transactions: list[Transaction],
    now: Optional[datetime] = None,
) -> BudgetOverview:
    """Totals across the budgets active at `now`."""
    now = resolve_now(now)
    active = [b for b in budgets if b.is_active(now)]

    total = sum((b.amount for b in active), ZERO)
    remaining = sum(
        (budget_status(b, transactions).remaining for b in active),
        ZERO,
    )
    days_remaining = days_remaining_in_month(now)

    return BudgetOverview(
        total_budget=total,
        remaining_budget=remaining,
        budget_percentage=_rounded_percentage(remaining, total),
        days_remaining=days_remaining,
        daily_allowance=remaining / max(days_remaining, 1),
        active_budgets=len(active),
    )
