"""Expense breakdowns by category."""

from collections import defaultdict
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from mywallet.analytics.periods import resolve_now, trailing_months
from mywallet.models.reference import CategoryId, get_category
from mywallet.models.reports import CategorySpending, CategoryTrendPoint
from mywallet.models.transaction import Transaction


def _share(part: Decimal, total: Decimal) -> float:
    if total == 0:
        return 0.0
    return float((part / total * 100).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def category_spending(
    transactions: list[Transaction],
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> list[CategorySpending]:
    """
    Expense totals per category, largest first.

    Args:
        transactions: Transactions to aggregate; income is ignored
        start: Optional inclusive lower bound on timestamp
        end: Optional exclusive upper bound on timestamp

    Ties on amount are ordered by category id so the result is stable.
    """
    amounts: dict[CategoryId, Decimal] = defaultdict(Decimal)
    counts: dict[CategoryId, int] = defaultdict(int)

    for t in transactions:
        if not t.is_expense:
            continue
        if start is not None and t.timestamp < start:
            continue
        if end is not None and t.timestamp >= end:
            continue
        amounts[t.category] += t.amount
        counts[t.category] += 1

    total = sum(amounts.values(), Decimal("0"))

    result = []
    for category_id, amount in amounts.items():
        category = get_category(category_id)
        result.append(CategorySpending(
            category_id=category_id,
            name=category.name,
            icon=category.icon,
            amount=amount,
            count=counts[category_id],
            percentage=_share(amount, total),
        ))

    result.sort(key=lambda c: (-c.amount, c.category_id.value))
    return result


def category_trend(
    transactions: list[Transaction],
    now: Optional[datetime] = None,
    months: int = 6,
) -> list[CategoryTrendPoint]:
    """Expense totals per category for each of the last `months` calendar months."""
    now = resolve_now(now)
    points = []
    for start, end in trailing_months(now, months):
        totals: dict[CategoryId, Decimal] = defaultdict(Decimal)
        for t in transactions:
            if t.is_expense and start <= t.timestamp < end:
                totals[t.category] += t.amount
        points.append(CategoryTrendPoint(
            label=start.strftime("%b"),
            start=start,
            totals=dict(totals),
        ))
    return points
