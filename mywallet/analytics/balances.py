"""
Balance Calculations

Signed totals over transactions. Income counts positive and expense
negative; amounts themselves are always magnitudes.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from mywallet.analytics.periods import month_bounds, resolve_now
from mywallet.models.reference import CategoryId, TransactionType
from mywallet.models.reports import MonthlyStats
from mywallet.models.transaction import Transaction


ZERO = Decimal("0")


def total_balance(transactions: Iterable[Transaction]) -> Decimal:
    """Income minus expenses over every transaction given."""
    return sum((t.signed_amount for t in transactions), ZERO)


def balance_between(
    transactions: Iterable[Transaction],
    start: datetime,
    end: datetime,
) -> Decimal:
    """Signed total of the transactions in [start, end)."""
    return total_balance(t for t in transactions if start <= t.timestamp < end)


def monthly_change(
    transactions: list[Transaction],
    now: Optional[datetime] = None,
) -> float:
    """
    Percentage change of this month's balance against last month's.

    Returns 0 when last month's balance is 0 so that a first month of data
    never shows an infinite change.
    """
    now = resolve_now(now)
    current = balance_between(transactions, *month_bounds(now))
    previous = balance_between(transactions, *month_bounds(now, offset=-1))

    if previous == 0:
        return 0.0

    change = (current - previous) / abs(previous) * 100
    return float(change.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def monthly_stats(
    transactions: list[Transaction],
    now: Optional[datetime] = None,
) -> MonthlyStats:
    """Income, expenses and savings of the calendar month containing `now`."""
    now = resolve_now(now)
    start, end = month_bounds(now)

    income = ZERO
    expenses = ZERO
    savings = ZERO
    for t in transactions:
        if not start <= t.timestamp < end:
            continue
        if t.type == TransactionType.INCOME:
            income += t.amount
        else:
            expenses += t.amount
            if t.category == CategoryId.SAVINGS:
                savings += t.amount

    return MonthlyStats(
        month_start=start,
        income=income,
        expenses=expenses,
        remaining=income - expenses,
        savings=savings,
    )
