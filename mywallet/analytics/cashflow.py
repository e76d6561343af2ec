"""
Cash-Flow Series

Income and expense totals bucketed by day, week or month for charting.

Every series is dense and oldest first: a bucket with no transactions is
still present with zero totals, so the number of buckets depends only on
the time frame and the window size, never on the data.

Buckets are half-open [start, end). Weekly buckets are consecutive
seven-day windows, the last of which ends with today.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from mywallet.analytics.periods import resolve_now, trailing_days, trailing_months
from mywallet.models.reference import TransactionType
from mywallet.models.reports import CashFlowBucket, CashFlowSeries, TimeFrame
from mywallet.models.transaction import Transaction


DEFAULT_WINDOWS = {
    TimeFrame.DAILY: 7,
    TimeFrame.WEEKLY: 4,
    TimeFrame.MONTHLY: 6,
}


def _bounds(
    time_frame: TimeFrame,
    now: datetime,
    periods: int,
) -> list[tuple[str, datetime, datetime]]:
    if time_frame == TimeFrame.DAILY:
        return [
            (start.strftime("%a"), start, end)
            for start, end in trailing_days(now, periods)
        ]
    if time_frame == TimeFrame.WEEKLY:
        return [
            (f"Week {i + 1}", start, end)
            for i, (start, end) in enumerate(trailing_days(now, periods, width=7))
        ]
    return [
        (start.strftime("%b"), start, end)
        for start, end in trailing_months(now, periods)
    ]


def _fill(
    buckets: list[CashFlowBucket],
    transactions: list[Transaction],
) -> None:
    if not buckets:
        return
    first, last = buckets[0].start, buckets[-1].end
    for t in transactions:
        if not first <= t.timestamp < last:
            continue
        for bucket in buckets:
            if bucket.start <= t.timestamp < bucket.end:
                if t.type == TransactionType.INCOME:
                    bucket.income += t.amount
                else:
                    bucket.expense += t.amount
                break


def cash_flow_series(
    transactions: list[Transaction],
    time_frame: TimeFrame = TimeFrame.MONTHLY,
    now: Optional[datetime] = None,
    periods: Optional[int] = None,
) -> CashFlowSeries:
    """
    Bucketed income and expense for a time frame.

    Args:
        transactions: Transactions to aggregate
        time_frame: daily, weekly or monthly buckets
        now: Reference moment; the last bucket contains it
        periods: Number of buckets (7, 4 or 6 by default)
    """
    time_frame = TimeFrame(time_frame)
    now = resolve_now(now)
    periods = DEFAULT_WINDOWS[time_frame] if periods is None else periods
    if periods < 1:
        raise ValueError(f"A cash-flow series needs at least one bucket, got {periods}")

    buckets = [
        CashFlowBucket(label=label, start=start, end=end)
        for label, start, end in _bounds(time_frame, now, periods)
    ]
    _fill(buckets, transactions)
    return CashFlowSeries(time_frame=time_frame, buckets=buckets)


def monthly_overview(
    transactions: list[Transaction],
    now: Optional[datetime] = None,
    periods: int = 6,
) -> CashFlowSeries:
    """
    Running totals of income and expense over the last `periods` months.

    Each bucket holds everything from the start of the first month up to
    the end of its own month.
    """
    series = cash_flow_series(transactions, TimeFrame.MONTHLY, now=now, periods=periods)
    income = Decimal("0")
    expense = Decimal("0")
    for bucket in series.buckets:
        income += bucket.income
        expense += bucket.expense
        bucket.income = income
        bucket.expense = expense
    return series
