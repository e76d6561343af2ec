"""
Calendar helpers shared by the reports.

All boundaries are half-open: a period starts at its first instant and
ends at the first instant of the next period.
"""

import calendar
from datetime import datetime, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta

from mywallet.models.common import to_naive_local


def resolve_now(now: Optional[datetime] = None) -> datetime:
    """The reference instant as naive local time, like stored timestamps."""
    return to_naive_local(now) if now is not None else datetime.now()


def start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_month(moment: datetime) -> datetime:
    return start_of_day(moment).replace(day=1)


def month_bounds(moment: datetime, offset: int = 0) -> tuple[datetime, datetime]:
    """[start, end) of the calendar month `offset` months away from `moment`."""
    start = start_of_month(moment) + relativedelta(months=offset)
    return start, start + relativedelta(months=1)


def days_in_month(moment: datetime) -> int:
    return calendar.monthrange(moment.year, moment.month)[1]


def days_remaining_in_month(moment: datetime) -> int:
    """Whole days left after today; 0 on the last day of the month."""
    return days_in_month(moment) - moment.day


def trailing_days(now: datetime, count: int, width: int = 1) -> list[tuple[datetime, datetime]]:
    """
    `count` consecutive windows of `width` days, oldest first, the last one
    ending at the end of today.
    """
    end = start_of_day(now) + timedelta(days=1)
    step = timedelta(days=width)
    return [
        (end - step * (count - i), end - step * (count - i - 1))
        for i in range(count)
    ]


def trailing_months(now: datetime, count: int) -> list[tuple[datetime, datetime]]:
    """`count` calendar months, oldest first, the last one being the current month."""
    return [month_bounds(now, offset=-(count - 1 - i)) for i in range(count)]
