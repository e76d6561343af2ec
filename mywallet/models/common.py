"""
Shared model configuration and timestamp coercion.

Persisted JSON uses camelCase keys (startDate, darkMode, paymentMethod)
so that data exported by older versions of the app loads unchanged.
Python code uses snake_case; both spellings are accepted on input.
"""

from datetime import date, datetime, time
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WalletModel(BaseModel):
    """Base for every persisted wallet model."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


def date_only_to_datetime(value: Any, *, end_of_day: bool = False) -> Any:
    """
    Turn a bare date (object or YYYY-MM-DD string) into a datetime.

    The start of the day is used unless end_of_day is set, in which case
    the last representable instant of that day is used instead.
    """
    if isinstance(value, str) and len(value) == 10:
        try:
            value = date.fromisoformat(value)
        except ValueError:
            return value
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.max if end_of_day else time.min)
    return value


def to_naive_local(value: datetime) -> datetime:
    """Drop timezone info after converting aware datetimes to local time."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value
