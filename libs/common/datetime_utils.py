"""Datetime utilities for timezone-aware timestamps and calendar dates.

Usage:
    from libs.common.datetime_utils import utc_now, to_calendar_date

    due = to_calendar_date("2024-06-01T18:30:00.000Z")  # date(2024, 6, 2) in IST
"""

from datetime import date, datetime, time, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo

from libs.common.config import get_settings

DateLike = Union[date, datetime, str]


def utc_now() -> datetime:
    """Return timezone-aware UTC datetime.

    Always use this instead of the naive datetime.utcnow().
    """
    return datetime.now(timezone.utc)


def local_tz() -> ZoneInfo:
    return ZoneInfo(get_settings().TIMEZONE)


def parse_datetime(value: DateLike) -> datetime:
    """Coerce an API date value to an aware datetime.

    ISO strings ending in ``Z`` are accepted. Naive values and bare dates are
    interpreted in the configured local timezone (midnight for dates).
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=local_tz())
        return value
    return datetime.combine(value, time.min, tzinfo=local_tz())


def to_calendar_date(value: Optional[DateLike]) -> Optional[date]:
    """Return the local calendar date for ``value`` (None passes through)."""
    if value is None or value == "":
        return None
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    return parse_datetime(value).astimezone(local_tz()).date()


def age_on(birth_date: date, on: date) -> int:
    """Completed years between ``birth_date`` and ``on``."""
    years = on.year - birth_date.year
    if (on.month, on.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years
