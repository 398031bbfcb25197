"""
Date formatters used for DATE columns
"""

from datetime import datetime, timezone
from typing import Optional

# Locale long date + time, e.g. "January 15, 2024 10:00:00 AM CET"
LONG_DATETIME_FORMAT = "%B %d, %Y %I:%M:%S %p %Z"

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def as_aware(value: datetime) -> datetime:
    """Naive datetimes coming out of a store are UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def epoch_millis(value: datetime) -> int:
    """Milliseconds since the Unix epoch, floored like a Java Date"""
    delta = as_aware(value) - EPOCH
    return (delta.days * 86_400_000
            + delta.seconds * 1000
            + delta.microseconds // 1000)


class StrftimeDateFormatter:
    """
    Format dates with a strftime pattern.

    Any object with a `format(datetime) -> str` method can be used in its
    place; this one renders in the local time zone unless `tz` is given.
    """

    def __init__(self, pattern: str = LONG_DATETIME_FORMAT, tz: Optional[timezone] = None):
        self.pattern = pattern
        self.tz = tz

    def format(self, value: datetime) -> str:
        local = as_aware(value).astimezone(self.tz)
        return local.strftime(self.pattern)
