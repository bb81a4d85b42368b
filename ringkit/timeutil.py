"""Date and time helpers built on nanosecond timestamps."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
MONTHS_LONG = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
WEEKDAYS_LONG = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

FORMAT_DATE = "%Y-%m-%d"
FORMAT_TIME = "%H:%M:%S"
FORMAT_DATETIME = "%Y-%m-%d %H:%M:%S"
FORMAT_DATETIME_WITH_TIMEZONE = "%Y-%m-%d %H:%M:%S %Z"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _truncating_div(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


def _utc_from_nanos(nanos: int) -> datetime:
    return _EPOCH + timedelta(microseconds=nanos // 1000)


def _parse_aware(text: str, layout: str) -> datetime:
    parsed = datetime.strptime(text, layout)
    if parsed.tzinfo is None:
        raise ValueError(f"{text!r} does not determine a UTC offset")
    return parsed


class Format(Enum):
    """Named date/time layouts."""

    DATE = FORMAT_DATE
    TIME = FORMAT_TIME
    DATETIME = FORMAT_DATETIME
    DATETIME_WITH_TIMEZONE = FORMAT_DATETIME_WITH_TIMEZONE

    def layout(self) -> str:
        """The strftime layout of this format."""
        return self.value

    def __str__(self) -> str:
        return self.value

    def format(self, timestamp_nanos: int) -> str:
        """Render a UTC nanosecond timestamp with this layout."""
        return _utc_from_nanos(timestamp_nanos).strftime(self.value)

    def parse(self, text: str) -> int:
        """Parse text to UTC seconds; 0 when it cannot be parsed.

        Parsing needs a UTC offset in the input, which none of the layouts carry.
        """
        try:
            parsed = _parse_aware(text, self.value)
        except ValueError:
            return 0
        return (parsed - _EPOCH) // timedelta(seconds=1)

    def parse_to_utc(self, text: str) -> datetime:
        """Parse text into a UTC datetime, raising ValueError on failure."""
        return _parse_aware(text, self.value).astimezone(timezone.utc)

    def parse_to_local(self, text: str) -> datetime:
        """Parse text into a local datetime, raising ValueError on failure."""
        return _parse_aware(text, self.value).astimezone()


@dataclass(frozen=True)
class Timestamp:
    """A point in time as nanoseconds since the Unix epoch."""

    nanos: int

    def micros(self) -> int:
        return _truncating_div(self.nanos, 1000)

    def millis(self) -> int:
        return _truncating_div(self.nanos, 1_000_000)

    def seconds(self) -> int:
        return _truncating_div(self.nanos, 1_000_000_000)

    def date_utc(self) -> datetime:
        return _utc_from_nanos(self.nanos)

    def date_local(self) -> datetime:
        return _utc_from_nanos(self.nanos).astimezone()


def timestamp_from(value: int) -> Timestamp:
    """Build a Timestamp, guessing the unit of value from its magnitude.

    Micro- and milliseconds are scaled to nanoseconds; nanoseconds and
    small values are taken as they are.
    """
    if value > 1_000_000_000_000_000_000:
        nanos = value
    elif value > 1_000_000_000_000_000:
        nanos = value * 1_000
    elif value > 1_000_000_000_000:
        nanos = value * 1_000_000
    else:
        nanos = value
    return Timestamp(nanos)


def now_timestamp() -> Timestamp:
    return Timestamp(time.time_ns())


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def now_local() -> datetime:
    return datetime.now().astimezone()


def now_fixed(zone: int) -> datetime:
    """The current time at a whole-hour offset, clamped to -12..12."""
    hours = max(-12, min(12, zone))
    return datetime.now(timezone(timedelta(hours=hours)))


def is_leap(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0