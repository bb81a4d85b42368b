"""Random booleans, numbers, strings and dates."""

from __future__ import annotations

import math
import random
import string
from datetime import datetime, timezone

_THIRTY_DAY_MONTHS = frozenset({4, 6, 9, 11})


def rand_bool() -> bool:
    return random.random() < 0.5


def rand_int(minimum: int, maximum: int) -> int:
    """A random integer in [minimum, maximum); ValueError if the range is empty."""
    if minimum >= maximum:
        raise ValueError(f"empty range {minimum}..{maximum}")
    return random.randrange(minimum, maximum)


def rand_float(minimum: float, maximum: float) -> float:
    """A random float in [minimum, maximum); ValueError if the range is empty."""
    if not minimum < maximum:
        raise ValueError(f"empty range {minimum}..{maximum}")
    value = minimum + (maximum - minimum) * random.random()
    if value >= maximum:
        value = math.nextafter(maximum, minimum)
    return value


def rand_str(length: int) -> str:
    """A string of length random lower-case ASCII letters."""
    return "".join(random.choices(string.ascii_lowercase, k=length))


def _rand_date_numbers() -> tuple[int, int, int]:
    year = random.randrange(1970, datetime.now(timezone.utc).year)
    month = random.randrange(1, 13)
    if month == 2:
        day = random.randrange(1, 29)
    elif month in _THIRTY_DAY_MONTHS:
        day = random.randrange(1, 31)
    else:
        day = random.randrange(1, 32)
    return year, month, day


def rand_date() -> str:
    """A random date since 1970 before this year, as "Y-M-D" without padding."""
    year, month, day = _rand_date_numbers()
    return f"{year}-{month}-{day}"


def rand_datetime() -> str:
    """A random date and time, as "Y-M-D h:m:s" without padding."""
    year, month, day = _rand_date_numbers()
    hour = random.randrange(0, 24)
    minute = random.randrange(0, 60)
    second = random.randrange(0, 60)
    return f"{year}-{month}-{day} {hour}:{minute}:{second}"