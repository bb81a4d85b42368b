"""Time-ordered numeric identifiers built from milliseconds, sequence and shard."""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator

from ringkit.number import to_int

MAX_SEQUENCE = 999
MAX_SHARDING = 99
MILLIS_BASE = 1_000_000
SEQUENCE_BASE = 100
SECOND_DIV = SEQUENCE_BASE * 100
MIN_VALUE = 1728747205481002100

_I64_MAX = 2**63 - 1
_BASE62_CHARS = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
_BASE62_INDEX = {char: index for index, char in enumerate(_BASE62_CHARS)}


class IdError(ValueError):
    """An identifier could not be made or is out of range."""


def _to_base62(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value > 0:
        value, rest = divmod(value, 62)
        digits.append(_BASE62_CHARS[rest])
    return "".join(reversed(digits))


def _from_base62(text: str) -> int | None:
    value = 0
    for char in text:
        index = _BASE62_INDEX.get(char)
        if index is None:
            return None
        value = value * 62 + index
    return value


@dataclass(frozen=True, order=True)
class Id:
    """An identifier: millis * 10^6 + sequence * 100 + shard."""

    val: int

    def __post_init__(self) -> None:
        if self.val < MIN_VALUE:
            raise IdError("less than min value")
        if self.val > _I64_MAX:
            raise IdError("greater than max value")

    def __str__(self) -> str:
        return str(self.val)

    def __int__(self) -> int:
        return self.val

    def millis(self) -> int:
        return self.val // MILLIS_BASE

    def second(self) -> int:
        return self.val // SECOND_DIV

    def sharding(self) -> int:
        return self.val % SEQUENCE_BASE

    def sequence(self) -> int:
        return (self.val - self.val // MILLIS_BASE * MILLIS_BASE) // SEQUENCE_BASE

    def description(self) -> str:
        return f"{self.val} shard:{self.sharding():02} seq:{self.sequence():03} millis:{self.millis()}"

    def valid(self) -> bool:
        return self.val > MIN_VALUE

    def value(self) -> int:
        return self.val

    def short(self) -> str:
        """The identifier in base 62."""
        return _to_base62(self.val)


def id_from_short(short: str) -> Id | None:
    """Decode a base-62 identifier; None if it is malformed or out of range."""
    value = _from_base62(short)
    if value is None or value > _I64_MAX or value < MIN_VALUE:
        return None
    return Id(value)


def id_from_text(text: str) -> Id:
    """Parse a decimal identifier; unparsable text counts as 0 and is rejected."""
    return Id(to_int(text, 0))


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


def _truncated_rem(value: int, divisor: int) -> int:
    rest = abs(value) % divisor
    return rest if value >= 0 else -rest


class Factory:
    """Makes identifiers for one shard, up to 1000 per millisecond."""

    def __init__(self, sharding: int = 0, clock: Callable[[], int] | None = None) -> None:
        self.sharding = _truncated_rem(sharding, MAX_SHARDING)
        self._clock = clock or _now_millis
        self._lock = threading.Lock()
        self._millis = 0
        self._sequence = 0

    @property
    def sequence(self) -> int:
        return self._sequence

    @property
    def millis(self) -> int:
        return self._millis

    @contextmanager
    def _claim(self) -> Iterator[None]:
        if not self._lock.acquire(blocking=False):
            raise IdError("id factory is busy")
        try:
            yield
        finally:
            self._lock.release()

    def _build(self, millis: int, sequence: int) -> Id:
        return Id(MILLIS_BASE * millis + sequence * SEQUENCE_BASE + self.sharding)

    def make(self) -> Id:
        """Make the next identifier for the current millisecond."""
        millis = self._clock()
        with self._claim():
            if millis != self._millis:
                self._millis, self._sequence = millis, 0
            else:
                self._sequence += 1
            sequence = self._sequence
        if sequence > MAX_SEQUENCE:
            raise IdError("out of sequence range")
        return self._build(millis, sequence)

    def make_n(self, n: int) -> list[Id]:
        """Make n identifiers in one millisecond."""
        if n < 1:
            return []
        millis = self._clock()
        with self._claim():
            if millis != self._millis:
                self._millis, self._sequence = millis, 0
            if self._sequence + n > MAX_SEQUENCE:
                raise IdError("out of range range")
            start = self._sequence
            self._sequence = start + n
        return [self._build(millis, sequence) for sequence in range(start, start + n)]


_SHARED = Factory(0)


def shared() -> Factory:
    """The process-wide factory for shard 0."""
    return _SHARED


def new_id() -> Id:
    """Make an identifier with the shared factory."""
    return _SHARED.make()