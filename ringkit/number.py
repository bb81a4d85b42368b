"""Lenient conversion of strings to numbers."""

from __future__ import annotations

import re

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)",
    re.IGNORECASE,
)

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


def to_int(value: str, default: int = 0) -> int:
    """Parse a signed 64-bit decimal integer, or return default."""
    if not _INT_RE.fullmatch(value):
        return default
    number = int(value)
    if not _I64_MIN <= number <= _I64_MAX:
        return default
    return number


def to_float(value: str, default: float = 0.0) -> float:
    """Parse a decimal floating point number, or return default."""
    if not _FLOAT_RE.fullmatch(value):
        return default
    return float(value)