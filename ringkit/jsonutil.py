"""Compact and pretty JSON encoding and strict decoding."""

from __future__ import annotations

import json
import math
from typing import Any

from ringkit.fs import PathLike


def _finite(obj: Any) -> Any:
    # Non-finite floats are written as null.
    if isinstance(obj, float) and not math.isfinite(obj):
        return None
    if isinstance(obj, dict):
        return {key: _finite(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_finite(value) for value in obj]
    return obj


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON number: {name}")


def encode(obj: Any) -> str:
    """Compact JSON text of obj; TypeError or ValueError if it cannot be encoded."""
    return json.dumps(_finite(obj), ensure_ascii=False, separators=(",", ":"), allow_nan=False)


def encode_or_empty(obj: Any) -> str:
    """Compact JSON text of obj, or an empty string if it cannot be encoded."""
    try:
        return encode(obj)
    except (TypeError, ValueError):
        return ""


def pretty(obj: Any) -> str:
    """JSON text of obj indented by two spaces."""
    return json.dumps(_finite(obj), ensure_ascii=False, indent=2, allow_nan=False)


def decode(text: str) -> Any:
    """Parse JSON text; ValueError if it is not valid JSON."""
    return json.loads(text, parse_constant=_reject_constant)


def decode_file(filename: PathLike) -> Any:
    """Parse the JSON content of a file."""
    with open(filename, "rb") as handle:
        return decode(handle.read().decode("utf-8", errors="replace"))