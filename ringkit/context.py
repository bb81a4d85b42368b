"""Per-request context values and pagination parameters."""

from __future__ import annotations

import time
from dataclasses import dataclass, field


def _now_micros() -> int:
    return time.time_ns() // 1000


@dataclass
class Context:
    """Identity of a request's caller, its creation time and string values."""

    ident: str
    born: int = field(default_factory=_now_micros)
    vals: dict[str, str] = field(default_factory=dict)

    def get_str(self, key: str) -> str | None:
        return self.vals.get(key)

    def get_str_or(self, key: str, default: str) -> str:
        return self.vals.get(key, default)

    def set_str(self, key: str, value: str) -> None:
        self.vals[key] = value


@dataclass
class Pagination:
    """A page number and page size."""

    page: int
    size: int