"""Request signature checking: HMAC-SHA1 over a canonical payload plus nonce replay guarding."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Iterable, Mapping

import redis

from ringkit import jsonutil
from ringkit.context import Context
from ringkit.define import HttpMethod
from ringkit.hashing import hmac_sha1
from ringkit.number import to_int
from ringkit.url import parse_query

DEFAULT_NONCE_LIFETIME = 300
MAX_TIME_SKEW = 60 * 5

SIGN = "SIGN"
PAYL = "PAYL"
FRMT = "FRMT"
LOAD = "LOAD"
INVD = "INVD"

XU = "X-U"
XT = "X-T"
XR = "X-R"
XS = "X-S"
DS = "X-DEVELOPMENT-SKIP"

_BODY_METHODS = (HttpMethod.POST, HttpMethod.PUT, HttpMethod.DELETE, HttpMethod.OPTIONS, HttpMethod.PATCH)
_I64_MIN = -(2**63)
_U64_LIMIT = 2**64

Exclude = Callable[[str, str, Mapping[str, str]], bool]
KeyLoader = Callable[[str], str]


class SignatureError(Exception):
    """A request failed signature checking.

    detail is one of PAYL, FRMT, LOAD or INVD; data carries debug details
    for an invalid signature.
    """

    def __init__(self, detail: str, message: str = "", data: dict[str, str] | None = None) -> None:
        super().__init__(message or detail)
        self.scope = SIGN
        self.detail = detail
        self.message = message
        self.data = data


def _format_float(number: float) -> str:
    if not math.isfinite(number):
        return "null"
    if number == 0:
        return "-0.0" if math.copysign(1.0, number) < 0 else "0.0"
    sign = "-" if number < 0 else ""
    _, raw_digits, exponent = Decimal(repr(abs(number))).as_tuple()
    all_digits = "".join(str(d) for d in raw_digits)
    digits = all_digits.rstrip("0")
    k = exponent + (len(all_digits) - len(digits))
    length = len(digits)
    kk = length + k
    if 0 <= k and kk <= 16:
        text = digits + "0" * k + ".0"
    elif 0 < kk <= 16:
        text = digits[:kk] + "." + digits[kk:]
    elif -5 < kk <= 0:
        text = "0." + "0" * (-kk) + digits
    elif length == 1:
        text = f"{digits}e{kk - 1}"
    else:
        text = f"{digits[0]}.{digits[1:]}e{kk - 1}"
    return sign + text


def json_payload(value: Any) -> str:
    """Canonical text of a JSON value: object keys sorted, strings unquoted."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        if _I64_MIN <= value < _U64_LIMIT:
            return str(value)
        return _format_float(float(value))
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(json_payload(item) for item in value) + "]"
    if isinstance(value, Mapping):
        return "{" + ",".join(f"{key}={json_payload(value[key])}" for key in sorted(value)) + "}"
    raise TypeError(f"not a JSON value: {type(value).__name__}")


@dataclass
class Payload:
    """The signed parts of a request."""

    method: str
    path: str
    xu: str | None = None
    xt: str | None = None
    xr: str | None = None
    xs: str | None = None
    ds: str | None = None
    queries: dict[str, str] = field(default_factory=dict)
    body: Any = None
    has_body: bool = False

    def guard(self, now: int | None = None) -> None:
        """Check the signature headers are present and well formed."""
        if self.xu is None or self.xt is None or self.xr is None or self.xs is None:
            raise SignatureError(FRMT, "missing signature data in header")
        current = int(time.time()) if now is None else now
        sent = to_int(self.xt, 0)
        if sent < MAX_TIME_SKEW or abs(current - sent) > MAX_TIME_SKEW:
            raise SignatureError(FRMT, "the time difference is too large")
        length = len(self.xr.encode("utf-8"))
        if length <= 8 or length >= 40:
            raise SignatureError(FRMT, "random string length invalid")
        if len(self.xs.encode("utf-8")) != 40:
            raise SignatureError(FRMT, "invalid signature data in header")

    def text(self) -> str:
        """The canonical string that the signature covers."""
        header = "".join(
            [
                self.method.upper(),
                ",",
                self.path,
                ",{",
                f"{self.xu}," if self.xu is not None else "",
                f"{self.xt}," if self.xt is not None else "",
                self.xr if self.xr is not None else "",
                "}",
            ]
        )
        pieces = [header]
        if self.queries:
            pieces.append(",{" + ",".join(f"{key}={self.queries[key]}" for key in sorted(self.queries)) + "}")
        if self.has_body:
            pieces.append("," + json_payload(self.body))
        return "".join(pieces)

    def valid(self, key: str) -> None:
        """Raise SignatureError (INVD) unless the client signature matches."""
        load = self.text()
        server = hmac_sha1(load, key)
        client = self.xs or ""
        if server != client:
            debug = {"payload": load, "key": key, "server": server, "client": client}
            raise SignatureError(INVD, "invalid signature", debug)


def _header_value(value: str) -> str | None:
    if all(char == "\t" or 32 <= ord(char) < 127 for char in value):
        return value
    return None


def payload_from_request(
    method: str,
    path: str,
    query: str | None,
    headers: Mapping[str, str],
    body: bytes | str | None,
) -> Payload:
    """Collect a Payload from request parts; SignatureError (PAYL) on a bad JSON body."""
    lowered: dict[str, str] = {}
    for name, value in headers.items():
        lowered.setdefault(name.lower(), value)

    def header(name: str) -> str | None:
        value = lowered.get(name.lower())
        return None if value is None else _header_value(value)

    payload = Payload(
        method=method.upper(),
        path=path,
        xu=header(XU),
        xt=header(XT),
        xr=header(XR),
        xs=header(XS),
        ds=header(DS),
        queries=parse_query(query or ""),
    )

    if any(candidate.matches(method) for candidate in _BODY_METHODS):
        raw = body.encode("utf-8") if isinstance(body, str) else (body or b"")
        if raw:
            try:
                payload.body = jsonutil.decode(raw.decode("utf-8"))
            except (UnicodeDecodeError, ValueError) as err:
                raise SignatureError(PAYL, str(err)) from err
        payload.has_body = True
    return payload


class NonceGuard:
    """Rejects a nonce that a user has sent within the lifetime, using Redis sorted sets."""

    def __init__(self, client: Any, lifetime: int = DEFAULT_NONCE_LIFETIME) -> None:
        self._client = redis.Redis.from_url(client) if isinstance(client, str) else client
        self.lifetime = lifetime

    def check(self, user: str, nonce: str, now: int | None = None) -> None:
        """Record nonce for user; SignatureError (INVD) if it was used recently."""
        current = int(time.time()) if now is None else now
        name = f"XR:{user}"
        try:
            score = self._client.zscore(name, nonce)
            if score is not None and abs(current - int(score)) < self.lifetime:
                raise SignatureError(INVD, "duplicate rand value")
            pipe = self._client.pipeline(transaction=False)
            pipe.zadd(name, {nonce: current})
            pipe.zremrangebyscore(name, "-inf", current - self.lifetime)
            pipe.expire(name, self.lifetime)
            pipe.execute()
        except redis.RedisError as err:
            raise SignatureError(INVD, str(err)) from err


class Signator:
    """Verifies signed requests and yields the caller's Context."""

    def __init__(
        self,
        key_loader: KeyLoader,
        nonce_guard: NonceGuard,
        rear: str = "",
        excludes: Iterable[Exclude] = (),
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._key_loader = key_loader
        self._nonce_guard = nonce_guard
        self._rear = rear
        self._excludes: list[Exclude] = list(excludes)
        self._clock = clock or time.time

    def add_exclude(self, exclude: Exclude) -> Signator:
        """Add a predicate (method, path, headers) selecting requests to skip."""
        self._excludes.append(exclude)
        return self

    def is_excluded(self, method: str, path: str, headers: Mapping[str, str]) -> bool:
        return any(exclude(method, path, headers) for exclude in self._excludes)

    def verify(
        self,
        method: str,
        path: str,
        query: str | None,
        headers: Mapping[str, str],
        body: bytes | str | None,
    ) -> Context:
        """Check a request's signature and nonce; SignatureError if it is rejected."""
        now = int(self._clock())
        payload = payload_from_request(method, path, query, headers, body)
        payload.guard(now)

        user = payload.xu or ""
        try:
            key = self._key_loader(user)
        except Exception as err:
            raise SignatureError(LOAD, str(err)) from err

        try:
            payload.valid(key)
        except SignatureError:
            if not self._rear or self._rear != (payload.ds or ""):
                raise

        self._nonce_guard.check(user, payload.xr or "", now)
        return Context(user)