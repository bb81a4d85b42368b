"""URL path joining, form encoding and query-string parsing."""

from __future__ import annotations

import logging
import re
import string
from urllib.parse import parse_qsl, unquote_to_bytes, urlsplit

_log = logging.getLogger(__name__)

_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*:")
_FORM_SAFE = frozenset((string.ascii_letters + string.digits + "*-._").encode("ascii"))


def join(base: str, other: str) -> str:
    """Join two URL pieces with exactly one slash between them."""
    base_slash = base.endswith("/")
    other_slash = other.startswith("/")
    if base_slash and other_slash:
        return base + other[1:]
    if not base_slash and not other_slash:
        return f"{base}/{other}"
    return base + other


def url_encode(value: str) -> str:
    """Form-encode value: spaces become '+', unsafe bytes become %XX."""
    pieces = []
    for byte in value.encode("utf-8"):
        if byte == 0x20:
            pieces.append("+")
        elif byte in _FORM_SAFE:
            pieces.append(chr(byte))
        else:
            pieces.append(f"%{byte:02X}")
    return "".join(pieces)


def url_decode(value: str) -> str:
    """Percent-decode value; an empty string if the result is not valid UTF-8."""
    try:
        return unquote_to_bytes(value).decode("utf-8")
    except UnicodeDecodeError:
        return ""


def parse_url_query(url: str) -> dict[str, str]:
    """The decoded query parameters of an absolute URL; empty if it cannot be parsed."""
    if not _SCHEME.match(url):
        _log.error("error relative URL without a base parse:%s", url)
        return {}
    try:
        parts = urlsplit(url)
    except ValueError as err:
        _log.error("error %s parse:%s", err, url)
        return {}
    return parse_query(parts.query)


def parse_query(query: str) -> dict[str, str]:
    """Decode a form-encoded query string; later duplicates win."""
    return dict(parse_qsl(query, keep_blank_values=True, errors="replace"))