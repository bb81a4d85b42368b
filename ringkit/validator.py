"""Regular expression helpers and simple format validators."""

from __future__ import annotations

import re

_REPLACEMENT_REF = re.compile(r"\$(?:\$|\{([^}]+)\}|([_0-9A-Za-z]+))")

_EMAIL = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}\Z")
_CHINESE = re.compile(r"[\u4e00-\u9fa5]")
_URL = re.compile(r"^(http|https|ftp)://[^\s]+\Z")
_IP4 = re.compile(r"^\d+\.\d+\.\d+\.\d+\Z")
_IP6 = re.compile(r"^\d{1,4}(?::\d{1,4}){7}\Z")
_MAC = re.compile(r"^[0-9A-Fa-f]{2}(:[0-9A-Fa-f]{2}){5}\Z")
_ALPHA = re.compile(r"^[a-zA-Z]+\Z")
_ALPHANUMERIC = re.compile(r"^[a-zA-Z0-9]+\Z")
_BASE64 = re.compile(r"^[A-Za-z0-9+/=]+\Z")

_DIGITS = frozenset("0123456789")
_HEX = frozenset("0123456789abcdefABCDEF")
_OCT = frozenset("01234567")
_BIN = frozenset("01")


def _compile(pattern: str) -> re.Pattern[str] | None:
    try:
        return re.compile(pattern)
    except re.error:
        return None


def _expand(match: re.Match[str], replacement: str) -> str:
    def resolve(ref: re.Match[str]) -> str:
        if ref.group(0) == "$$":
            return "$"
        name = ref.group(1) or ref.group(2)
        if name.isascii() and name.isdigit():
            index = int(name)
            if index > match.re.groups:
                return ""
            return match.group(index) or ""
        if name not in match.re.groupindex:
            return ""
        return match.group(name) or ""

    return _REPLACEMENT_REF.sub(resolve, replacement)


def regex_match(pattern: str, text: str) -> bool:
    """True if pattern matches anywhere in text; False for a bad pattern."""
    compiled = _compile(pattern)
    return bool(compiled and compiled.search(text))


def regex_extract(pattern: str, text: str) -> list[str]:
    """Every whole match of pattern in text."""
    compiled = _compile(pattern)
    if compiled is None:
        return []
    return [m.group(0) for m in compiled.finditer(text)]


def regex_replace(pattern: str, text: str, replacement: str) -> str:
    """Replace every match; replacement may refer to groups as $1, $name or ${name}."""
    compiled = _compile(pattern)
    if compiled is None:
        return text
    return compiled.sub(lambda m: _expand(m, replacement), text)


def regex_split(pattern: str, text: str) -> list[str]:
    """Split text on matches of pattern, leaving out captured groups."""
    compiled = _compile(pattern)
    if compiled is None:
        return []
    pieces = []
    last = 0
    for m in compiled.finditer(text):
        pieces.append(text[last:m.start()])
        last = m.end()
    pieces.append(text[last:])
    return pieces


def regex_find(pattern: str, text: str) -> str | None:
    """The first match of pattern in text, or None."""
    compiled = _compile(pattern)
    if compiled is None:
        return None
    found = compiled.search(text)
    return found.group(0) if found else None


def is_email(text: str) -> bool:
    return bool(_EMAIL.search(text))


def is_china_mobile(text: str) -> bool:
    return len(text) == 11 and text.startswith("1") and all(c in _DIGITS for c in text)


def has_chinese(text: str) -> bool:
    return bool(_CHINESE.search(text))


def is_url(text: str) -> bool:
    return bool(_URL.search(text))


def is_ip4(text: str) -> bool:
    return bool(_IP4.search(text))


def is_ip6(text: str) -> bool:
    return bool(_IP6.search(text))


def is_mac(text: str) -> bool:
    return bool(_MAC.search(text))


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def len_range(text: str, minimum: int, maximum: int) -> bool:
    """True if the UTF-8 length of text lies within [minimum, maximum]."""
    return minimum <= _byte_len(text) <= maximum


def len_min(text: str, minimum: int) -> bool:
    return _byte_len(text) >= minimum


def len_max(text: str, maximum: int) -> bool:
    return _byte_len(text) <= maximum


def len_equal(text: str, length: int) -> bool:
    return _byte_len(text) == length


def is_number(text: str) -> bool:
    return all(c in _DIGITS for c in text)


def is_float(text: str) -> bool:
    return all(c in _DIGITS or c == "." for c in text)


def is_int(text: str) -> bool:
    return all(c in _DIGITS for c in text)


def is_hex(text: str) -> bool:
    return all(c in _HEX for c in text)


def is_oct(text: str) -> bool:
    return all(c in _OCT for c in text)


def is_bin(text: str) -> bool:
    return all(c in _BIN for c in text)


def is_ascii(text: str) -> bool:
    return text.isascii()


def is_alpha(text: str) -> bool:
    return bool(_ALPHA.search(text))


def is_alphanumeric(text: str) -> bool:
    return bool(_ALPHANUMERIC.search(text))


def is_base64(text: str) -> bool:
    return bool(_BASE64.search(text))