"""String helpers: case-insensitive matching, substrings and words."""

from __future__ import annotations


def contains_ignore_case(needle: str, haystack: str) -> bool:
    """True if haystack contains needle, ignoring case."""
    return needle.lower() in haystack.lower()


def has_prefix_ignore_case(prefix: str, text: str) -> bool:
    """True if text starts with prefix, ignoring ASCII case."""
    raw, head = text.encode("utf-8"), prefix.encode("utf-8")
    if len(raw) < len(head):
        return False
    return raw[: len(head)].lower() == head.lower()


def has_suffix_ignore_case(suffix: str, text: str) -> bool:
    """True if text ends with suffix, ignoring ASCII case."""
    raw, tail = text.encode("utf-8"), suffix.encode("utf-8")
    if len(raw) < len(tail):
        return False
    return raw[len(raw) - len(tail):].lower() == tail.lower()


def sub_head(text: str, size: int) -> str:
    """The first size characters of text."""
    return text[:size]


def sub_tail(text: str, size: int) -> str:
    """Characters of text after skipping (UTF-8 byte length - size) of them."""
    skip = len(text.encode("utf-8")) - size
    if skip < 0:
        raise ValueError(f"size {size} exceeds the length of the text")
    return text[skip:]


def sub(text: str, start: int, end: int) -> str:
    """Byte range [start, end) of text; empty if either bound reaches its end."""
    raw = text.encode("utf-8")
    if start >= len(raw) or end >= len(raw):
        return ""
    if start > end:
        raise ValueError(f"start {start} is after end {end}")
    return raw[start:end].decode("utf-8")


def extract(text: str, start: str, end: str) -> list[str]:
    """All strings found between successive start and end markers."""
    if not start and not end:
        raise ValueError("start and end markers must not both be empty")
    found = []
    pos = 0
    while pos < len(text):
        start_at = text.find(start, pos)
        if start_at < 0:
            break
        inner = start_at + len(start)
        end_at = text.find(end, inner)
        if end_at < 0:
            break
        found.append(text[inner:end_at])
        pos = end_at + len(end)
    return found


def word_count(text: str) -> int:
    return len(text.split())


def _nth_word(text: str, size: int) -> str:
    count = 0
    start = 0
    for index, char in enumerate(text):
        if char.isspace():
            count += 1
            if count >= size:
                return text[start:index]
            start = index + 1
    return text[start:]


def word_head(text: str, size: int) -> str:
    """The size-th whitespace-separated piece from the start (the rest if fewer)."""
    return _nth_word(text, size)


def word_tail(text: str, size: int) -> str:
    """The size-th piece from the end, with its leading whitespace."""
    count = 0
    end = len(text)
    for index in range(len(text) - 1, -1, -1):
        if text[index].isspace():
            count += 1
            if count >= size:
                return text[index:end]
            end = index
    return text[:end]


def ucfirst(text: str) -> str:
    return text[:1].upper() + text[1:]


def lcfirst(text: str) -> str:
    return text[:1].lower() + text[1:]


def ucwords(text: str) -> str:
    """Upper-case the first character of text."""
    return ucfirst(text)


def lcwords(text: str) -> str:
    """Lower-case the first character of text."""
    return lcfirst(text)


def word_format(text: str, size: int) -> str:
    """The size-th whitespace-separated piece, as word_head."""
    return _nth_word(text, size)