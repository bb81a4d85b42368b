"""Character set names."""

from __future__ import annotations

from enum import Enum


class Charset(Enum):
    """Known character sets, valued by their display name."""

    UTF8 = "UTF-8"
    GB2312 = "GB2312"
    GBK = "GBK"
    GB18030 = "GB18030"
    BIG5 = "Big5"
    UNICODE = "Unicode"
    ISO8859_1 = "ISO-8859-1"

    @property
    def label(self) -> str:
        """The display name of the character set."""
        return self.value

    def __str__(self) -> str:
        return self.value