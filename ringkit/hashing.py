"""SHA-1 and HMAC-SHA1 helpers returning hex digests."""

from __future__ import annotations

import hashlib
import hmac


def hmac_sha1(content: str, key: str) -> str:
    """HMAC-SHA1 of content under key, as lower-case hex."""
    return hmac.new(key.encode("utf-8"), content.encode("utf-8"), hashlib.sha1).hexdigest()


def sha1(content: str) -> str:
    """SHA-1 of content, as lower-case hex."""
    return hashlib.sha1(content.encode("utf-8")).hexdigest()