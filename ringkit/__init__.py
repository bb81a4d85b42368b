"""Utility toolkit for web services: ids, hashing, strings, validation, files, URLs, an HTTP client and request signature checking."""

__version__ = "0.1.0"