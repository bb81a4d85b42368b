"""A small HTTP client bound to a base URL, with a User-Agent builder."""

from __future__ import annotations

import re
from typing import Any

import httpx

from ringkit.url import join as url_join

DEFAULT_USER_AGENT = "Rings/1.0.0 (Linux; en-US; Iusworks.inc)"
DEFAULT_TIMEOUT = 10.0

_HEADER_NAME = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


class HttpError(Exception):
    """A request failed; body holds the response text or the transport error."""

    def __init__(self, body: str, status: int | None = None) -> None:
        super().__init__(body)
        self.body = body
        self.status = status


class UserAgentBuilder:
    """Builds a "product/version (details) [comments]" User-Agent string."""

    def __init__(self, product: str, version: str) -> None:
        self._product = product
        self._version = version
        self._platform: str | None = None
        self._os: str | None = None
        self._os_version: str | None = None
        self._language: str | None = None
        self._vendor: str | None = None
        self._comments: list[str] = []

    def platform(self, platform: str) -> UserAgentBuilder:
        self._platform = platform
        return self

    def os(self, os_name: str, version: str | None = None) -> UserAgentBuilder:
        self._os = os_name
        self._os_version = version
        return self

    def language(self, language: str) -> UserAgentBuilder:
        self._language = language
        return self

    def vendor(self, vendor: str) -> UserAgentBuilder:
        self._vendor = vendor
        return self

    def add_comment(self, comment: str) -> UserAgentBuilder:
        self._comments.append(comment)
        return self

    def build(self) -> str:
        parts = [f"{self._product}/{self._version}"]
        details = []
        if self._platform is not None:
            details.append(self._platform)
        if self._os is not None:
            details.append(self._os if self._os_version is None else f"{self._os}; {self._os_version}")
        if self._language is not None:
            details.append(self._language)
        if self._vendor is not None:
            details.append(self._vendor)
        if details:
            parts.append(f"({'; '.join(details)})")
        parts.extend(f"[{comment}]" for comment in self._comments)
        return " ".join(parts)


class ClientBuilder:
    """Collects settings for a Client."""

    def __init__(self, base: str) -> None:
        self._base = base
        self._headers = httpx.Headers()
        self._user_agent: str | None = None
        self._proxy: str | None = None
        self._no_tls_verify = False

    def set_user_agent(self, agent: str) -> ClientBuilder:
        self._user_agent = agent
        return self

    def add_header(self, key: str, value: str) -> ClientBuilder:
        """Set a default header; ValueError for an invalid name or value."""
        if not _HEADER_NAME.fullmatch(key):
            raise ValueError(f"invalid header name: {key!r}")
        if any(char in value for char in "\r\n\0"):
            raise ValueError(f"invalid header value for {key!r}")
        self._headers[key] = value
        return self

    def use_json(self) -> ClientBuilder:
        self._headers["Accept"] = "application/json"
        self._headers["Content-Type"] = "application/json"
        return self

    def no_tls_verify(self) -> ClientBuilder:
        self._no_tls_verify = True
        return self

    def enable_tls_verify(self) -> ClientBuilder:
        self._no_tls_verify = False
        return self

    def set_proxy(self, proxy: str) -> ClientBuilder:
        self._proxy = proxy
        return self

    def build(self) -> Client:
        headers = httpx.Headers(self._headers)
        headers["User-Agent"] = self._user_agent or DEFAULT_USER_AGENT
        http = httpx.Client(
            headers=headers,
            timeout=DEFAULT_TIMEOUT,
            follow_redirects=False,
            verify=not self._no_tls_verify,
            proxy=self._proxy,
        )
        return Client(self._base, http)


class Client:
    """Sends requests to paths under a base URL; non-2xx answers raise HttpError."""

    def __init__(self, base: str, http: httpx.Client) -> None:
        self.base = base
        self._http = http

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return self._http.request(method, url_join(self.base, path), **kwargs)
        except httpx.HTTPError as err:
            raise HttpError(str(err)) from err

    @staticmethod
    def _text(response: httpx.Response) -> str:
        if response.is_success:
            return response.text
        raise HttpError(response.text, response.status_code)

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        if not response.is_success:
            raise HttpError(response.text, response.status_code)
        try:
            return response.json()
        except ValueError as err:
            raise HttpError(str(err), response.status_code) from err

    def get(self, path: str) -> str:
        return self._text(self._send("GET", path))

    def post(self, path: str, body: str) -> str:
        return self._text(self._send("POST", path, content=body))

    def put(self, path: str, body: str) -> str:
        return self._text(self._send("PUT", path, content=body))

    def delete(self, path: str) -> str:
        return self._text(self._send("DELETE", path))

    def head(self, path: str) -> str:
        return self._text(self._send("HEAD", path))

    def get_json(self, path: str) -> Any:
        return self._json(self._send("GET", path))

    def post_json(self, path: str, params: Any) -> Any:
        return self._json(self._send("POST", path, json=params))

    def put_json(self, path: str, params: Any) -> Any:
        return self._json(self._send("PUT", path, json=params))

    def delete_json(self, path: str) -> Any:
        return self._json(self._send("DELETE", path))

    def head_json(self, path: str) -> Any:
        return self._json(self._send("HEAD", path))