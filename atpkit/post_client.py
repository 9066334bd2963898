"""A reusable HTTP POST client that keeps the last response body."""

from __future__ import annotations

import warnings
from collections.abc import Iterable, Mapping
from typing import Optional, Union

import requests

USER_AGENT = "CURL_ENGINE(1.0)"
CONNECT_TIMEOUT = 5
TIMEOUT = 30
DEFAULT_BUFFER_SIZE = 1024 * 8

HeaderSpec = Union[Mapping[str, str], Iterable[str]]


class PostError(RuntimeError):
    """Raised when a POST request cannot be performed."""


def _parse_headers(headers: Optional[HeaderSpec]) -> dict[str, Optional[str]]:
    if headers is None:
        return {}
    if isinstance(headers, Mapping):
        return {str(name): value for name, value in headers.items()}
    parsed: dict[str, Optional[str]] = {}
    for line in headers:
        name, sep, value = line.partition(":")
        name = name.strip()
        if not sep or not name:
            raise ValueError(f"malformed header line {line!r}")
        value = value.strip()
        # "Name:" with nothing after it removes a header that would be sent.
        parsed[name] = value if value else None
    return parsed


class PostClient:
    """Sends POST requests and stores the body of the latest response.

    Requests carry a fixed user agent, a 5 second connect timeout and a 30
    second overall timeout. Redirects are not followed. Any HTTP status is
    a completed request; only transport failures raise ``PostError``.
    """

    def __init__(self, session: Optional[requests.Session] = None) -> None:
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()
        self._url: Optional[str] = None
        self._data = b""
        self._headers: dict[str, Optional[str]] = {}
        self._verify = True
        self._response = b""
        self._closed = False
        self.status_code: Optional[int] = None

    def __enter__(self) -> "PostClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def set_ssl_verifypeer(self, verify: bool) -> None:
        """Choose whether the server certificate is verified."""
        self._verify = bool(verify)

    def set_headers(self, headers: Optional[HeaderSpec]) -> None:
        """Set extra request headers, as a mapping or as ``"Name: value"`` lines."""
        self._headers = _parse_headers(headers)

    def set_url(self, url: str) -> None:
        """Set the URL the request is posted to."""
        self._url = url

    def set_data(self, data: Union[bytes, bytearray, str]) -> None:
        """Set the request body; text is sent as UTF-8."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._data = bytes(data)

    def perform(self) -> int:
        """Post the request and return the HTTP status code."""
        if self._closed:
            raise PostError("client is closed")
        if not self._url:
            raise PostError("no request URL set")
        self._response = b""
        self.status_code = None
        headers = {"User-Agent": USER_AGENT, **self._headers}
        try:
            with warnings.catch_warnings():
                if not self._verify:
                    warnings.simplefilter("ignore")
                response = self._session.post(
                    self._url,
                    data=self._data,
                    headers=headers,
                    timeout=(CONNECT_TIMEOUT, TIMEOUT),
                    verify=self._verify,
                    allow_redirects=False,
                )
        except requests.RequestException as exc:
            raise PostError(f"POST to {self._url} failed: {exc}") from exc
        self._response = response.content
        self.status_code = response.status_code
        return response.status_code

    def response_data(self, size: Optional[int] = None) -> bytes:
        """Return the last response body.

        With ``size`` the body is zero-padded to exactly ``size`` bytes;
        a ``size`` smaller than the body raises ``ValueError``.
        """
        if size is None:
            return self._response
        if size < len(self._response):
            raise ValueError(
                f"buffer of {size} bytes cannot hold {len(self._response)} bytes of response"
            )
        return self._response + b"\0" * (size - len(self._response))

    def close(self) -> None:
        """Release the client; a session it created itself is closed."""
        if self._closed:
            return
        self._closed = True
        self._response = b""
        if self._owns_session:
            self._session.close()