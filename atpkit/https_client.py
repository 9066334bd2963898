"""One-shot HTTPS POST requests returning the response body as text."""

from __future__ import annotations

import enum
import warnings
from typing import Optional, Union
from urllib.parse import urlsplit

import requests

DEFAULT_PORT = 443
REQUEST_TIMEOUT = 10
JSON_CONTENT_TYPE = "application/json;charset=UTF-8"


class DataType(enum.IntEnum):
    """Kind of payload carried by a request."""

    BINARY = 0
    JSON = 1
    PROTOBUF = 2
    NULL = 3


class HttpsClient:
    """Posts a payload over TLS without verifying the server certificate.

    Failures of any kind (bad URI, transport error, non-200 status) yield an
    empty string.
    """

    def __init__(self, session: Optional[requests.Session] = None) -> None:
        self._session = session

    def launch_request(
        self,
        uri: str,
        data: Union[bytes, bytearray, str] = b"",
        data_type: DataType = DataType.JSON,
    ) -> str:
        """POST ``data`` to ``uri`` and return the response body, or ``""``."""
        try:
            parts = urlsplit(uri)
            host = parts.hostname
            port = parts.port
        except ValueError:
            return ""
        if not host:
            return ""
        if port is None:
            port = DEFAULT_PORT

        target = parts.path or "/"
        if parts.query:
            target = f"{target}?{parts.query}"
        netloc = f"[{host}]" if ":" in host else host
        url = f"https://{netloc}:{port}{target}"

        headers = {"Host": host, "Connection": "close"}
        if data_type == DataType.JSON:
            headers["Content-Type"] = JSON_CONTENT_TYPE
        if isinstance(data, str):
            data = data.encode("utf-8")

        session = self._session if self._session is not None else requests.Session()
        try:
            with warnings.catch_warnings():
                warnings.simplefilter("ignore")
                response = session.post(
                    url,
                    data=bytes(data),
                    headers=headers,
                    timeout=REQUEST_TIMEOUT,
                    verify=False,
                )
        except requests.RequestException:
            return ""
        finally:
            if self._session is None:
                session.close()

        if response.status_code != 200:
            return ""
        body = response.content.split(b"\0", 1)[0]
        return body.decode("utf-8", errors="replace")