"""Short-lived TCP exchanges: connect, send one message, read one reply."""

from __future__ import annotations

import socket
from typing import Optional

READ_SIZE = 4096


class SendError(OSError):
    """Raised when a message exchange fails.

    ``reason`` names the failing step: ``invalid_args``, ``connect``,
    ``send``, ``poll`` or ``recv``.
    """

    def __init__(self, reason: str, message: str) -> None:
        super().__init__(message)
        self.reason = reason


class SendHelper:
    """Sends a message over a fresh TCP connection and returns the reply."""

    def __init__(self, retry_count: int = 0) -> None:
        self.retry_count = retry_count
        self._sock: Optional[socket.socket] = None

    def __enter__(self) -> "SendHelper":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the connection, if one is open."""
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def send_message(self, ip: str, port: int, message: bytes | str,
                     timeout: Optional[float] = None) -> bytes:
        """Send ``message`` to ``ip``:``port`` and return up to 4096 reply bytes.

        ``timeout`` bounds the connect and each wait, in seconds; ``None``
        waits indefinitely.
        """
        if isinstance(message, str):
            message = message.encode("utf-8")
        if not message:
            raise SendError("invalid_args", "message must not be empty")

        self.close()
        try:
            self._sock = socket.create_connection((ip, port), timeout=timeout)
        except OSError as exc:
            raise SendError("connect", f"cannot connect to {ip}:{port}: {exc}") from exc

        try:
            self._sock.sendall(message)
        except socket.timeout as exc:
            self.close()
            raise SendError("poll", f"timed out sending to {ip}:{port}") from exc
        except OSError as exc:
            self.close()
            raise SendError("send", f"send to {ip}:{port} failed: {exc}") from exc

        try:
            reply = self._sock.recv(READ_SIZE)
        except socket.timeout as exc:
            self.close()
            raise SendError("poll", f"timed out waiting for {ip}:{port}") from exc
        except OSError as exc:
            self.close()
            raise SendError("recv", f"receive from {ip}:{port} failed: {exc}") from exc

        if not reply:
            self.close()
            raise SendError("recv", f"{ip}:{port} closed the connection without a reply")
        return reply