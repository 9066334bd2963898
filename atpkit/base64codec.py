"""Base64 encoding and a lenient decoder that stops at padding or NUL."""

from __future__ import annotations

import base64

_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_VALUES = {ch: index for index, ch in enumerate(_ALPHABET)}


def encode(data: bytes | bytearray | str) -> str:
    """Encode ``data`` as padded base64 text.

    Text input is encoded as UTF-8 first. Empty input is rejected.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    if not data:
        raise ValueError("cannot encode empty input")
    return base64.b64encode(bytes(data)).decode("ascii")


def decode(text: str | bytes | bytearray) -> bytes:
    """Decode base64 ``text``.

    Decoding stops at the first ``=`` or NUL character; missing padding is
    tolerated. Characters outside the alphabet raise ``ValueError``.
    """
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("latin-1")
    if not text:
        raise ValueError("cannot decode empty input")

    out = bytearray()
    carry = 0
    for position, ch in enumerate(text):
        if ch in ("=", "\0"):
            break
        value = _VALUES.get(ch)
        if value is None:
            raise ValueError(f"invalid base64 character {ch!r} at {position}")
        phase = position % 4
        if phase == 0:
            carry = (value << 2) & 0xFF
        elif phase == 1:
            out.append(carry | (value >> 4))
            carry = (value << 4) & 0xFF
        elif phase == 2:
            out.append(carry | (value >> 2))
            carry = (value << 6) & 0xFF
        else:
            out.append(carry | value)
    return bytes(out)