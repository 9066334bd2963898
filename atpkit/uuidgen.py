"""Random UUID generation, strict parsing and comparison."""

from __future__ import annotations

import re
import uuid
from typing import Union

_UUID_TEXT = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)

UUIDLike = Union[uuid.UUID, str]


def _as_uuid(value: UUIDLike) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    if not _UUID_TEXT.fullmatch(value):
        raise ValueError(f"malformed UUID {value!r}")
    return uuid.UUID(value)


class UUIDGenerator:
    """Generates random (version 4) UUIDs as lower-case text."""

    def generate(self) -> str:
        """Return a new random UUID in canonical lower-case form."""
        return str(uuid.uuid4()).lower()

    def parse(self, text: str) -> uuid.UUID:
        """Parse the canonical 36-character form; anything else raises ``ValueError``."""
        return _as_uuid(text)

    def compare(self, left: UUIDLike, right: UUIDLike) -> int:
        """Compare two UUIDs byte-wise: -1, 0 or 1."""
        a = _as_uuid(left).bytes
        b = _as_uuid(right).bytes
        return (a > b) - (a < b)

    def is_null(self, value: UUIDLike) -> bool:
        """Whether ``value`` is the all-zero UUID."""
        return _as_uuid(value).int == 0