"""JSON encoding and decoding of table values."""

from __future__ import annotations

import json
from typing import Any


class CodecError(ValueError):
    """Raised when text cannot be decoded as JSON."""


def encode(table: Any) -> str:
    """Serialise ``table`` as indented JSON with sorted keys.

    ``None`` (JSON null) gives an empty string.
    """
    if table is None:
        return ""
    return json.dumps(
        table,
        indent="\t",
        separators=(",", " : "),
        sort_keys=True,
        ensure_ascii=True,
        allow_nan=False,
    )


def _reject_constant(name: str) -> Any:
    raise CodecError(f"invalid JSON constant {name}")


def decode(text: str | bytes) -> Any:
    """Parse JSON ``text`` into Python values, raising ``CodecError`` on failure."""
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except CodecError:
        raise
    except (ValueError, TypeError) as exc:
        raise CodecError(str(exc)) from exc