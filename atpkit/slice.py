"""A lightweight view over a run of bytes."""

from __future__ import annotations


class Slice:
    """A sized view of bytes that compares by content."""

    __slots__ = ("_data",)

    def __init__(self, data: bytes | bytearray | str = b"", size: int | None = None) -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        raw = bytes(data)
        if size is None:
            size = len(raw)
        if size < 0 or size > len(raw):
            raise ValueError(f"size {size} out of range for {len(raw)} bytes")
        self._data = raw[:size]

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def empty(self) -> bool:
        return not self._data

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        return bool(self._data)

    def __getitem__(self, pos: int) -> int:
        if not 0 <= pos < len(self._data):
            raise IndexError(f"slice index {pos} out of range")
        return self._data[pos]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Slice):
            return self._data == other._data
        if isinstance(other, (bytes, bytearray)):
            return self._data == bytes(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._data)

    def __bytes__(self) -> bytes:
        return self._data

    def __repr__(self) -> str:
        return f"Slice({self._data!r})"

    def clear(self) -> None:
        """Make the slice empty."""
        self._data = b""

    def to_string(self) -> str:
        """Return the contents decoded as UTF-8."""
        return self._data.decode("utf-8")