"""Chunk allocation policies and alignment helpers for memory pools."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

POOL_NAME_SIZE = 64
POOL_ALIGN = 8
POOL_START = 5
POOL_CACHING_SIZE = 16


def align(size: int, alignment: int = POOL_ALIGN) -> int:
    """Round ``size`` up to the next multiple of ``alignment`` (a power of two)."""
    if alignment <= 0 or alignment & (alignment - 1):
        raise ValueError(f"alignment must be a power of two, got {alignment}")
    return size + (-size & (alignment - 1))


@dataclass(frozen=True)
class FactoryPolicy:
    """How a pool factory obtains and returns chunks of memory.

    The factory may define ``on_chunk_alloc(factory, size)`` and
    ``on_chunk_free(factory, size)`` hooks, which are called on each operation.
    """

    name: str
    allocator: Callable[[int], bytearray] = bytearray

    def chunk_alloc(self, factory: Any, size: int) -> bytearray:
        """Allocate a zero-filled chunk of ``size`` bytes."""
        if factory is None:
            raise ValueError("factory is required")
        if size < 0:
            raise ValueError(f"chunk size must not be negative, got {size}")
        hook = getattr(factory, "on_chunk_alloc", None)
        if hook is not None:
            hook(factory, size)
        return self.allocator(size)

    def chunk_free(self, factory: Any, chunk: Any, size: int) -> None:
        """Return a chunk of ``size`` bytes to the policy."""
        if factory is None:
            raise ValueError("factory is required")
        hook = getattr(factory, "on_chunk_free", None)
        if hook is not None:
            hook(factory, size)
        if isinstance(chunk, bytearray):
            chunk.clear()


_DEFAULT_POLICY = FactoryPolicy("default", bytearray)
_NEW_POLICY = FactoryPolicy("new", bytearray)


def default_policy() -> FactoryPolicy:
    """Return the default allocation policy."""
    return _DEFAULT_POLICY


def new_policy() -> FactoryPolicy:
    """Return the alternative allocation policy."""
    return _NEW_POLICY