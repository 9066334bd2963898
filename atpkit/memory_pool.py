"""Pooled memory management with size-class caching of released pools."""

from __future__ import annotations

import threading
from bisect import bisect_left
from dataclasses import dataclass
from typing import Optional

from .policy import (
    POOL_ALIGN,
    POOL_CACHING_SIZE,
    POOL_NAME_SIZE,
    FactoryPolicy,
    align,
    default_policy,
)

# Size classes that a pool's initial size is rounded up to.
POOL_SIZES = (
    256, 512, 1024, 2048,
    4096, 8192, 12288, 16484,
    20480, 24567, 28672, 32768,
    40960, 49125, 57344, 65535,
)

# Bookkeeping bytes reserved at the start of a pool block and of each chunk.
_POOL_HEADER = 128
_CHUNK_HEADER = 40


class PoolError(RuntimeError):
    """Raised when a pool cannot satisfy a request or is not managed here."""


def _size_class(value: int) -> int:
    """Index of the smallest size class holding ``value``, or POOL_CACHING_SIZE."""
    return bisect_left(POOL_SIZES, value)


def adjusted_size(value: int) -> int:
    """Return the size a pool asked for with ``value`` bytes actually gets."""
    pos = _size_class(value)
    return POOL_SIZES[pos] if pos < POOL_CACHING_SIZE else value


@dataclass
class _Chunk:
    buffer: bytearray
    cursor: int
    size: int

    @property
    def free(self) -> int:
        return self.size - self.cursor

    def take(self, size: int) -> Optional[memoryview]:
        if size & (POOL_ALIGN - 1):
            size = align(size, POOL_ALIGN)
        if self.free < size:
            return None
        start = self.cursor
        self.cursor += size
        return memoryview(self.buffer)[start:start + size]


class Pool:
    """A named arena handing out aligned pieces of its chunks."""

    def __init__(self, factory: "PoolHelper", name: str, init_size: int, incr_size: int,
                 block: bytearray) -> None:
        self._factory = factory
        self.name = name[:POOL_NAME_SIZE]
        self.incr_size = incr_size
        self._capacity = init_size
        self._slot = POOL_CACHING_SIZE
        first = _Chunk(block, align(_POOL_HEADER + _CHUNK_HEADER, POOL_ALIGN), init_size)
        self._chunks: list[_Chunk] = [first]
        self._block = first

    def __repr__(self) -> str:
        return f"Pool(name={self.name!r}, capacity={self._capacity})"

    def capacity(self) -> int:
        """Total bytes held by the pool, headers included."""
        return self._capacity

    def alloc(self, size: int) -> memoryview:
        """Return a writable view of ``size`` bytes from the pool.

        Sizes are rounded up to the pool alignment. When no chunk has room a
        new chunk of a multiple of ``incr_size`` is added; with ``incr_size``
        of zero the pool cannot grow and ``PoolError`` is raised.
        """
        if size <= 0:
            raise ValueError(f"allocation size must be positive, got {size}")
        mem = self._chunks[0].take(size)
        if mem is not None:
            return mem
        for chunk in self._chunks:
            mem = chunk.take(size)
            if mem is not None:
                return mem

        if self.incr_size <= 0:
            raise PoolError(f"pool {self.name!r} has no room for {size} bytes")

        chunk_size = self.incr_size
        if self.incr_size < size + _CHUNK_HEADER:
            counts = (size + _CHUNK_HEADER + self.incr_size + POOL_ALIGN) // self.incr_size
            chunk_size = self.incr_size * counts

        chunk = self._add_chunk(chunk_size)
        mem = chunk.take(size)
        if mem is None:
            raise PoolError(f"pool {self.name!r} has no room for {size} bytes")
        return mem

    def _add_chunk(self, chunk_size: int) -> _Chunk:
        policy = self._factory.policy
        buffer = policy.chunk_alloc(self._factory, chunk_size)
        self._capacity += chunk_size
        chunk = _Chunk(buffer, align(_CHUNK_HEADER, POOL_ALIGN), chunk_size)
        self._chunks.insert(0, chunk)
        return chunk

    def _release(self) -> None:
        policy = self._factory.policy
        for chunk in self._chunks:
            if chunk is not self._block:
                policy.chunk_free(self._factory, chunk, chunk.size)
        policy.chunk_free(self._factory, self._block, self._block.size)
        self._chunks = []


class PoolHelper:
    """Creates pools and keeps released ones for reuse, up to ``max_capacity``."""

    def __init__(self, policy: Optional[FactoryPolicy] = None, max_capacity: int = 0) -> None:
        self.policy = policy if policy is not None else default_policy()
        self.max_capacity = max_capacity
        self._capacity = 0
        self._used_count = 0
        self._used_size = 0
        self._lock = threading.Lock()
        self._used: list[Pool] = []
        self._free: list[list[Pool]] = [[] for _ in range(POOL_CACHING_SIZE)]

    def __enter__(self) -> "PoolHelper":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.destroy()

    def on_chunk_alloc(self, factory: object, size: int) -> None:
        self._used_size += size

    def on_chunk_free(self, factory: object, size: int) -> None:
        self._used_size -= size

    def create_pool(self, name: str, init_size: int, incr_size: int = 0) -> Pool:
        """Return a pool, reusing a cached one of the same size class if any."""
        pos = _size_class(init_size)
        with self._lock:
            if pos == POOL_CACHING_SIZE or not self._free[pos]:
                if pos < POOL_CACHING_SIZE:
                    init_size = POOL_SIZES[pos]
                if init_size < _POOL_HEADER + _CHUNK_HEADER:
                    raise ValueError(f"initial size {init_size} is too small for a pool")
                block = self.policy.chunk_alloc(self, init_size)
                pool = Pool(self, name, init_size, incr_size, block)
            else:
                pool = self._free[pos].pop(0)
                pool.incr_size = incr_size
                pool.name = name[:POOL_NAME_SIZE]
                self._capacity = max(self._capacity - pool.capacity(), 0)

            pool._slot = pos
            self._used.insert(0, pool)
            self._used_count += 1
        return pool

    def release_pool(self, pool: Pool) -> None:
        """Give ``pool`` back: cache it for reuse or free its memory."""
        with self._lock:
            if not any(candidate is pool for candidate in self._used):
                raise PoolError(f"pool {pool.name!r} is not in use by this helper")
            self._used = [candidate for candidate in self._used if candidate is not pool]
            self._used_count -= 1

            pos = pool._slot
            cap = pool.capacity()
            if (pos == POOL_CACHING_SIZE
                    or cap + self._capacity > self.max_capacity
                    or cap > POOL_SIZES[-1]):
                pool._release()
                return

            self._free[pos].append(pool)
            self._capacity += cap

    def destroy(self) -> None:
        """Free every pool, in use or cached."""
        with self._lock:
            for pool in self._used:
                pool._release()
            self._used = []
            for cached in self._free:
                for pool in cached:
                    pool._release()
                cached.clear()
            self._used_count = 0
            self._capacity = 0

    def reference(self) -> int:
        """Number of pools currently in use."""
        return self._used_count

    def capacity(self) -> int:
        """Bytes held by cached, released pools."""
        return self._capacity

    def used_size(self) -> int:
        """Bytes currently obtained from the allocation policy."""
        return self._used_size