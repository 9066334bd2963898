"""A small synchronous Redis data-access layer with MULTI/EXEC support."""

from __future__ import annotations

from itertools import chain
from typing import Any, Optional

import redis


class RedisError(RuntimeError):
    """Raised when a Redis command fails or returns an unexpected reply."""


def connect(host: str, port: int) -> "RedisStore":
    """Open a connection to the Redis server at ``host``:``port``.

    The connection is checked with a PING; failure raises ``RedisError``.
    """
    client = redis.Redis(host=host, port=port)
    try:
        client.ping()
    except redis.RedisError as exc:
        client.close()
        raise RedisError(f"cannot connect to {host}:{port}: {exc}") from exc
    return RedisStore(client)


class RedisStore:
    """Wraps a Redis client with checked commands.

    Between ``multi()`` and ``execute()`` write commands are queued rather
    than run; reading commands are refused there, since their reply would
    only be the queued status.
    """

    def __init__(self, client: Any) -> None:
        if client is None:
            raise ValueError("a Redis client is required")
        self._client = client
        self._pipe: Optional[Any] = None
        self._queued = 0

    def __enter__(self) -> "RedisStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def in_transaction(self) -> bool:
        return self._pipe is not None

    def _call(self, method: str, *args: Any) -> Any:
        target = self._pipe if self._pipe is not None else self._client
        try:
            result = getattr(target, method)(*args)
        except redis.RedisError as exc:
            raise RedisError(f"{method.upper()} failed: {exc}") from exc
        if self._pipe is not None:
            self._queued += 1
        return result

    def _read(self, method: str, *args: Any) -> Any:
        if self._pipe is not None:
            raise RedisError(f"{method.upper()} cannot be read inside a transaction")
        return self._call(method, *args)

    def close(self) -> None:
        """Close the underlying connection, discarding any open transaction."""
        if self._pipe is not None:
            self._pipe.reset()
            self._pipe = None
            self._queued = 0
        self._client.close()

    def expire(self, key: str, seconds: int) -> None:
        """Set a time to live on ``key``; raises if the key does not exist."""
        result = self._call("expire", key, seconds)
        if self._pipe is None and not result:
            raise RedisError(f"cannot set expiry on missing key {key!r}")

    def multi(self) -> None:
        """Start a transaction."""
        if self._pipe is not None:
            raise RedisError("MULTI calls can not be nested")
        try:
            self._pipe = self._client.pipeline(transaction=True)
        except redis.RedisError as exc:
            raise RedisError(f"MULTI failed: {exc}") from exc
        self._queued = 0

    def discard(self) -> None:
        """Abandon the open transaction and its queued commands."""
        if self._pipe is None:
            raise RedisError("DISCARD without MULTI")
        self._pipe.reset()
        self._pipe = None
        self._queued = 0

    def execute(self) -> list:
        """Run the queued commands and return their replies.

        A transaction with no queued command is an error.
        """
        if self._pipe is None:
            raise RedisError("EXEC without MULTI")
        pipe, queued = self._pipe, self._queued
        self._pipe = None
        self._queued = 0
        if queued == 0:
            pipe.reset()
            raise RedisError("EXEC with no queued commands")
        try:
            return list(pipe.execute())
        except redis.RedisError as exc:
            raise RedisError(f"EXEC failed: {exc}") from exc

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``."""
        result = self._call("set", key, value)
        if self._pipe is None and not result:
            raise RedisError(f"SET {key!r} was not acknowledged")

    def get(self, key: str) -> bytes:
        """Return the value of ``key``; raises if it is missing."""
        value = self._read("get", key)
        if value is None:
            raise RedisError(f"no value stored under {key!r}")
        return value

    def delete(self, key: str) -> None:
        """Delete ``key``; raises unless exactly one key was removed."""
        removed = self._call("delete", key)
        if self._pipe is None and removed != 1:
            raise RedisError(f"cannot delete missing key {key!r}")

    def hset(self, key: str, field: str, value: Any) -> None:
        """Set ``field`` of the hash ``key``."""
        self._call("hset", key, field, value)

    def hget(self, key: str, field: str) -> Optional[bytes]:
        """Return ``field`` of the hash ``key``, or ``None`` if absent."""
        return self._read("hget", key, field)

    def hdel(self, key: str, field: str) -> None:
        """Remove ``field`` from the hash ``key``; a missing field is no error."""
        self._call("hdel", key, field)

    def hgetall(self, key: str) -> list:
        """Return the hash as a flat list: field, value, field, value, ..."""
        mapping = self._read("hgetall", key) or {}
        return list(chain.from_iterable(mapping.items()))

    def hgetall_map(self, key: str) -> dict:
        """Return the hash as a dictionary."""
        return dict(self._read("hgetall", key) or {})

    def lpush(self, key: str, value: Any) -> Optional[int]:
        """Push ``value`` at the head of list ``key``; returns the new length."""
        return self._call("lpush", key, value)

    def lpop(self, key: str) -> bytes:
        """Pop from the head of list ``key``; raises if the list is empty."""
        value = self._read("lpop", key)
        if value is None:
            raise RedisError(f"list {key!r} is empty")
        return value

    def rpush(self, key: str, value: Any) -> Optional[int]:
        """Push ``value`` at the tail of list ``key``; returns the new length."""
        return self._call("rpush", key, value)

    def rpop(self, key: str) -> bytes:
        """Pop from the tail of list ``key``; raises if the list is empty."""
        value = self._read("rpop", key)
        if value is None:
            raise RedisError(f"list {key!r} is empty")
        return value

    def lrem(self, key: str, count: int, value: Any) -> Optional[int]:
        """Remove occurrences of ``value`` from list ``key``; returns how many."""
        return self._call("lrem", key, count, value)

    def lrange(self, key: str, begin: int, end: int) -> list:
        """Return elements ``begin`` to ``end`` (inclusive) of list ``key``."""
        return list(self._read("lrange", key, begin, end) or [])