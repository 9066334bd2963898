"""Lazily initialised per-thread values with cleanup on thread exit."""

from __future__ import annotations

import threading
import weakref
from typing import Any, Callable, Optional


class _Slot:
    __slots__ = ("box", "finalizer", "__weakref__")

    def __init__(self) -> None:
        self.box: list = [None]
        self.finalizer: Optional[weakref.finalize] = None


def _run_cleanup(cleanup: Callable[[Any], None], box: list) -> None:
    value = box[0]
    if value is not None:
        cleanup(value)


class ThreadStorage:
    """Holds one value per thread, created on first use.

    ``init`` builds the value; if it raises, nothing is stored. ``cleanup``
    is called with the value when the owning thread exits or on ``clear``.
    """

    def __init__(
        self,
        init: Optional[Callable[[], Any]] = dict,
        cleanup: Optional[Callable[[Any], None]] = None,
    ) -> None:
        self._init = init
        self._cleanup = cleanup
        self._local = threading.local()

    def _slot(self) -> Optional[_Slot]:
        return getattr(self._local, "slot", None)

    def _install(self, value: Any) -> None:
        slot = _Slot()
        slot.box[0] = value
        if self._cleanup is not None:
            slot.finalizer = weakref.finalize(slot, _run_cleanup, self._cleanup, slot.box)
        self._local.slot = slot

    def get(self) -> Any:
        """Return this thread's value, creating it on first call."""
        slot = self._slot()
        if slot is not None and slot.box[0] is not None:
            return slot.box[0]
        value = self._init() if self._init is not None else None
        if slot is None:
            self._install(value)
        else:
            slot.box[0] = value
        return value

    def peek(self) -> Any:
        """Return this thread's value without creating it, or ``None``."""
        slot = self._slot()
        return None if slot is None else slot.box[0]

    def set(self, value: Any) -> None:
        """Replace this thread's value without cleaning up the old one."""
        slot = self._slot()
        if slot is None:
            self._install(value)
        else:
            slot.box[0] = value

    def clear(self) -> None:
        """Drop this thread's value, running cleanup on it."""
        slot = self._slot()
        if slot is None:
            return
        del self._local.slot
        if slot.finalizer is not None:
            slot.finalizer()