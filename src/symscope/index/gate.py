"""Reference index gate: shared read snapshots, exclusive rebuilds.

Readers enter through `with_read_snapshot`; a rebuild flips the gate into
the building state, waits for in-flight readers to drain and holds new
readers off until it finishes. Readers that arrive while a rebuild is
pending get `IndexNotReadyError` instead of blocking.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TypeVar

from symscope.core.errors import IndexNotReadyError

T = TypeVar("T")


class SnapshotGate:
    """Thread-safe `IndexGate` implementation."""

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._write_lock = threading.Lock()
        self._readers = 0
        self._building = False

    @property
    def active_readers(self) -> int:
        with self._cond:
            return self._readers

    def is_index_building(self) -> bool:
        with self._cond:
            return self._building

    def with_read_snapshot(self, fn: Callable[[], T]) -> T:
        with self._cond:
            if self._building:
                raise IndexNotReadyError("index rebuild started before the read snapshot")
            self._readers += 1
        try:
            return fn()
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def rebuilding(self) -> Iterator[None]:
        """Hold the index exclusively while it is mutated."""
        with self._write_lock:
            with self._cond:
                self._building = True
                self._cond.wait_for(lambda: self._readers == 0)
            try:
                yield
            finally:
                with self._cond:
                    self._building = False
                    self._cond.notify_all()
