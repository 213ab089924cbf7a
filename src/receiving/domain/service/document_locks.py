"""Per-document mutual exclusion.

Submissions for the same document read, modify and write the same
ConferenceLine, so they must not interleave.  Different documents never
share a lock and proceed concurrently.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class DocumentLocks:

    def __init__(self) -> None:
        self._registry_lock = threading.Lock()
        self._locks: dict[int, threading.Lock] = {}

    @contextmanager
    def hold(self, document_id: int) -> Iterator[None]:
        """Hold the lock of *document_id* for the duration of the block."""
        lock = self._lock_for(document_id)
        with lock:
            yield

    def _lock_for(self, document_id: int) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(document_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[document_id] = lock
            return lock
