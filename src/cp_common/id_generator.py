"""Monotonic card id allocation for the in-memory card store.

PostgreSQL deployments use the ``card_id_seq`` sequence instead; both give
ids that are unique, strictly increasing and never reused (even after delete).
"""

import threading


class MonotonicIdAllocator:
    """Thread-safe counter. First id handed out is ``start``."""

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError("start must be >= 0")
        self._next = start
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            allocated = self._next
            self._next += 1
            return allocated

    def peek(self) -> int:
        """The id the next call to next_id() will return."""
        with self._lock:
            return self._next
