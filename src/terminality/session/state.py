"""Edge-triggered resize flag shared between a signal handler and the session."""

from __future__ import annotations

import itertools
import threading


class ResizeFlag:
    """Reports each window-resize notification exactly once.

    ``set()`` runs inside a signal handler, so it never takes a lock (the
    main thread may already hold it). It bumps a generation counter instead,
    and ``test_and_clear()`` compares that against the last generation a
    reader saw. A ``set()`` landing between the read and the store bumps the
    counter past what was stored and is reported by the next call.
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._generation = 0
        self._seen = 0
        self._lock = threading.Lock()

    def set(self) -> None:
        self._generation = next(self._counter)

    def test_and_clear(self) -> bool:
        """Return True if a resize arrived since the previous call."""
        with self._lock:
            current = self._generation
            changed = current != self._seen
            self._seen = current
            return changed

    @property
    def is_set(self) -> bool:
        """Peek at the flag without clearing it."""
        return self._generation != self._seen
