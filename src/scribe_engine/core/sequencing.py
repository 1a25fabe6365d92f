"""Last-result-wins gate for callers that re-run the engine on every edit.

The engine itself performs no concurrency control.  A UI layer that fires
a new computation whenever upstream input changes tags each request with
``next_sequence()`` and hands results back through ``offer()``; results
older than the last accepted one are discarded.
"""

from __future__ import annotations

import itertools
import logging
import threading
from typing import Generic, Optional, TypeVar

log = logging.getLogger(__name__)

T = TypeVar("T")


class LatestResultGate(Generic[T]):
    """Accepts only results whose sequence number beats the last accepted."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._lock = threading.Lock()
        self._accepted_seq = 0
        self._latest: Optional[T] = None

    def next_sequence(self) -> int:
        with self._lock:
            return next(self._counter)

    def offer(self, seq: int, result: T) -> bool:
        """Store ``result`` if ``seq`` is newer than the last accepted one."""
        with self._lock:
            if seq <= self._accepted_seq:
                log.debug("Discarding stale result seq=%d (latest=%d)", seq, self._accepted_seq)
                return False
            self._accepted_seq = seq
            self._latest = result
            return True

    @property
    def latest(self) -> Optional[T]:
        with self._lock:
            return self._latest

    @property
    def accepted_sequence(self) -> int:
        with self._lock:
            return self._accepted_seq
