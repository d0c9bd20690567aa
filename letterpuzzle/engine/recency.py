"""Bounded memory of recently used seed words, kept per difficulty."""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Dict, List, Optional

from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class RecencyCache:
    """Per-difficulty FIFO set of seeds that should not be reused soon.

    Lifecycle: ``RecencyCache(capacity)`` starts empty, ``record`` adds a
    seed and evicts the oldest one past ``capacity``, ``is_fresh`` tests
    membership and ``reset`` clears one difficulty or all of them. Every
    method takes the internal lock, so one instance can be shared between
    threads.
    """

    def __init__(self, capacity: int = 50) -> None:
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._lock = threading.Lock()
        self._seen: Dict[int, "OrderedDict[str, None]"] = {}

    def record(self, difficulty: int, seed: str) -> None:
        with self._lock:
            bucket = self._seen.setdefault(difficulty, OrderedDict())
            bucket.pop(seed, None)
            bucket[seed] = None
            while len(bucket) > self.capacity:
                evicted, _ = bucket.popitem(last=False)
                LOGGER.debug("Recency cache evicted %s (difficulty %s)", evicted, difficulty)

    def is_fresh(self, difficulty: int, seed: str) -> bool:
        with self._lock:
            return seed not in self._seen.get(difficulty, ())

    def reset(self, difficulty: Optional[int] = None) -> None:
        with self._lock:
            if difficulty is None:
                self._seen.clear()
            else:
                self._seen.pop(difficulty, None)

    def size(self, difficulty: int) -> int:
        with self._lock:
            return len(self._seen.get(difficulty, ()))

    def snapshot(self, difficulty: int) -> List[str]:
        """Recorded seeds for ``difficulty``, oldest first."""

        with self._lock:
            return list(self._seen.get(difficulty, ()))
