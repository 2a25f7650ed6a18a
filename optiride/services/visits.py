"""Page visit counter.

Held by the web application for its lifetime; nothing is persisted.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field


@dataclass
class VisitCounter:
    """Thread-safe in-memory visit counter."""

    _count: int = field(default=0, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def count(self) -> int:
        with self._lock:
            return self._count

    def increment(self) -> int:
        """Record one visit and return the new total."""
        with self._lock:
            self._count += 1
            return self._count
