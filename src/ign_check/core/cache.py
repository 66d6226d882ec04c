from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass
class TTLCache(Generic[T]):
    """Small in-memory cache with per-entry expiry and a size cap.

    Every ``set`` purges expired entries, then evicts the oldest writes while
    the cache holds more than ``max_entries``. Safe to share between the
    worker threads FastAPI runs sync handlers in.
    """

    default_ttl_s: float = 300.0
    max_entries: int = 10_000

    _monotonic: Any = field(default=time.monotonic, repr=False)
    # Insertion order is write order; ``set`` re-inserts so the oldest write comes first.
    _entries: dict[str, tuple[T, float]] = field(default_factory=dict, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def set(self, key: str, value: T, ttl_s: float | None = None) -> None:
        ttl = self.default_ttl_s if ttl_s is None else ttl_s
        now = float(self._monotonic())
        with self._lock:
            self._purge_expired(now)
            self._entries.pop(key, None)
            self._entries[key] = (value, now + ttl)
            while len(self._entries) > self.max_entries:
                del self._entries[next(iter(self._entries))]

    def get(self, key: str) -> T | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires = entry
            if float(self._monotonic()) > expires:
                del self._entries[key]
                return None
            return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _purge_expired(self, now: float) -> None:
        expired = [k for k, (_, expires) in self._entries.items() if now > expires]
        for k in expired:
            del self._entries[k]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
