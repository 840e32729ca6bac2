"""In-memory idempotency cache, used by tests and local runs."""

import threading
import time
from typing import Any, Dict, Optional, Tuple

from infrastructure.idempotency.cache import IdempotencyCache
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class InMemoryCache(IdempotencyCache):
    """Process-local idempotency cache with per-entry expiry.

    Entries are kept as ``(expires_at, response)`` tuples. Every write sweeps
    expired entries, so the dict never outgrows the live key set. Safe to
    share between worker threads.
    """

    def __init__(self, clock=time.monotonic):
        self._entries: Dict[str, Tuple[float, Dict[str, Any]]] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def _sweep(self, now: float) -> None:
        """Drop expired entries. Caller holds the lock."""
        expired = [
            key for key, (expires_at, _) in self._entries.items() if expires_at <= now
        ]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("idempotency_entries_expired", count=len(expired))

    def _live_entry(self, key: str, now: float) -> Optional[Dict[str, Any]]:
        entry = self._entries.get(key)
        if entry is None or entry[0] <= now:
            return None
        return entry[1]

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            response = self._live_entry(key, self._clock())
            return dict(response) if response is not None else None

    def set(self, key: str, response: Dict[str, Any], ttl_seconds: int) -> None:
        with self._lock:
            now = self._clock()
            self._sweep(now)
            self._entries[key] = (now + ttl_seconds, dict(response))

    def claim(self, key: str, response: Dict[str, Any], ttl_seconds: int) -> bool:
        with self._lock:
            now = self._clock()
            self._sweep(now)
            if key in self._entries:
                return False
            self._entries[key] = (now + ttl_seconds, dict(response))
            return True
