"""Idempotency cache interface."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class IdempotencyCache(ABC):
    """Remembers which triggers already ran, for a limited time.

    Values are small JSON-like dicts describing the first run (for the
    incident notifier: the incident id and code).
    """

    @abstractmethod
    def get(self, key: str) -> Optional[Dict[str, Any]]:
        """Return the value stored under ``key``, or None if absent or expired."""

    @abstractmethod
    def set(self, key: str, response: Dict[str, Any], ttl_seconds: int) -> None:
        """Store ``response`` under ``key`` for ``ttl_seconds``."""

    @abstractmethod
    def claim(self, key: str, response: Dict[str, Any], ttl_seconds: int) -> bool:
        """Atomically store ``response`` unless a live entry exists.

        Returns:
            True if this caller stored the entry, False if it was already
            claimed
        """
