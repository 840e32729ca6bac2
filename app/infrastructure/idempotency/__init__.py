"""Infrastructure idempotency cache.

Remembers completed operations so repeated triggers can be skipped.

Usage:

    from infrastructure.idempotency import IdempotencyKeyBuilder, get_cache

    cache = get_cache()
    key = IdempotencyKeyBuilder("incident_notifications").build(
        "notify_incident", incident_id=42
    )

    if not cache.claim(key, {"incident_id": 42}, ttl_seconds=3600):
        return

    dispatch(...)
"""

from infrastructure.idempotency.cache import IdempotencyCache
from infrastructure.idempotency.dynamodb import DynamoDBCache
from infrastructure.idempotency.factory import get_cache, reset_cache
from infrastructure.idempotency.key_builder import IdempotencyKeyBuilder
from infrastructure.idempotency.memory import InMemoryCache

__all__ = [
    "IdempotencyCache",
    "DynamoDBCache",
    "get_cache",
    "reset_cache",
    "InMemoryCache",
    "IdempotencyKeyBuilder",
]
