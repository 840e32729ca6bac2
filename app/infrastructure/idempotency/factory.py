"""Idempotency cache factory."""

from typing import Optional

from infrastructure.configuration import get_settings
from infrastructure.idempotency.cache import IdempotencyCache
from infrastructure.idempotency.dynamodb import DynamoDBCache
from infrastructure.logging import get_module_logger

logger = get_module_logger()

# Singleton cache instance
_cache_instance: Optional[IdempotencyCache] = None


def get_cache() -> IdempotencyCache:
    """Get the process-wide idempotency cache singleton.

    Returns:
        DynamoDBCache on ``settings.notifications.IDEMPOTENCY_TABLE``, shared
        by every notifier in the process.
    """
    global _cache_instance

    if _cache_instance is not None:
        return _cache_instance

    from infrastructure.services.providers import get_dynamodb_client

    table_name = get_settings().notifications.IDEMPOTENCY_TABLE
    _cache_instance = DynamoDBCache(get_dynamodb_client(), table_name)
    logger.info(
        "initialized_idempotency_cache", backend="dynamodb", table_name=table_name
    )

    return _cache_instance


def reset_cache() -> None:
    """Reset the cache singleton (for testing only)."""
    global _cache_instance
    _cache_instance = None
    logger.debug("reset_cache_singleton")
