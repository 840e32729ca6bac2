"""DynamoDB idempotency cache implementation."""

import json
import time
from typing import Any, Dict, Optional

from infrastructure.clients.aws import DynamoDBClient
from infrastructure.idempotency.cache import IdempotencyCache
from infrastructure.logging import get_module_logger

logger = get_module_logger()

PARTITION_KEY = "idempotency_key"
OPERATION_TYPE = "incident_notification"


class DynamoDBCache(IdempotencyCache):
    """DynamoDB-backed idempotency cache.

    One item per key:
    - PK: idempotency_key (string)
    - Attributes: response_json, ttl (epoch seconds, for DynamoDB TTL),
      created_at, operation_type

    Shared by every process writing to the table, so a duplicate trigger on
    another instance is still caught. DynamoDB removes expired items lazily,
    so reads and claims compare ``ttl`` against the clock themselves.
    """

    def __init__(self, client: DynamoDBClient, table_name: str, clock=time.time):
        self.client = client
        self.table_name = table_name
        self._clock = clock
        logger.info("initialized_dynamodb_idempotency_cache", table_name=table_name)

    def _item(self, key: str, response: Dict[str, Any], ttl_seconds: int) -> Dict:
        now = int(self._clock())
        return {
            PARTITION_KEY: {"S": key},
            "response_json": {"S": json.dumps(response)},
            "ttl": {"N": str(now + ttl_seconds)},
            "created_at": {"N": str(now)},
            "operation_type": {"S": OPERATION_TYPE},
        }

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        result = self.client.get_item(
            self.table_name,
            Key={PARTITION_KEY: {"S": key}},
            ConsistentRead=True,
        )
        if not result.is_success:
            logger.warning(
                "idempotency_cache_get_failed", key=key, error=result.message
            )
            return None

        item = (result.data or {}).get("Item")
        if not item:
            logger.debug("idempotency_cache_miss", key=key)
            return None

        if int(item.get("ttl", {}).get("N", "0")) <= self._clock():
            logger.debug("idempotency_cache_expired", key=key)
            return None

        try:
            response = json.loads(item["response_json"]["S"])
        except (KeyError, TypeError, ValueError) as e:
            logger.error("idempotency_cache_corrupt_item", key=key, error=str(e))
            return None

        logger.debug("idempotency_cache_hit", key=key)
        return response

    def set(self, key: str, response: Dict[str, Any], ttl_seconds: int) -> None:
        result = self.client.put_item(
            self.table_name, Item=self._item(key, response, ttl_seconds)
        )
        if result.is_success:
            logger.debug("idempotency_cache_set_success", key=key, ttl_seconds=ttl_seconds)
        else:
            logger.error("idempotency_cache_set_failed", key=key, error=result.message)

    def claim(self, key: str, response: Dict[str, Any], ttl_seconds: int) -> bool:
        """Conditional put that only succeeds when no live item holds ``key``.

        An unreachable table is logged and treated as a successful claim:
        a duplicate notification is preferred over a lost one.
        """
        result = self.client.put_item(
            self.table_name,
            Item=self._item(key, response, ttl_seconds),
            ConditionExpression=(
                f"attribute_not_exists({PARTITION_KEY}) OR #ttl <= :now"
            ),
            ExpressionAttributeNames={"#ttl": "ttl"},
            ExpressionAttributeValues={":now": {"N": str(int(self._clock()))}},
        )
        if result.is_success:
            logger.debug("idempotency_cache_claimed", key=key, ttl_seconds=ttl_seconds)
            return True

        if result.error_code == "CONDITION_FAILED":
            logger.info("idempotency_cache_already_claimed", key=key)
            return False

        logger.error(
            "idempotency_cache_claim_failed",
            key=key,
            error=result.message,
            error_code=result.error_code,
        )
        return True
