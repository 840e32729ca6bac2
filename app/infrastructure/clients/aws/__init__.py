"""Infrastructure AWS clients public API.

DI-friendly AWS clients sharing one SessionProvider for region and endpoint
configuration:

    from infrastructure.services import get_dynamodb_client

    dynamodb = get_dynamodb_client()
    result = dynamodb.scan("notification_rules")
    if result.is_success:
        rows = items_from_result(result)
"""

from infrastructure.clients.aws.dynamodb import (
    DynamoDBClient,
    deserialize_item,
    items_from_result,
    serialize_item,
)
from infrastructure.clients.aws.session_provider import SessionProvider

__all__ = [
    "SessionProvider",
    "DynamoDBClient",
    "deserialize_item",
    "items_from_result",
    "serialize_item",
]
