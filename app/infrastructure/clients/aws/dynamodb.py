"""DynamoDB client for AWS operations.

Provides type-safe access to DynamoDB operations (get_item, put_item, query,
scan) with consistent error handling and OperationResult return types.
Items travel in the low-level attribute-value format; callers convert with
``serialize_item`` / ``deserialize_item``.
"""

from typing import Any, Dict, List

import structlog
from boto3.dynamodb.types import TypeDeserializer, TypeSerializer

from infrastructure.clients.aws.executor import execute_aws_api_call
from infrastructure.clients.aws.session_provider import SessionProvider
from infrastructure.operations.result import OperationResult

logger = structlog.get_logger()

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def serialize_item(item: Dict[str, Any]) -> Dict[str, Any]:
    """Convert a plain dict into DynamoDB attribute values.

    None values are dropped rather than stored as NULL attributes.
    """
    return {
        key: _serializer.serialize(value)
        for key, value in item.items()
        if value is not None
    }


def deserialize_item(item: Dict[str, Any]) -> Dict[str, Any]:
    """Convert DynamoDB attribute values into a plain dict."""
    return {key: _deserializer.deserialize(value) for key, value in item.items()}


class DynamoDBClient:
    """Client for DynamoDB operations.

    All methods return OperationResult for consistent error handling and
    downstream processing.

    Args:
        session_provider: SessionProvider instance for region/endpoint config
    """

    def __init__(self, session_provider: SessionProvider) -> None:
        self._session_provider = session_provider
        self._logger = logger.bind(component="dynamodb_client")

    def get_item(
        self, table_name: str, Key: Dict[str, Any], **kwargs
    ) -> OperationResult:
        """Get an item from DynamoDB.

        Args:
            table_name: Name of the DynamoDB table
            Key: Primary key of the item (e.g., {"user_id": {"S": "user_1"}})
            **kwargs: Additional DynamoDB get_item parameters

        Returns:
            OperationResult with the raw get_item response or error
        """
        return execute_aws_api_call(
            "dynamodb",
            "get_item",
            TableName=table_name,
            Key=Key,
            **self._session_provider.build_client_kwargs(),
            **kwargs,
        )

    def put_item(
        self, table_name: str, Item: Dict[str, Any], **kwargs
    ) -> OperationResult:
        """Put an item into DynamoDB.

        Args:
            table_name: Name of the DynamoDB table
            Item: Item to store (DynamoDB format with type descriptors)
            **kwargs: Additional DynamoDB put_item parameters

        Returns:
            OperationResult with status
        """
        return execute_aws_api_call(
            "dynamodb",
            "put_item",
            TableName=table_name,
            Item=Item,
            **self._session_provider.build_client_kwargs(),
            **kwargs,
        )

    def query(
        self, table_name: str, KeyConditionExpression: str, **kwargs
    ) -> OperationResult:
        """Query every page of items matching a key condition.

        Returns:
            OperationResult with the list of raw items or error
        """
        return execute_aws_api_call(
            "dynamodb",
            "query",
            keys=["Items"],
            force_paginate=True,
            TableName=table_name,
            KeyConditionExpression=KeyConditionExpression,
            **self._session_provider.build_client_kwargs(),
            **kwargs,
        )

    def scan(self, table_name: str, **kwargs) -> OperationResult:
        """Scan every page of a DynamoDB table.

        Returns:
            OperationResult with the list of raw items or error
        """
        return execute_aws_api_call(
            "dynamodb",
            "scan",
            keys=["Items"],
            force_paginate=True,
            TableName=table_name,
            **self._session_provider.build_client_kwargs(),
            **kwargs,
        )

    def healthcheck(self) -> OperationResult:
        """Lightweight health check performing a cheap `list_tables` call."""
        return execute_aws_api_call(
            "dynamodb",
            "list_tables",
            max_retries=0,
            Limit=1,
            **self._session_provider.build_client_kwargs(),
        )


def items_from_result(result: OperationResult) -> List[Dict[str, Any]]:
    """Deserialize the items carried by a successful query/scan result."""
    if not result.is_success or not result.data:
        return []
    return [deserialize_item(item) for item in result.data]
