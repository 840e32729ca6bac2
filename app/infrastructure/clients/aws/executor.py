"""Base AWS client utilities for infrastructure clients.

Provides `get_boto3_client` and `execute_aws_api_call` with the
OperationResult pattern. This module avoids reading settings at import
time and accepts configuration via parameters.
"""

import time
from typing import Any, Dict, List, Optional

import boto3  # type: ignore
from botocore.client import BaseClient  # type: ignore
from botocore.exceptions import BotoCoreError, ClientError  # type: ignore
import structlog

from infrastructure.operations.classifiers import classify_aws_error
from infrastructure.operations.result import OperationResult

logger = structlog.get_logger()


def get_boto3_client(
    service_name: str,
    session_config: Optional[Dict[str, Any]] = None,
    client_config: Optional[Dict[str, Any]] = None,
) -> BaseClient:
    """Create a boto3 client for the given service.

    Args:
        service_name: AWS service name (e.g., 'dynamodb')
        session_config: Optional boto3 session kwargs (e.g., region_name)
        client_config: Optional client kwargs (e.g., endpoint_url)

    Returns:
        botocore client instance
    """
    session = boto3.Session(**(session_config or {}))
    return session.client(service_name, **(client_config or {}))


def _calculate_retry_delay(attempt: int, backoff_factor: float = 0.5) -> float:
    return backoff_factor * (2**attempt)


def _call_api_once(
    service_name: str,
    method: str,
    keys: Optional[List[str]],
    session_config: Optional[Dict[str, Any]],
    client_config: Optional[Dict[str, Any]],
    force_paginate: bool,
    kwargs: Dict[str, Any],
) -> Any:
    client = get_boto3_client(
        service_name,
        session_config=session_config,
        client_config=client_config,
    )

    if force_paginate and client.can_paginate(method):
        paginator = client.get_paginator(method)
        results: List[Any] = []
        for page in paginator.paginate(**kwargs):
            for k in keys or []:
                if isinstance(page.get(k), list):
                    results.extend(page[k])
        return results

    return getattr(client, method)(**kwargs)


def execute_aws_api_call(
    service_name: str,
    method: str,
    keys: Optional[List[str]] = None,
    session_config: Optional[Dict[str, Any]] = None,
    client_config: Optional[Dict[str, Any]] = None,
    max_retries: int = 3,
    force_paginate: bool = False,
    backoff_factor: float = 0.5,
    **kwargs,
) -> OperationResult:
    """Execute an AWS API call with retries and standardized results.

    Transient errors (throttling, connection failures) are retried with
    exponential backoff; everything else is returned on the first failure.

    Args:
        service_name: AWS service name (e.g., 'dynamodb')
        method: Client method name (e.g., 'put_item')
        keys: Response keys collected across pages when paginating
        session_config: Optional boto3 session kwargs
        client_config: Optional client kwargs
        max_retries: Retry budget for transient errors
        force_paginate: Collect every page of a paginated operation
        backoff_factor: Base delay in seconds for exponential backoff
        **kwargs: Parameters passed to the boto3 method

    Returns:
        OperationResult with the raw response (or collected items) as data
    """
    result = OperationResult.permanent_error(message="unknown_error")

    for attempt in range(max_retries + 1):
        try:
            data = _call_api_once(
                service_name,
                method,
                keys,
                session_config,
                client_config,
                force_paginate,
                kwargs,
            )
            return OperationResult.success(
                data=data, message=f"{service_name}.{method} succeeded"
            )

        except (ClientError, BotoCoreError) as e:
            result = classify_aws_error(e)

            if (
                result.is_retryable
                and attempt < max_retries
            ):
                delay = _calculate_retry_delay(attempt, backoff_factor)
                logger.warning(
                    "aws_api_retry",
                    service=service_name,
                    method=method,
                    attempt=attempt + 1,
                    error=str(e),
                    delay=delay,
                )
                time.sleep(delay)
                continue

            logger.error(
                "aws_api_error_final",
                service=service_name,
                method=method,
                error=str(e),
                error_code=result.error_code,
            )
            return result

    return result
