"""Classification of provider exceptions into OperationResult.

Clerk and Twilio are reached through requests, DynamoDB through botocore.
Each client catches the provider exception and returns the classified
result, so nothing raises into the notification pipeline.

Usage:
    try:
        response = self._session.get(url, timeout=self._timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        return classify_http_error(exc, provider="Clerk")
"""

from typing import Mapping

import requests
from botocore.exceptions import ClientError

from infrastructure.operations.result import OperationResult

DEFAULT_RETRY_AFTER_SECONDS = 60

_AWS_THROTTLING_CODES = frozenset(
    {"ThrottlingException", "ProvisionedThroughputExceededException"}
)
_AWS_INVALID_REQUEST_CODES = frozenset({"ValidationException", "InvalidParameterException"})


def _retry_after(headers: Mapping[str, str]) -> int:
    try:
        return int(headers.get("Retry-After", DEFAULT_RETRY_AFTER_SECONDS))
    except (TypeError, ValueError):
        return DEFAULT_RETRY_AFTER_SECONDS


def classify_http_error(exc: Exception, provider: str = "HTTP") -> OperationResult:
    """Classify an exception raised while calling an HTTP API.

    Connection errors and timeouts, 429 and 5xx responses are transient.
    401 is UNAUTHORIZED, 404 is NOT_FOUND, any other 4xx is permanent.

    Args:
        exc: Exception raised by requests
        provider: Name used in messages ("Clerk", "Twilio")
    """
    response = getattr(exc, "response", None)
    if not isinstance(exc, requests.HTTPError) or response is None:
        return OperationResult.transient_error(
            f"{provider} connection error: {type(exc).__name__}: {exc}",
            error_code="CONNECTION_ERROR",
        )

    code = response.status_code
    if code == 429:
        return OperationResult.rate_limited(
            f"{provider} API rate limited", retry_after=_retry_after(response.headers)
        )
    if code == 401:
        return OperationResult.unauthorized(f"{provider} API authentication failed")
    if code == 403:
        return OperationResult.permanent_error(
            f"{provider} API authorization denied", error_code="FORBIDDEN"
        )
    if code == 404:
        return OperationResult.not_found(f"{provider} resource not found")
    if code is not None and 500 <= code < 600:
        return OperationResult.transient_error(
            f"{provider} API server error ({code})", error_code="SERVER_ERROR"
        )
    return OperationResult.permanent_error(
        f"{provider} API client error ({code}): {exc}", error_code="HTTP_ERROR"
    )


def classify_aws_error(exc: Exception) -> OperationResult:
    """Classify a botocore exception.

    Unknown AWS errors are treated as transient, as the AWS SDKs do.
    A failed ``ConditionExpression`` (duplicate rule id) is permanent with
    error code ``CONDITION_FAILED``.
    """
    if not isinstance(exc, ClientError):
        return OperationResult.transient_error(
            f"AWS connection error: {type(exc).__name__}: {exc}",
            error_code="CONNECTION_ERROR",
        )

    code = (exc.response or {}).get("Error", {}).get("Code", "Unknown")

    if code in _AWS_THROTTLING_CODES:
        return OperationResult.rate_limited("AWS API throttled")
    if code == "AccessDeniedException":
        return OperationResult.permanent_error(
            "AWS API access denied", error_code="FORBIDDEN"
        )
    if code == "ResourceNotFoundException":
        return OperationResult.not_found("AWS resource not found")
    if code == "ConditionalCheckFailedException":
        return OperationResult.permanent_error(
            "AWS conditional check failed", error_code="CONDITION_FAILED"
        )
    if code in _AWS_INVALID_REQUEST_CODES:
        return OperationResult.permanent_error(
            f"AWS validation error: {code}", error_code="INVALID_REQUEST"
        )
    return OperationResult.transient_error(
        f"AWS client error: {code}", error_code="AWS_CLIENT_ERROR"
    )
