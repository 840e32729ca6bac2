"""Unit tests for error classifiers.

Tests cover:
- requests HTTP error classification by status code
- Connection errors and timeouts
- AWS SDK error classification
- Retry-After header extraction
"""

from unittest.mock import Mock

import pytest
import requests
from botocore.exceptions import ClientError, EndpointConnectionError

from infrastructure.operations.classifiers import (
    classify_aws_error,
    classify_http_error,
)
from infrastructure.operations.status import OperationStatus


def _http_error(status_code, headers=None):
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.headers = headers or {}
    return requests.HTTPError(f"{status_code} error", response=response)


def _client_error(code):
    return ClientError({"Error": {"Code": code, "Message": code}}, "Operation")


@pytest.mark.unit
class TestClassifyHttpError:
    """Tests for classify_http_error()."""

    def test_rate_limit_with_retry_after(self):
        result = classify_http_error(_http_error(429, {"Retry-After": "120"}))

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert result.error_code == "RATE_LIMITED"
        assert result.retry_after == 120

    def test_rate_limit_defaults_to_sixty_seconds(self):
        result = classify_http_error(_http_error(429))

        assert result.retry_after == 60

    def test_rate_limit_with_unparseable_retry_after(self):
        result = classify_http_error(_http_error(429, {"Retry-After": "soon"}))

        assert result.retry_after == 60

    def test_unauthorized(self):
        result = classify_http_error(_http_error(401), provider="Clerk")

        assert result.status == OperationStatus.UNAUTHORIZED
        assert "Clerk" in result.message

    def test_forbidden_is_permanent(self):
        result = classify_http_error(_http_error(403))

        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == "FORBIDDEN"

    def test_not_found(self):
        result = classify_http_error(_http_error(404))

        assert result.status == OperationStatus.NOT_FOUND

    @pytest.mark.parametrize("status_code", [500, 502, 503])
    def test_server_errors_are_transient(self, status_code):
        result = classify_http_error(_http_error(status_code))

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert result.error_code == "SERVER_ERROR"

    def test_other_client_errors_are_permanent(self):
        result = classify_http_error(_http_error(422))

        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == "HTTP_ERROR"

    def test_connection_error_is_transient(self):
        result = classify_http_error(requests.ConnectionError("refused"))

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert result.error_code == "CONNECTION_ERROR"

    def test_timeout_is_transient(self):
        result = classify_http_error(requests.Timeout("read timed out"), "Twilio")

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert "Twilio" in result.message


@pytest.mark.unit
class TestClassifyAwsError:
    """Tests for classify_aws_error()."""

    @pytest.mark.parametrize(
        "code", ["ThrottlingException", "ProvisionedThroughputExceededException"]
    )
    def test_throttling_is_transient(self, code):
        result = classify_aws_error(_client_error(code))

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert result.error_code == "RATE_LIMITED"

    def test_access_denied_is_permanent(self):
        result = classify_aws_error(_client_error("AccessDeniedException"))

        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == "FORBIDDEN"

    def test_resource_not_found(self):
        result = classify_aws_error(_client_error("ResourceNotFoundException"))

        assert result.status == OperationStatus.NOT_FOUND

    def test_conditional_check_failed_is_permanent(self):
        result = classify_aws_error(_client_error("ConditionalCheckFailedException"))

        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == "CONDITION_FAILED"

    def test_validation_error_is_permanent(self):
        result = classify_aws_error(_client_error("ValidationException"))

        assert result.error_code == "INVALID_REQUEST"

    def test_unknown_client_error_is_transient(self):
        result = classify_aws_error(_client_error("InternalServerError"))

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert result.error_code == "AWS_CLIENT_ERROR"

    def test_botocore_connection_error_is_transient(self):
        exc = EndpointConnectionError(endpoint_url="http://localhost:8000")

        result = classify_aws_error(exc)

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert result.error_code == "CONNECTION_ERROR"
