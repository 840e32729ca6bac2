"""Outcome categories of integration calls."""

from enum import Enum


class OperationStatus(Enum):
    """Outcome category of an OperationResult.

    Only TRANSIENT_ERROR is retried by the AWS call executor. NOT_FOUND is
    how an unknown identity-provider user is reported.
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
