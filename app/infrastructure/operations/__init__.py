"""Result types for integration calls and the classifiers producing them."""

from infrastructure.operations.classifiers import (
    classify_aws_error,
    classify_http_error,
)
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
    "classify_aws_error",
    "classify_http_error",
]
