"""Operation result types and status enums.

This module contains standardized result types for operations across
the application, including the status enum, the result dataclass, and
classifiers for gateway responses.
"""

from infrastructure.operations.classifiers import (
    ACCEPTED_STATUS_CODES,
    GATEWAY_UNREACHABLE,
    classify_gateway_response,
    classify_transport_error,
)
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
    "ACCEPTED_STATUS_CODES",
    "GATEWAY_UNREACHABLE",
    "classify_gateway_response",
    "classify_transport_error",
]
