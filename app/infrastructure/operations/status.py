"""Operation status enumeration.

Status codes for operation results, used to classify outcomes of relay
attempts so the scheduler can decide what happens to a pending request.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        TRANSIENT_ERROR: Delivery failed, try again after the restart delay
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
