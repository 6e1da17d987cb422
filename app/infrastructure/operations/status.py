"""Operation status enumeration.

Status codes classifying the outcome of best-effort operations such as
removing a cache file.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        TRANSIENT_ERROR: Error that may clear up on a later attempt (I/O, locking)
        PERMANENT_ERROR: Error that will not clear up on retry
        NOT_FOUND: Target no longer exists
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    NOT_FOUND = "not_found"
