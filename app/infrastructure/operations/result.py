"""Operation result dataclass.

Uniform result type returned by best-effort operations that must never
raise, carrying status, data and error information instead.
"""

from typing import Optional, Any
from dataclasses import dataclass

from infrastructure.operations.status import OperationStatus


@dataclass
class OperationResult:
    """Uniform result returned from operations.

    Attributes:
        status: OperationStatus -- high-level outcome
        message: str -- human-friendly message for logs/troubleshooting
        data: Optional[Any] -- optional payload
        error_code: Optional[str] -- optional machine error code
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """True if status is SUCCESS."""
        return self.status == OperationStatus.SUCCESS

    @classmethod
    def success(
        cls, data: Optional[Any] = None, message: str = "ok"
    ) -> "OperationResult":
        """Create a SUCCESS OperationResult with optional data."""
        return cls(status=OperationStatus.SUCCESS, message=message, data=data)

    @classmethod
    def error(
        cls,
        status: OperationStatus,
        message: str,
        error_code: Optional[str] = None,
        data: Optional[Any] = None,
    ) -> "OperationResult":
        """Create an error OperationResult.

        Args:
            status: OperationStatus indicating error type
            message: Human-friendly error message
            error_code: Optional machine error code
            data: Optional payload to include with the error

        Returns:
            OperationResult with specified error status
        """
        return cls(status=status, message=message, error_code=error_code, data=data)

    @classmethod
    def transient_error(
        cls, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        """Create a transient error result.

        Use for failures that may go away on a later attempt, such as a file
        held open by another process or a temporarily read-only mount.
        """
        return cls.error(OperationStatus.TRANSIENT_ERROR, message, error_code)

    @classmethod
    def permanent_error(
        cls, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        """Create a permanent (non-retryable) error result."""
        return cls.error(OperationStatus.PERMANENT_ERROR, message, error_code)

    @classmethod
    def not_found(
        cls, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        """Create a NOT_FOUND result for a target that no longer exists."""
        return cls.error(OperationStatus.NOT_FOUND, message, error_code)
