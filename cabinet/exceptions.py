"""Custom exception hierarchy for Cabinet."""

from enum import Enum
from typing import Any, Dict, Mapping, Optional


class ErrorCode(str, Enum):
    """Standardized error codes for API responses."""

    NOT_FOUND = "NOT_FOUND"
    BAD_REQUEST = "BAD_REQUEST"
    CONFLICT = "CONFLICT"

    # Conditional requests
    NOT_MODIFIED = "NOT_MODIFIED"
    PRECONDITION_FAILED = "PRECONDITION_FAILED"

    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"

    # Generic errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class CabinetException(Exception):
    """
    Base exception for all Cabinet errors.

    Provides structured error responses with:
    - Human-readable message
    - Machine-readable error code
    - HTTP status code
    - Optional additional details
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            status_code: HTTP status code to return
            details: Optional additional context/details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for JSON response.

        Returns:
            Dictionary with error, message, and details fields
        """
        return {
            "error": self.error_code.value,
            "message": self.message,
            "details": self.details
        }


class NotFoundError(CabinetException):
    """File, directory or boilerplate does not exist."""

    def __init__(self, resource: str, identifier: Any):
        super().__init__(
            f"{resource} not found: {identifier}",
            ErrorCode.NOT_FOUND,
            status_code=404,
            details={"resource": resource, "identifier": str(identifier)}
        )


class BadRequestError(CabinetException):
    """The request cannot be applied. ``message`` is safe to show to clients."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message,
            ErrorCode.BAD_REQUEST,
            status_code=400,
            details=details
        )


class ConflictError(CabinetException):
    """A concurrent write won the race. The client may resubmit."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message,
            ErrorCode.CONFLICT,
            status_code=409,
            details=details
        )


class NotModifiedError(CabinetException):
    """Conditional GET/HEAD matched the current validators.

    Carries the validator headers; the response has no body.
    """

    def __init__(self, headers: Optional[Mapping[str, str]] = None):
        super().__init__(
            "Not modified",
            ErrorCode.NOT_MODIFIED,
            status_code=304,
        )
        self.headers = dict(headers or {})


class PreconditionFailedError(CabinetException):
    """If-Match / If-Unmodified-Since did not hold for the current resource."""

    def __init__(self, message: str = "Precondition failed"):
        super().__init__(
            message,
            ErrorCode.PRECONDITION_FAILED,
            status_code=412,
        )


class PayloadTooLargeError(CabinetException):
    """Request body exceeded the configured ceiling."""

    def __init__(self, limit: int):
        super().__init__(
            f"Payload exceeds the maximum of {limit} bytes",
            ErrorCode.PAYLOAD_TOO_LARGE,
            status_code=413,
            details={"max_bytes": limit}
        )


class InternalError(CabinetException):
    """Unexpected storage failure. Details are logged, never returned."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        details = {}
        if original_error:
            details["original_error"] = str(original_error)

        super().__init__(
            message,
            ErrorCode.INTERNAL_ERROR,
            status_code=500,
            details=details
        )
        self.original_error = original_error

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.error_code.value,
            "message": "Internal server error",
            "details": {},
        }
