"""
Error codes, user-facing messages and the service exception hierarchy.

Upstream and storage failures carry their technical detail on the exception
for server-side logging; callers only ever see the short message mapped to
the error code.
"""
from typing import Tuple, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for different types of failures."""

    # Validation Errors (400)
    MISSING_FIELD = "MISSING_FIELD"
    INVALID_FORMAT = "INVALID_FORMAT"
    INVALID_PARAMETER = "INVALID_PARAMETER"

    # Generation Errors (500)
    IMAGE_GENERATION_FAILED = "IMAGE_GENERATION_FAILED"

    # Storage Errors (500)
    FILE_SAVE_ERROR = "FILE_SAVE_ERROR"

    # Configuration Errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Generic Errors
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


ERROR_MESSAGES = {
    ErrorCode.MISSING_FIELD: "prompt is required",
    ErrorCode.INVALID_FORMAT: "invalid JSON",
    ErrorCode.INVALID_PARAMETER: "invalid parameter",
    ErrorCode.IMAGE_GENERATION_FAILED: "image generation failed",
    ErrorCode.FILE_SAVE_ERROR: "failed to upload image",
    ErrorCode.CONFIGURATION_ERROR: "service is not configured",
    ErrorCode.UNKNOWN_ERROR: "internal server error",
}


ERROR_STATUS_CODES = {
    ErrorCode.MISSING_FIELD: 400,
    ErrorCode.INVALID_FORMAT: 400,
    ErrorCode.INVALID_PARAMETER: 400,
    ErrorCode.IMAGE_GENERATION_FAILED: 500,
    ErrorCode.FILE_SAVE_ERROR: 500,
    ErrorCode.CONFIGURATION_ERROR: 500,
    ErrorCode.UNKNOWN_ERROR: 500,
}


def get_error_response(
    error_code: ErrorCode,
    custom_message: Optional[str] = None
) -> Tuple[str, int]:
    """
    Get the caller-facing error message and HTTP status code.

    Args:
        error_code: The error code enum
        custom_message: Optional detail appended after a colon

    Returns:
        Tuple of (error_message, status_code)
    """
    message = ERROR_MESSAGES.get(error_code, ERROR_MESSAGES[ErrorCode.UNKNOWN_ERROR])
    status_code = ERROR_STATUS_CODES.get(error_code, 500)

    if custom_message:
        message = f"{message}: {custom_message}"

    return message, status_code


class ServiceError(Exception):
    """Base class for errors that terminate a generation request."""

    error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR

    def __init__(self, detail: str = "", public_detail: Optional[str] = None):
        super().__init__(detail or ERROR_MESSAGES[self.error_code])
        self.detail = detail
        # Only set for errors whose detail is safe to echo back to the caller
        self.public_detail = public_detail

    @property
    def status_code(self) -> int:
        return ERROR_STATUS_CODES.get(self.error_code, 500)

    def response(self) -> Tuple[str, int]:
        """Message and status code to send to the caller."""
        return get_error_response(self.error_code, self.public_detail)


class ClientError(ServiceError):
    """Bad input from the caller (400)."""

    def __init__(self, error_code: ErrorCode = ErrorCode.MISSING_FIELD, detail: str = ""):
        self.error_code = error_code
        super().__init__(detail, public_detail=detail or None)


class UpstreamError(ServiceError):
    """The image generation API call failed (500)."""

    error_code = ErrorCode.IMAGE_GENERATION_FAILED


class StorageError(ServiceError):
    """Writing an object to the store failed (500)."""

    error_code = ErrorCode.FILE_SAVE_ERROR

    def __init__(self, detail: str = "", key: Optional[str] = None):
        super().__init__(detail)
        self.key = key


class StartupError(ServiceError):
    """Required configuration is missing; the process must not start."""

    error_code = ErrorCode.CONFIGURATION_ERROR
