"""
Exceptions raised by the Expo push client.

Every failure surfaced to callers derives from ExpoError. Task cancellation
is left as asyncio.CancelledError and never wrapped.
"""

from typing import Any, List, Optional


RATE_LIMIT_STATUS = 429
UNAUTHORIZED_STATUS = 401


class ExpoError(Exception):
    """Base class for all Expo push client errors."""
    pass


class ApiError(ExpoError):
    """
    Raised when the Expo API reports a failure.

    Attributes:
        status_code: HTTP status code of the response
        error_code: Error code from the response body, if any
        error_data: Structured error details from the response body, if any
        response_text: Raw response body for diagnostics
        other_errors: Additional errors reported in the same response
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_code: Optional[str] = None,
        error_data: Optional[Any] = None,
        response_text: Optional[str] = None,
        other_errors: Optional[List["ApiError"]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.error_data = error_data
        self.response_text = response_text
        self.other_errors = other_errors or []

    @property
    def is_rate_limit_error(self) -> bool:
        """Check if the request was rejected for exceeding the rate limit."""
        return self.status_code == RATE_LIMIT_STATUS

    @property
    def is_authentication_error(self) -> bool:
        """Check if the request was rejected for missing or bad credentials."""
        return self.status_code == UNAUTHORIZED_STATUS

    def __repr__(self) -> str:
        return (
            f"ApiError(status_code={self.status_code}, "
            f"error_code={self.error_code!r}, message={self.message!r})"
        )


class CodecError(ExpoError):
    """Raised when a value cannot be encoded or decoded."""
    pass


class DecodeError(CodecError):
    """
    Raised when a response payload does not match the expected schema.

    Never retried. The raw response text is attached when the payload came
    from an HTTP response.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_text: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text


class TransportError(ExpoError):
    """Raised when the HTTP request could not be completed."""
    pass


class RequestTimeoutError(TransportError):
    """Raised when a request exceeds its attempt or total timeout."""
    pass
