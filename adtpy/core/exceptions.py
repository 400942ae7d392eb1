"""
Custom exceptions for ADT client operations.

Every error carries structured fields so callers can branch on the
exception type and its attributes instead of parsing message text.
"""
from typing import Optional, Sequence


class AdtException(Exception):
    """Base exception for all ADT-related errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(AdtException):
    """Missing or invalid connection configuration."""
    pass


class TransportError(AdtException):
    """The HTTP transport failed before a response was received."""

    def __init__(self, message: str, method: Optional[str] = None, url: Optional[str] = None) -> None:
        self.method = method
        self.url = url
        super().__init__(message)


class HttpError(AdtException):
    """
    Exception raised for non-2xx ADT responses.

    Attributes:
        status: HTTP status code (None when no request was issued)
        status_text: HTTP reason phrase
        body: Full response body, kept for diagnostics
    """

    def __init__(
        self,
        status: Optional[int],
        status_text: str = '',
        body: str = '',
        message: Optional[str] = None
    ) -> None:
        self.status = status
        self.status_text = status_text
        self.body = body
        if message is None:
            message = f"ADT request failed: {status_text} ({status})"
            if body:
                message = f"{message}\n{body}"
        super().__init__(message)


class AuthError(HttpError):
    """Credentials were rejected, or no credentials are present."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        status_text: str = '',
        body: str = ''
    ) -> None:
        super().__init__(status, status_text, body, message=message)


class ProtocolError(AdtException):
    """The server answered with an unexpected or malformed XML document."""

    def __init__(self, message: str, payload: Optional[str] = None) -> None:
        self.payload = payload
        super().__init__(message)


class PartialCreateError(AdtException):
    """
    A multi-step create operation failed after the object was created.

    The server is left with a partially created object; nothing is rolled
    back.

    Attributes:
        step: Name of the step that failed
        completed_steps: Steps that finished before the failure
        object_name: Name of the affected repository object
        cause: Underlying exception
    """

    def __init__(
        self,
        step: str,
        completed_steps: Sequence[str],
        object_name: str,
        cause: Exception
    ) -> None:
        self.step = step
        self.completed_steps = tuple(completed_steps)
        self.object_name = object_name
        self.cause = cause
        done = ', '.join(self.completed_steps) or 'none'
        super().__init__(
            f"Creation of {object_name} failed at step '{step}' "
            f"(completed: {done}); manual cleanup may be required: {cause}"
        )
