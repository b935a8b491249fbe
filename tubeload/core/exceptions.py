"""
Custom exceptions for upload operations.

Each layer of the upload pipeline raises its own exception type so callers
can tell an authorization failure from a rejected session or a failed chunk.
"""
from typing import Optional


class UploadException(Exception):
    """Base exception for all tubeload errors."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        body: Optional[str] = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            status: HTTP status code returned by the provider (if available)
            body: Raw response body returned by the provider (if available)
        """
        self.status = status
        self.body = body
        super().__init__(message)

    @classmethod
    def from_response(cls, prefix: str, status: int, body: str) -> 'UploadException':
        """Build an error whose message carries the HTTP status and body."""
        message = f"{prefix}: {status} {body}".rstrip()
        return cls(message, status=status, body=body)


class AuthorizationError(UploadException):
    """Raised when the identity handshake is unavailable, denied or misconfigured."""
    pass


class SessionError(UploadException):
    """Raised when the resumable session negotiation is rejected or malformed."""
    pass


class SessionLocatorMissingError(SessionError):
    """Raised when a successful negotiation response carries no session locator."""
    pass


class TransferError(UploadException):
    """Raised when a chunk transfer call is rejected or cannot be sent."""
    pass


class ProtocolError(UploadException):
    """Raised when the provider's response sequence violates the upload protocol."""
    pass


class UploadError(UploadException):
    """
    Raised by the upload coordinator when any step fails.

    Keeps the message of the underlying error and records which step failed.
    """

    def __init__(self, step: str, cause: UploadException) -> None:
        """
        Initialize the exception.

        Args:
            step: Name of the step that failed
            cause: Underlying error raised by that step
        """
        self.step = step
        self.cause = cause
        super().__init__(str(cause), status=cause.status, body=cause.body)
