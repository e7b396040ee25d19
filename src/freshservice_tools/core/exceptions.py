"""Exception hierarchy for freshservice-tools."""

from typing import Any

from freshservice_tools.core.models import ErrorEnvelope, ErrorKind, FieldError


class FreshserviceError(Exception):
    """Base exception for all freshservice-tools errors."""

    kind: ErrorKind | None = None

    def __init__(self, message: str, details: dict | None = None):
        """Initialize FreshserviceError.

        Args:
            message: Error message
            details: Additional error details (url, method, response body)
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation."""
        return self.message


class NotAuthenticatedError(FreshserviceError):
    """No API token is available for the call."""

    kind = ErrorKind.NOT_AUTHENTICATED


class RateLimitError(FreshserviceError):
    """Rate limit exceeded (HTTP 429)."""

    kind = ErrorKind.RATE_LIMITED

    def __init__(
        self,
        message: str,
        retry_after: int | None = None,
        details: dict | None = None,
    ):
        """Initialize RateLimitError.

        Args:
            message: Error message
            retry_after: Seconds the server asked us to wait, None if it did not say
            details: Additional error details
        """
        super().__init__(message, details)
        self.retry_after = retry_after


class ValidationError(FreshserviceError):
    """The server rejected the request payload (HTTP 400)."""

    kind = ErrorKind.VALIDATION_FAILED

    def __init__(
        self,
        message: str,
        envelope: ErrorEnvelope | None = None,
        details: dict | None = None,
    ):
        """Initialize ValidationError.

        Args:
            message: Error message, including the field summary
            envelope: Parsed error body
            details: Additional error details
        """
        super().__init__(message, details)
        self.envelope = envelope or ErrorEnvelope()

    @property
    def description(self) -> str | None:
        """Server-reported description."""
        return self.envelope.description

    @property
    def field_errors(self) -> list[FieldError]:
        """Ordered field-level errors."""
        return self.envelope.errors


class UpstreamError(FreshserviceError):
    """Unexpected status code or transport failure."""

    kind = ErrorKind.UPSTREAM_ERROR

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
        details: dict | None = None,
    ):
        """Initialize UpstreamError.

        Args:
            message: Error message
            status_code: HTTP status code, None for transport failures
            body: Parsed JSON error body, or None
            details: Additional error details
        """
        super().__init__(message, details)
        self.status_code = status_code
        self.body = body


class EmptyResponseError(FreshserviceError):
    """A successful non-delete call returned no body."""

    kind = ErrorKind.EMPTY_RESPONSE

    def __init__(self, message: str, status_code: int | None = None, details: dict | None = None):
        super().__init__(message, details)
        self.status_code = status_code


class UnrecognizedEnvelopeError(FreshserviceError):
    """Response body does not match the singular/plural envelope contract."""

    kind = ErrorKind.UNRECOGNIZED_ENVELOPE

    def __init__(self, message: str, keys: list[str] | None = None, details: dict | None = None):
        super().__init__(message, details)
        self.keys = keys or []
