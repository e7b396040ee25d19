"""Core models and exceptions for freshservice-tools."""

from freshservice_tools.core.exceptions import (
    EmptyResponseError,
    FreshserviceError,
    NotAuthenticatedError,
    RateLimitError,
    UnrecognizedEnvelopeError,
    UpstreamError,
    ValidationError,
)
from freshservice_tools.core.models import (
    Envelope,
    ErrorEnvelope,
    ErrorKind,
    FieldError,
    HttpMethod,
    RateState,
    Record,
    Request,
    Result,
    ResultStatus,
)

__all__ = [
    "Envelope",
    "ErrorEnvelope",
    "ErrorKind",
    "FieldError",
    "HttpMethod",
    "RateState",
    "Record",
    "Request",
    "Result",
    "ResultStatus",
    "FreshserviceError",
    "NotAuthenticatedError",
    "RateLimitError",
    "ValidationError",
    "UpstreamError",
    "EmptyResponseError",
    "UnrecognizedEnvelopeError",
]
