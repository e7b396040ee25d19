"""
freshservice-tools: Freshservice API client library.

Every resource operation routes through one request engine that handles
authentication, TLS enforcement, Link header pagination, envelope
normalization, rate-limit-aware throttling and 429 recovery.

Example Usage:
    from freshservice_tools import TicketClient, ValidationError

    with TicketClient(throttle=True) as tickets:
        for ticket in tickets.iter({"updated_since": "2026-01-01"}):
            print(ticket["id"], ticket["subject"])

        try:
            tickets.create({"subject": "Printer on fire", "email": "ops@example.com"})
        except ValidationError as e:
            for error in e.field_errors:
                print(error.field, error.message)
"""

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
    Request,
    Result,
    ResultStatus,
)
from freshservice_tools.freshservice import (
    CannedResponseClient,
    FreshserviceClient,
    OffboardingRequestClient,
    OnboardingRequestClient,
    ReleaseClient,
    ResourceClient,
    TicketClient,
)

__version__ = "0.1.0"

__all__ = [
    # Models
    "Envelope",
    "ErrorEnvelope",
    "ErrorKind",
    "FieldError",
    "HttpMethod",
    "RateState",
    "Request",
    "Result",
    "ResultStatus",
    # Clients
    "FreshserviceClient",
    "ResourceClient",
    "TicketClient",
    "ReleaseClient",
    "CannedResponseClient",
    "OnboardingRequestClient",
    "OffboardingRequestClient",
    # Exceptions
    "FreshserviceError",
    "NotAuthenticatedError",
    "RateLimitError",
    "ValidationError",
    "UpstreamError",
    "EmptyResponseError",
    "UnrecognizedEnvelopeError",
]
