"""Freshservice API clients.

This module provides:
- FreshserviceClient: request engine with auth, TLS pinning, 429 retry,
  self-throttling, envelope normalization and pagination
- Resource clients for tickets, releases, canned responses and
  onboarding/offboarding requests
- Connection profile management

Example:
    from freshservice_tools.freshservice import TicketClient

    with TicketClient(base_url="https://acme.freshservice.com", api_key="...") as tickets:
        ticket = tickets.get(42)
"""

from freshservice_tools.freshservice.base import FreshserviceClient
from freshservice_tools.freshservice.canned_responses import CannedResponseClient
from freshservice_tools.freshservice.credentials import (
    FreshserviceCredentials,
    delete_credentials,
    encode_token,
    get_credentials,
    save_credentials,
)
from freshservice_tools.freshservice.envelope import normalize
from freshservice_tools.freshservice.onboarding import (
    OffboardingRequestClient,
    OnboardingRequestClient,
)
from freshservice_tools.freshservice.releases import ReleaseClient
from freshservice_tools.freshservice.resources import ResourceClient
from freshservice_tools.freshservice.tickets import TicketClient

__all__ = [
    # Engine
    "FreshserviceClient",
    "ResourceClient",
    "normalize",
    # Credentials
    "FreshserviceCredentials",
    "encode_token",
    "get_credentials",
    "save_credentials",
    "delete_credentials",
    # Resources
    "TicketClient",
    "ReleaseClient",
    "CannedResponseClient",
    "OnboardingRequestClient",
    "OffboardingRequestClient",
]
