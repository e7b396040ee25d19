"""Freshservice employee onboarding and offboarding requests.

Both request types share one API shape: a request record, the tickets it
spawned, and a configurable form describing its fields.
"""

import logging

from freshservice_tools.core.models import Envelope, HttpMethod, Record
from freshservice_tools.freshservice.resources import DEFAULT_PAGE_SIZE, ResourceClient

logger = logging.getLogger(__name__)

TICKET_ENVELOPE = Envelope("ticket", "tickets")


class OnboardingRequestClient(ResourceClient):
    """Onboarding requests, their child tickets and their form."""

    resource = "onboarding_requests"
    envelope = Envelope("onboarding_request", "onboarding_requests")
    form_envelope = Envelope("onboarding_form", "onboarding_forms")

    def list_tickets(self, request_id: int | str) -> list[Record]:
        """Tickets raised for one request."""
        request = self.build_request(
            HttpMethod.GET,
            f"/{self.resource}/{request_id}/tickets",
            params={"per_page": DEFAULT_PAGE_SIZE},
        )
        tickets = list(self.paginate(request, TICKET_ENVELOPE))
        logger.debug("%s %s has %d ticket(s)", self.envelope.singular, request_id, len(tickets))
        return tickets

    def get_form(self) -> Record:
        """Field definitions of the request form."""
        request = self.build_request(HttpMethod.GET, f"/{self.resource}/form")
        return self.fetch_one(request, self.form_envelope)


class OffboardingRequestClient(OnboardingRequestClient):
    """Offboarding requests, same shape as onboarding."""

    resource = "offboarding_requests"
    envelope = Envelope("offboarding_request", "offboarding_requests")
    form_envelope = Envelope("offboarding_form", "offboarding_forms")
