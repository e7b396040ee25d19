"""Freshservice ticket operations.

Example:
    from freshservice_tools.freshservice import TicketClient

    with TicketClient() as tickets:
        for ticket in tickets.filter("priority:4 AND status:2"):
            print(ticket["id"], ticket["subject"])
        tickets.restore(42)
"""

import logging
from collections.abc import Iterator
from typing import Any

from freshservice_tools.core.models import Envelope, HttpMethod, Record, Result
from freshservice_tools.freshservice.resources import DEFAULT_PAGE_SIZE, ResourceClient

logger = logging.getLogger(__name__)

CONVERSATION_ENVELOPE = Envelope("conversation", "conversations")


class TicketClient(ResourceClient):
    """Tickets: CRUD, filter queries, conversations and restore."""

    resource = "tickets"
    envelope = Envelope("ticket", "tickets")

    def filter(self, query: str) -> Iterator[Record]:
        """Run a ticket filter query across all pages.

        Args:
            query: Filter expression, e.g. ``priority:4 AND status:2``

        Returns:
            Lazy iterator of matching tickets
        """
        logger.debug("Filtering tickets: %s", query)
        request = self.build_request(
            HttpMethod.GET, f"/{self.resource}/filter", params={"query": f'"{query}"'}
        )
        return self.paginate(request, self.envelope)

    def list_conversations(self, ticket_id: int | str) -> list[Record]:
        """Replies and notes of a ticket, all pages."""
        request = self.build_request(
            HttpMethod.GET,
            f"/{self.resource}/{ticket_id}/conversations",
            params={"per_page": DEFAULT_PAGE_SIZE},
        )
        return list(self.paginate(request, CONVERSATION_ENVELOPE))

    def reply(self, ticket_id: int | str, body: str, **fields: Any) -> Record:
        """Add a public reply to a ticket."""
        request = self.build_request(
            HttpMethod.POST,
            f"/{self.resource}/{ticket_id}/reply",
            body={"body": body, **fields},
        )
        return self.fetch_one(request, CONVERSATION_ENVELOPE)

    def restore(self, ticket_id: int | str) -> Result:
        """Restore a deleted ticket."""
        return self._restore(ticket_id)
