"""Generic CRUD client for a Freshservice resource collection.

Resource clients only shape requests; every call goes through the
FreshserviceClient engine.

Example:
    class ProblemClient(ResourceClient):
        resource = "problems"
        envelope = Envelope("problem", "problems")
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from freshservice_tools.core.models import Envelope, HttpMethod, Record, Result, ResultStatus
from freshservice_tools.freshservice.base import FreshserviceClient

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


class ResourceClient(FreshserviceClient):
    """CRUD operations for one resource collection.

    Attributes:
        resource: Collection path below /api/v2 (e.g., "tickets")
        envelope: Singular and plural envelope keys of the collection
    """

    resource = ""
    envelope = Envelope("", "")

    def iter(self, params: dict[str, Any] | None = None) -> Iterator[Record]:
        """Lazily iterate over every record of the collection."""
        query = {"per_page": DEFAULT_PAGE_SIZE, **(params or {})}
        request = self.build_request(HttpMethod.GET, f"/{self.resource}", params=query)
        return self.paginate(request, self.envelope)

    def list(self, params: dict[str, Any] | None = None) -> list[Record]:
        """Fetch every record of the collection, all pages."""
        records = list(self.iter(params))
        logger.debug("Listed %d %s", len(records), self.resource)
        return records

    def get(self, resource_id: int | str, params: dict[str, Any] | None = None) -> Record:
        """Fetch one record by ID, exactly one request."""
        request = self.build_request(
            HttpMethod.GET, f"/{self.resource}/{resource_id}", params=params
        )
        return self.fetch_one(request, self.envelope)

    def create(
        self,
        fields: dict[str, Any],
        attachments: list[Any] | None = None,
    ) -> Record:
        """Create a record.

        Args:
            fields: Record fields
            attachments: Files as (filename, content[, content_type]) tuples or
                open file objects; switches the request to multipart

        Returns:
            The created record
        """
        if attachments:
            form = {**fields, "attachments[]": list(attachments)}
            request = self.build_request(HttpMethod.POST, f"/{self.resource}", form=form)
        else:
            request = self.build_request(HttpMethod.POST, f"/{self.resource}", body=fields)
        record = self.fetch_one(request, self.envelope)
        logger.info("Created %s %s", self.envelope.singular, record.get("id"))
        return record

    def update(self, resource_id: int | str, fields: dict[str, Any]) -> Record:
        """Update a record and return it."""
        request = self.build_request(
            HttpMethod.PUT, f"/{self.resource}/{resource_id}", body=fields
        )
        return self.fetch_one(request, self.envelope)

    def delete(self, resource_id: int | str) -> Result:
        """Delete a record. Freshservice answers 204 on success."""
        request = self.build_request(HttpMethod.DELETE, f"/{self.resource}/{resource_id}")
        response = self.execute(request)
        return self._expect_no_content(response.status_code, resource_id, "Deleted")

    def _restore(self, resource_id: int | str) -> Result:
        """Restore a deleted record. Freshservice answers 204 on success."""
        request = self.build_request(
            HttpMethod.PUT, f"/{self.resource}/{resource_id}/restore"
        )
        response = self.execute(request)
        return self._expect_no_content(response.status_code, resource_id, "Restored")

    def _expect_no_content(self, status_code: int, resource_id: int | str, action: str) -> Result:
        if status_code == 204:
            logger.info("%s %s %s", action, self.envelope.singular, resource_id)
            return Result(
                status=ResultStatus.SUCCESS,
                message=f"{action} {self.envelope.singular} {resource_id}",
                resource_id=str(resource_id),
                status_code=status_code,
            )
        return Result(
            status=ResultStatus.FAILED,
            message=f"Expected 204, got {status_code}",
            resource_id=str(resource_id),
            status_code=status_code,
        )
