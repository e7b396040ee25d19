"""Freshservice release operations."""

from freshservice_tools.core.models import Envelope, Result
from freshservice_tools.freshservice.resources import ResourceClient


class ReleaseClient(ResourceClient):
    """Releases: CRUD and restore."""

    resource = "releases"
    envelope = Envelope("release", "releases")

    def restore(self, release_id: int | str) -> Result:
        """Restore a deleted release."""
        return self._restore(release_id)
