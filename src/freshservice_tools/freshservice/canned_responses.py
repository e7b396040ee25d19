"""Freshservice canned responses and their folders."""

from freshservice_tools.core.models import Envelope, HttpMethod, Record
from freshservice_tools.freshservice.resources import DEFAULT_PAGE_SIZE, ResourceClient

FOLDER_RESOURCE = "canned_response_folders"
FOLDER_ENVELOPE = Envelope("canned_response_folder", "canned_response_folders")


class CannedResponseClient(ResourceClient):
    """Canned responses: CRUD plus folder browsing."""

    resource = "canned_responses"
    envelope = Envelope("canned_response", "canned_responses")

    def list_folders(self) -> list[Record]:
        """All canned response folders."""
        request = self.build_request(
            HttpMethod.GET, f"/{FOLDER_RESOURCE}", params={"per_page": DEFAULT_PAGE_SIZE}
        )
        return list(self.paginate(request, FOLDER_ENVELOPE))

    def get_folder(self, folder_id: int | str) -> Record:
        """One canned response folder."""
        request = self.build_request(HttpMethod.GET, f"/{FOLDER_RESOURCE}/{folder_id}")
        return self.fetch_one(request, FOLDER_ENVELOPE)

    def list_folder_responses(self, folder_id: int | str) -> list[Record]:
        """Canned responses stored in one folder."""
        request = self.build_request(
            HttpMethod.GET,
            f"/{FOLDER_RESOURCE}/{folder_id}/canned_responses",
            params={"per_page": DEFAULT_PAGE_SIZE},
        )
        return list(self.paginate(request, self.envelope))
