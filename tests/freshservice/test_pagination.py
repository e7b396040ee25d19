"""Tests for Link header parsing."""

from requests.structures import CaseInsensitiveDict

from freshservice_tools.freshservice.pagination import next_link


class TestNextLink:
    """Tests for next_link."""

    def test_extracts_url(self) -> None:
        """Test extraction of the next page URL."""
        headers = {"Link": '<https://acme.freshservice.com/api/v2/tickets?page=2>; rel="next"'}
        assert next_link(headers) == "https://acme.freshservice.com/api/v2/tickets?page=2"

    def test_first_match_wins(self) -> None:
        """Test that only the first URL is used."""
        headers = {"Link": "<https://a.example/1>; rel=\"next\", <https://a.example/9>; rel=\"last\""}
        assert next_link(headers) == "https://a.example/1"

    def test_case_insensitive_header(self) -> None:
        """Test lookup through a case-insensitive header map."""
        headers = CaseInsensitiveDict({"link": "<https://a.example/2>; rel=\"next\""})
        assert next_link(headers) == "https://a.example/2"

    def test_missing_header(self) -> None:
        """Test that no header means no next page."""
        assert next_link({}) is None

    def test_header_without_url(self) -> None:
        """Test that a header without <url> means no next page."""
        assert next_link({"Link": 'rel="next"'}) is None
