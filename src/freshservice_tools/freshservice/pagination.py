"""Continuation link handling for paginated listings.

Freshservice returns the next page as a ``Link`` header:
``<https://acme.freshservice.com/api/v2/tickets?page=2>; rel="next"``.
"""

import re
from collections.abc import Mapping

LINK_HEADER = "Link"
LINK_PATTERN = re.compile(r"<([^>]+)>")


def next_link(headers: Mapping[str, str]) -> str | None:
    """Extract the continuation URL, None when the listing is exhausted.

    Only the first ``<url>`` in the header is used.
    """
    value = headers.get(LINK_HEADER)
    if not value:
        return None
    match = LINK_PATTERN.search(value)
    return match.group(1) if match else None
