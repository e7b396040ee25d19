"""Request engine shared by every Freshservice resource client.

All resource operations go through one client that:
- Pins HTTPS connections to TLS 1.2 or newer
- Attaches the pre-encoded Basic auth token
- Retries 429 responses after the server-provided Retry-After delay
- Self-throttles near the account rate limit (when enabled)
- Unwraps singular/plural response envelopes
- Follows Link header pagination

Example:
    from freshservice_tools.freshservice.base import FreshserviceClient

    with FreshserviceClient(base_url="https://acme.freshservice.com", api_key="...") as client:
        request = client.build_request("GET", "/tickets", params={"per_page": 100})
        for ticket in client.paginate(request):
            print(ticket["id"], ticket["subject"])
"""

import logging
import time
from collections.abc import Iterator
from typing import Any
from urllib.parse import urlencode

import requests

from freshservice_tools.core.exceptions import (
    EmptyResponseError,
    NotAuthenticatedError,
    RateLimitError,
)
from freshservice_tools.core.models import (
    DEFAULT_CONTENT_TYPE,
    Envelope,
    HttpMethod,
    Record,
    Request,
)
from freshservice_tools.freshservice import transport
from freshservice_tools.freshservice.credentials import FreshserviceCredentials, get_credentials
from freshservice_tools.freshservice.envelope import normalize
from freshservice_tools.freshservice.errors import classify, ensure_body
from freshservice_tools.freshservice.pagination import next_link
from freshservice_tools.freshservice.throttle import RateLimitGovernor

logger = logging.getLogger(__name__)

API_PATH = "/api/v2"


class FreshserviceClient:
    """Base HTTP client for the Freshservice API.

    Attributes:
        base_url: Freshservice instance base URL
        timeout: Transport timeout in seconds, None for the transport default
        max_rate_limit_retries: Cap on 429 retries per request, None for unbounded
        governor: Rate limit governor run after each successful response
    """

    provider_name = "freshservice"

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        token: str | None = None,
        throttle: bool | None = None,
        max_rate_limit_retries: int | None = None,
        timeout: float | None = None,
        service: str | None = None,
        credentials: FreshserviceCredentials | None = None,
    ) -> None:
        """Initialize the Freshservice client.

        Args:
            base_url: Instance URL (e.g., https://acme.freshservice.com)
            api_key: API key, encoded into the Basic auth token
            token: Already encoded token, takes precedence over api_key
            throttle: Enable self-throttling near the rate limit
            max_rate_limit_retries: Cap on 429 retries, None retries forever
            timeout: Transport timeout in seconds
            service: Keyring service name for credential lookup
            credentials: Fully resolved connection profile, skips lookup
        """
        if credentials is None:
            kwargs: dict[str, Any] = {"base_url": base_url, "api_key": api_key, "throttle": throttle}
            if service:
                kwargs["service"] = service
            credentials = get_credentials(**kwargs)
        self._credentials = credentials
        self._token = token or credentials.token
        self.base_url = credentials.base_url
        self.timeout = timeout
        self.max_rate_limit_retries = max_rate_limit_retries
        self.governor = RateLimitGovernor(enabled=credentials.throttle)

        self._session = transport.create_session()

        logger.debug(
            "Initialized %s client for %s (throttle: %s)",
            self.provider_name,
            self.base_url,
            credentials.throttle,
        )

    def __enter__(self) -> "FreshserviceClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit - close session."""
        self.close()

    def close(self) -> None:
        """Close the HTTP session."""
        self._session.close()
        logger.debug("Closed %s client session", self.provider_name)

    def url_for(self, path: str, params: dict[str, Any] | None = None) -> str:
        """Build the absolute API URL for a resource path."""
        url = f"{self.base_url}{API_PATH}/{path.lstrip('/')}"
        if params:
            query = {k: v for k, v in params.items() if v is not None}
            if query:
                url = f"{url}?{urlencode(query, doseq=True)}"
        return url

    def build_request(
        self,
        method: HttpMethod | str,
        path: str,
        params: dict[str, Any] | None = None,
        body: Any = None,
        form: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        content_type: str = DEFAULT_CONTENT_TYPE,
    ) -> Request:
        """Build a Request against this instance.

        Args:
            method: HTTP method
            path: Resource path below /api/v2 (e.g., "/tickets/42")
            params: Query parameters, None values are dropped
            body: JSON body
            form: Multipart form fields and files
            headers: Extra headers
            content_type: Declared content type for JSON bodies

        Returns:
            Request with an absolute URL
        """
        return Request(
            method=HttpMethod(method),
            url=self.url_for(path, params),
            body=body,
            form=form,
            headers=headers or {},
            content_type=content_type,
        )

    def execute(self, request: Request) -> requests.Response:
        """Send a request, retrying while the server answers 429.

        Args:
            request: Fully-formed request

        Returns:
            The successful (2xx) response

        Raises:
            NotAuthenticatedError: If no token is available; nothing is sent
            RateLimitError: If the retry cap is reached or Retry-After is unusable
            ValidationError: On 400
            UpstreamError: On any other failure
        """
        token = request.token or self._token
        if not token:
            raise NotAuthenticatedError(
                "No Freshservice API key configured. Set FRESHSERVICE_API_KEY, "
                "use the keyring, or pass api_key explicitly.",
                details={"url": request.url},
            )

        retries = 0
        while True:
            response = transport.send(self._session, request, token, timeout=self.timeout)
            try:
                classify(request, response)
            except RateLimitError as e:
                if e.retry_after is None:
                    raise
                if self.max_rate_limit_retries is not None and retries >= self.max_rate_limit_retries:
                    raise
                retries += 1
                logger.warning(
                    "Rate limited on %s. Waiting %d seconds before retry %d.",
                    request.url,
                    e.retry_after,
                    retries,
                )
                time.sleep(e.retry_after)
                continue

            self.governor(response.headers)
            return response

    def fetch(self, request: Request, envelope: Envelope | None = None) -> list[Record]:
        """Execute a single request and return its records. Never paginates.

        Raises:
            EmptyResponseError: If a non-delete call returns no body
            UnrecognizedEnvelopeError: If the body shape is unexpected
        """
        response = self.execute(request)
        return self._records(request, response, envelope)

    def fetch_one(self, request: Request, envelope: Envelope | None = None) -> Record:
        """Execute a single request that must return a record and return it.

        Raises:
            EmptyResponseError: If the body is empty or its envelope holds no record
            UnrecognizedEnvelopeError: If the body shape is unexpected
        """
        response = self.execute(request)
        records = self._records(request, response, envelope)
        if not records:
            raise EmptyResponseError(
                f"{request.method.value} {request.url} returned {response.status_code} without a record",
                status_code=response.status_code,
                details={"url": request.url, "method": request.method.value},
            )
        return records[0]

    def _records(
        self,
        request: Request,
        response: requests.Response,
        envelope: Envelope | None,
    ) -> list[Record]:
        ensure_body(request, response)
        if not response.content:
            return []
        return normalize(response.content, envelope)

    def paginate(self, request: Request, envelope: Envelope | None = None) -> Iterator[Record]:
        """Yield records from every page, following the Link header.

        Pages are fetched lazily and strictly in order; stop iterating to
        stop fetching.
        """
        page = 1
        while True:
            response = self.execute(request)
            ensure_body(request, response)
            records = normalize(response.content, envelope)
            logger.debug("Page %d of %s: %d record(s)", page, request.url, len(records))
            yield from records

            link = next_link(response.headers)
            if not link:
                return
            request = request.with_url(link)
            page += 1

    def test_connection(self) -> bool:
        """Check that the instance is reachable and the token is accepted.

        Raises:
            NotAuthenticatedError: If no token is configured
            UpstreamError: If the server rejects the call
        """
        self.fetch(self.build_request(HttpMethod.GET, "/tickets", params={"per_page": 1}))
        logger.info("Connection test successful for %s", self.base_url)
        return True
