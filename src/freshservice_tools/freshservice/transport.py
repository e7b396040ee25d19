"""Single-shot HTTP transport for the Freshservice API.

Sends exactly one request and hands back the raw response. Retries, error
classification and throttling live in the client built on top of it.
"""

import json
import logging
import ssl
from typing import Any

import requests
from requests.adapters import HTTPAdapter

from freshservice_tools.core.exceptions import UpstreamError
from freshservice_tools.core.models import Request

logger = logging.getLogger(__name__)

MINIMUM_TLS_VERSION = ssl.TLSVersion.TLSv1_2

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Accept-Charset": "utf-8",
}


def create_ssl_context() -> ssl.SSLContext:
    """Default verifying context with the minimum TLS version pinned."""
    context = ssl.create_default_context()
    context.minimum_version = MINIMUM_TLS_VERSION
    return context


class TLSAdapter(HTTPAdapter):
    """HTTPS adapter that refuses to negotiate anything below TLS 1.2.

    The pinned context is used for direct connections and for connections
    tunnelled through a proxy (``HTTPS_PROXY``).
    """

    def init_poolmanager(self, *args: Any, **kwargs: Any) -> None:
        kwargs["ssl_context"] = create_ssl_context()
        super().init_poolmanager(*args, **kwargs)

    def proxy_manager_for(self, proxy: str, **proxy_kwargs: Any) -> Any:
        proxy_kwargs["ssl_context"] = create_ssl_context()
        return super().proxy_manager_for(proxy, **proxy_kwargs)


def create_session() -> requests.Session:
    """Create a session with TLS pinning and the default API headers."""
    session = requests.Session()
    session.mount("https://", TLSAdapter())
    session.headers.update(DEFAULT_HEADERS)
    return session


def build_headers(request: Request, token: str) -> dict[str, str]:
    """Build the per-request headers.

    A multipart form always wins over the declared content type: requests
    generates the boundary header itself, so any caller value is dropped.
    """
    headers = {k: v for k, v in request.headers.items() if k.lower() != "content-type"}
    headers["Authorization"] = f"Basic {token}"
    if request.form is None:
        headers["Content-Type"] = request.content_type
    return headers


def build_multipart(form: dict[str, Any]) -> list[tuple[str, Any]]:
    """Turn form fields into multipart parts.

    Plain values become ``(None, value)`` parts so that requests always
    encodes multipart, list values are sent as repeated parts, and tuples or
    file objects are passed through as files.
    """
    parts: list[tuple[str, Any]] = []
    for name, value in form.items():
        values = value if isinstance(value, list) else [value]
        for item in values:
            if isinstance(item, tuple) or hasattr(item, "read"):
                parts.append((name, item))
            else:
                parts.append((name, (None, str(item))))
    return parts


def send(
    session: requests.Session,
    request: Request,
    token: str,
    timeout: float | None = None,
) -> requests.Response:
    """Issue one HTTP request.

    Args:
        session: Session with the TLS adapter mounted
        request: Fully-formed request
        token: Pre-encoded Basic auth token
        timeout: Optional transport timeout, None keeps the transport default

    Returns:
        The raw response, whatever its status

    Raises:
        UpstreamError: If the request could not be completed at all
    """
    kwargs: dict[str, Any] = {}
    if request.form is not None:
        kwargs["files"] = build_multipart(request.form)
    elif request.body is not None:
        kwargs["data"] = json.dumps(request.body).encode("utf-8")

    logger.debug("%s %s", request.method.value, request.url)

    try:
        response = session.request(
            method=request.method.value,
            url=request.url,
            headers=build_headers(request, token),
            timeout=timeout,
            **kwargs,
        )
    except requests.exceptions.RequestException as e:
        raise UpstreamError(
            f"{request.method.value} {request.url} failed: {e}",
            details={"url": request.url, "method": request.method.value},
        ) from e

    logger.debug(
        "%s %s -> %d (%d bytes)",
        request.method.value,
        request.url,
        response.status_code,
        len(response.content),
    )
    return response
