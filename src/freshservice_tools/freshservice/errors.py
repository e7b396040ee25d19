"""Map Freshservice responses onto the error taxonomy."""

import logging
from typing import Any

import requests
from pydantic import ValidationError as PydanticValidationError

from freshservice_tools.core.exceptions import (
    EmptyResponseError,
    RateLimitError,
    UpstreamError,
    ValidationError,
)
from freshservice_tools.core.models import ErrorEnvelope, FieldError, HttpMethod, Request

logger = logging.getLogger(__name__)


def safe_json(response: requests.Response) -> Any:
    """Parse a JSON body, None when there is none or it is not JSON."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def parse_error_envelope(response: requests.Response) -> ErrorEnvelope:
    """Parse the structured error body.

    A string ``description`` is always kept. Field errors are validated one
    by one and malformed entries are skipped.
    """
    body = safe_json(response)
    if not isinstance(body, dict):
        return ErrorEnvelope()

    description = body.get("description")
    raw_errors = body.get("errors")
    errors = []
    if isinstance(raw_errors, list):
        for item in raw_errors:
            try:
                errors.append(FieldError.model_validate(item))
            except PydanticValidationError:
                logger.debug("Skipping malformed field error: %r", item)
    elif raw_errors is not None:
        logger.debug("Unexpected errors shape: %r", raw_errors)

    extra = {k: v for k, v in body.items() if k not in ("description", "errors")}
    return ErrorEnvelope.model_validate(
        {
            **extra,
            "description": description if isinstance(description, str) else None,
            "errors": errors,
        }
    )


def parse_retry_after(response: requests.Response) -> int:
    """Read the Retry-After header of a 429 response.

    Raises:
        RateLimitError: If the header is missing or not a positive integer
    """
    value = response.headers.get("Retry-After")
    try:
        seconds = int(value) if value is not None else 0
    except ValueError:
        seconds = 0
    if seconds <= 0:
        raise RateLimitError(
            f"Rate limited without a usable Retry-After header ({value!r})",
            retry_after=None,
            details={"url": response.url, "status_code": 429},
        )
    return seconds


def classify(request: Request, response: requests.Response) -> None:
    """Raise the matching error for a non-2xx response, return on success.

    Args:
        request: The request that produced the response
        response: The raw response

    Raises:
        RateLimitError: On 429
        ValidationError: On 400
        UpstreamError: On any other non-2xx status
    """
    status = response.status_code
    details = {"url": request.url, "method": request.method.value, "status_code": status}

    if 200 <= status < 300:
        return

    if status == 429:
        raise RateLimitError(
            "Rate limit exceeded",
            retry_after=parse_retry_after(response),
            details=details,
        )

    if status == 400:
        envelope = parse_error_envelope(response)
        description = envelope.description or "Request failed validation"
        summary = envelope.summary()
        message = f"{description}: {summary}" if summary else description
        raise ValidationError(message, envelope=envelope, details=details)

    raise UpstreamError(
        f"{request.method.value} {request.url} failed with status {status}",
        status_code=status,
        body=safe_json(response),
        details=details,
    )


def ensure_body(request: Request, response: requests.Response) -> None:
    """Reject a successful record-returning call that carries no body.

    A 204 on DELETE is the only success allowed to be empty.

    Raises:
        EmptyResponseError: If the body is empty
    """
    if request.method == HttpMethod.DELETE and response.status_code == 204:
        return
    if not response.content or not response.content.strip():
        raise EmptyResponseError(
            f"{request.method.value} {request.url} returned {response.status_code} with no body",
            status_code=response.status_code,
            details={"url": request.url, "method": request.method.value},
        )
