"""Unwrap Freshservice response envelopes into a list of records.

The API wraps data under the singular resource name for one record
(``{"ticket": {...}}``) and under the plural name for many
(``{"tickets": [...]}``). Filter queries add a ``total`` counter next to it.
"""

import json
from typing import Any

from freshservice_tools.core.exceptions import UnrecognizedEnvelopeError
from freshservice_tools.core.models import Envelope, Record

TOTAL_KEY = "total"


def normalize(body: bytes | str | dict[str, Any], envelope: Envelope | None = None) -> list[Record]:
    """Extract the records carried by a response body.

    Args:
        body: Raw response body or an already decoded JSON object
        envelope: Known singular/plural keys; when given, the data key must be one of them

    Returns:
        Records in server order; a single object becomes a one-element list

    Raises:
        UnrecognizedEnvelopeError: If the body is not a JSON object with exactly
            one data-bearing key of the expected shape
    """
    data = _decode(body)

    keys = [key for key in data if key != TOTAL_KEY]
    if len(keys) != 1:
        raise UnrecognizedEnvelopeError(
            f"Expected exactly one data property in response, found {keys}",
            keys=keys,
        )

    key = keys[0]
    if envelope is not None and key not in (envelope.singular, envelope.plural):
        raise UnrecognizedEnvelopeError(
            f"Expected '{envelope.singular}' or '{envelope.plural}' in response, found '{key}'",
            keys=keys,
        )

    value = data[key]
    if isinstance(value, dict):
        return [value]
    if isinstance(value, list):
        return list(value)
    raise UnrecognizedEnvelopeError(
        f"Property '{key}' holds {type(value).__name__}, expected an object or array",
        keys=keys,
    )


def _decode(body: bytes | str | dict[str, Any]) -> dict[str, Any]:
    if isinstance(body, dict):
        return body
    try:
        data = json.loads(body)
    except ValueError as e:
        raise UnrecognizedEnvelopeError(f"Response body is not JSON: {e}") from e
    if not isinstance(data, dict):
        raise UnrecognizedEnvelopeError(
            f"Response body is a JSON {type(data).__name__}, expected an object"
        )
    return data
