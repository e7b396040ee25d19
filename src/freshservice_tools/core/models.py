"""Data models shared by the request engine and the resource clients."""

from enum import Enum
from typing import Any, NamedTuple
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# A single normalized record as returned by the API
Record = dict[str, Any]

DEFAULT_CONTENT_TYPE = "application/json"


class HttpMethod(str, Enum):
    """HTTP methods accepted by the engine."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class ErrorKind(str, Enum):
    """Error kinds a caller has to react to."""

    NOT_AUTHENTICATED = "not_authenticated"
    RATE_LIMITED = "rate_limited"
    VALIDATION_FAILED = "validation_failed"
    UPSTREAM_ERROR = "upstream_error"
    EMPTY_RESPONSE = "empty_response"
    UNRECOGNIZED_ENVELOPE = "unrecognized_envelope"


class ResultStatus(str, Enum):
    """Operation result status."""

    SUCCESS = "success"
    FAILED = "failed"


class Request(BaseModel):
    """A fully-formed API request."""

    method: HttpMethod = Field(description="HTTP method")
    url: str = Field(description="Absolute https URL, query string included")
    body: Any = Field(default=None, description="JSON-serializable request body")
    headers: dict[str, str] = Field(default_factory=dict, description="Extra request headers")
    form: dict[str, Any] | None = Field(default=None, description="Multipart form fields and files")
    content_type: str = Field(default=DEFAULT_CONTENT_TYPE, description="Declared content type")
    token: str | None = Field(default=None, description="Per-call token, overrides the client's")

    @field_validator("url")
    @classmethod
    def _url_is_absolute(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme != "https" or not parsed.netloc:
            raise ValueError(f"Request URL must be an absolute https URL: {value!r}")
        return value

    @model_validator(mode="after")
    def _body_or_form(self) -> "Request":
        if self.body is not None and self.form is not None:
            raise ValueError("Request body and multipart form are mutually exclusive")
        return self

    def with_url(self, url: str) -> "Request":
        """Return a copy of this request pointing at another URL."""
        return self.model_copy(update={"url": url})


class FieldError(BaseModel):
    """A single field-level validation error."""

    field: str | None = Field(default=None, description="Offending field")
    message: str | None = Field(default=None, description="What is wrong with it")
    code: str | None = Field(default=None, description="Machine readable error code")

    model_config = ConfigDict(extra="allow")


class ErrorEnvelope(BaseModel):
    """Structured error body returned on 4xx responses."""

    description: str | None = Field(default=None, description="Server-reported description")
    errors: list[FieldError] = Field(default_factory=list, description="Ordered field errors")

    model_config = ConfigDict(extra="allow")

    def summary(self) -> str:
        """Render the field errors as 'field field - message' entries joined by '; '."""
        return "; ".join(f"{error.field} field - {error.message}" for error in self.errors)


class RateState(NamedTuple):
    """Rate limit allowance for the current window, read from one response."""

    total: int
    remaining: int

    @property
    def percent_used(self) -> float:
        """Share of the window already consumed, rounded to 2 decimals."""
        return round((self.total - self.remaining) / self.total * 100, 2)


class Envelope(NamedTuple):
    """Known envelope keys for a resource."""

    singular: str
    plural: str


class Result(BaseModel):
    """Operation result with status and details."""

    status: ResultStatus = Field(description="Operation result status")
    message: str | None = Field(default=None, description="Result message")
    resource_id: str | None = Field(default=None, description="Affected resource ID")
    status_code: int | None = Field(default=None, description="HTTP status code")
    details: dict[str, Any] = Field(default_factory=dict, description="Additional details")

    model_config = ConfigDict(extra="allow")

    @property
    def success(self) -> bool:
        """Check if operation was successful."""
        return self.status == ResultStatus.SUCCESS
