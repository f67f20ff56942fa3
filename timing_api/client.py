"""
Timing API Client

Handles authentication, base HTTP client configuration, response envelope
unwrapping and transport error normalization.
"""

import os
from collections.abc import Mapping
from typing import Any, Self

import httpx
import logfire
from pydantic import Field, field_validator

from timing_api.api import Projects, Reports, TimeEntries
from timing_api.models import APIModel
from timing_api.utils import compact_dict

DEFAULT_BASE_URL = "https://web.timingapp.com/api/v1"
DEFAULT_TIMEOUT_MS = 10_000
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"


# =============================================================================
# Errors
# =============================================================================

class TimingAPIError(Exception):
    """
    A request that failed at the transport boundary.

    Raised for HTTP error responses and for requests that never got a
    response (connection refused, DNS failure, timeout). In the latter case
    `status` is 500.
    """

    def __init__(
        self,
        message: str,
        status: int = 500,
        code: str | None = None,
        original_error: httpx.HTTPError | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.original_error = original_error

    def __repr__(self) -> str:
        return f"TimingAPIError(status={self.status}, message={self.message!r}, code={self.code!r})"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for logging or JSON output."""
        result: dict[str, Any] = {"error": self.message, "status": self.status}
        if self.code is not None:
            result["code"] = self.code
        return result


def is_api_error(error: Any) -> bool:
    """Check whether `error` is a normalized transport error."""
    return isinstance(error, TimingAPIError)


def _error_body(error: httpx.HTTPError) -> dict[str, Any]:
    """Best-effort JSON body of a failed response; {} when there is none."""
    if not isinstance(error, httpx.HTTPStatusError):
        return {}
    try:
        body = error.response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def normalize_error(error: BaseException) -> TimingAPIError:
    """
    Convert a transport error into a TimingAPIError.

    Anything that did not come from httpx is re-raised untouched, so an
    already normalized error is never wrapped twice.

    Message lookup order: the body's `error` field (a string, or an object
    with a `message`), the body's `message` field, the httpx error text,
    then a fixed fallback.
    """
    if not isinstance(error, httpx.HTTPError):
        raise error

    status = error.response.status_code if isinstance(error, httpx.HTTPStatusError) else 500
    body = _error_body(error)

    error_field = body.get("error")
    if isinstance(error_field, dict):
        error_field = error_field.get("message")
    message = error_field or body.get("message") or str(error) or UNKNOWN_ERROR_MESSAGE

    code = body.get("code")
    return TimingAPIError(
        str(message),
        status=status,
        code=str(code) if code is not None else None,
        original_error=error,
    )


# =============================================================================
# Responses
# =============================================================================

class APIResponse:
    """
    Wrapper around a successful httpx.Response.

    Every Timing API response is an envelope of the form {"data": ...};
    `data` unwraps it. The payload keeps the API's snake_case field names.
    """

    def __init__(self, response: httpx.Response):
        self._response = response
        self._body: Any = None
        if response.content:
            try:
                self._body = response.json()
            except ValueError:
                logfire.warn(
                    "Response body is not valid JSON, treating it as empty.",
                    status=response.status_code,
                )

    @property
    def response(self) -> httpx.Response:
        """Access the underlying httpx.Response."""
        return self._response

    @property
    def status_code(self) -> int:
        """HTTP status code."""
        return self._response.status_code

    @property
    def body(self) -> Any:
        """Decoded JSON body, or None for an empty/undecodable body."""
        return self._body

    @property
    def data(self) -> Any:
        """
        The envelope payload.

        No validation is done on the payload; a body without a `data` key
        yields None.
        """
        if isinstance(self._body, Mapping):
            return self._body.get("data")
        return None


def encode_query(params: Mapping[str, Any]) -> list[tuple[str, Any]]:
    """
    Flatten a query mapping into (key, value) pairs.

    Lists become repeated `key[]` entries and nested mappings `key[sub]`,
    matching what the Timing API parses. None values are dropped.

        >>> encode_query({'projects': ['/projects/1', ''], 'include_app_usage': False})
        [('projects[]', '/projects/1'), ('projects[]', ''), ('include_app_usage', False)]
    """
    pairs: list[tuple[str, Any]] = []

    def add(key: str, value: Any) -> None:
        if value is None:
            return
        if isinstance(value, Mapping):
            for sub_key, sub_value in value.items():
                add(f"{key}[{sub_key}]", sub_value)
        elif isinstance(value, (list, tuple)):
            for item in value:
                add(f"{key}[]", item)
        else:
            pairs.append((key, value))

    for key, value in compact_dict(**params).items():
        add(key, value)
    return pairs


# =============================================================================
# Client
# =============================================================================

class TimingClientConfig(APIModel):
    """Configuration for the Timing API client."""

    api_key: str
    """API key, sent as a bearer token."""

    base_url: str = DEFAULT_BASE_URL
    """Base URL of the Timing API."""

    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)
    """Request timeout in milliseconds. Must be positive."""

    verify_ssl: bool = True

    @field_validator("api_key")
    @classmethod
    def _require_api_key(cls, value: str) -> str:
        if not value:
            raise ValueError("API key is required")
        return value

    @classmethod
    def from_env(cls, **overrides: Any) -> "TimingClientConfig":
        """
        Build a config from TIMING_API_KEY, TIMING_BASE_URL and TIMING_TIMEOUT_MS.

        Keyword overrides take precedence over the environment.
        """
        values: dict[str, Any] = {"api_key": os.getenv("TIMING_API_KEY", "")}
        if base_url := os.getenv("TIMING_BASE_URL"):
            values["base_url"] = base_url
        if timeout_ms := os.getenv("TIMING_TIMEOUT_MS"):
            values["timeout_ms"] = timeout_ms
        values.update(overrides)
        return cls(**values)


class TimingClient:
    """
    HTTP client for the Timing API.

    Handles authentication and base configuration, and exposes the resource
    clients. Configuration is fixed at construction, so a single instance can
    serve any number of concurrent calls.

    Usage:
        config = TimingClientConfig(api_key="...")
        async with TimingClient(config) as client:
            projects = await client.projects.list({"hideArchived": True})

            entry = await client.time_entries.start(
                {"project": "/projects/1", "title": "Writing", "replaceExisting": True}
            )
            await client.time_entries.stop()

            rows = await client.reports.generate({"columns": ["project"], "sort": ["-duration"]})
    """

    def __init__(
        self,
        config: TimingClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            config: Client configuration
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self.config = config
        self.http = self._create_client(transport)

        self.projects = Projects(self)
        self.time_entries = TimeEntries(self)
        self.reports = Reports(self)

    def _create_client(self, transport: httpx.AsyncBaseTransport | None) -> httpx.AsyncClient:
        """Create the HTTP client with authentication."""
        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        return httpx.AsyncClient(
            base_url=self.config.base_url,
            headers=headers,
            timeout=self.config.timeout_ms / 1000,
            verify=self.config.verify_ssl,
            transport=transport,
        )

    async def __aenter__(self) -> Self:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.http.aclose()

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """
        Make an authenticated request.

        This is the only place transport errors are caught; they leave as
        TimingAPIError. Any other exception propagates unchanged.
        """
        logfire.debug("{method} {path}", method=method, path=path)
        try:
            response = await self.http.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            error = normalize_error(exc)
            logfire.warn("{method} {path} failed: {status} {error}", method=method, path=path, **error.to_dict())
            raise error from exc
        return response

    async def request(self, method: str, url: str, **kwargs: Any) -> Any:
        """
        Send a custom request for endpoints without a resource client.

        Args:
            method: HTTP method
            url: Path relative to the base URL (or an absolute URL)
            **kwargs: Passed through to httpx (json, params, headers, ...)

        Returns:
            The decoded response body, envelope included

        Raises:
            TimingAPIError: If the request failed at the transport level
        """
        return APIResponse(await self._send(method.upper(), url, **kwargs)).body

    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> APIResponse:
        """
        Make a GET request.

        `params=None` sends no query parameters at all; a mapping (even an
        empty one) is encoded with encode_query.
        """
        encoded = None if params is None else encode_query(params)
        return APIResponse(await self._send("GET", path, params=encoded))

    async def post(self, path: str, json: Any = None) -> APIResponse:
        """Make a POST request with a JSON body."""
        return APIResponse(await self._send("POST", path, json=json))

    async def put(self, path: str, json: Any = None) -> APIResponse:
        """Make a PUT request with a JSON body."""
        return APIResponse(await self._send("PUT", path, json=json))

    async def delete(self, path: str) -> APIResponse:
        """Make a DELETE request."""
        return APIResponse(await self._send("DELETE", path))
