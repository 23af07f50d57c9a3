"""HTTP communication abstractions for adapter plugins.

Separates HTTP transport from request shaping, signing and error handling.
Allows easy mocking and swapping of HTTP implementations in tests.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True)
class HttpRequest:
    """A fully shaped outbound request.

    Built fresh per call and never reused: signature headers are call-specific.
    ``body`` is only set for verbs that carry a payload; ``headers`` are filled
    in by a signer, never by the request builder.
    """

    url: str
    method: str
    body: dict[str, Any] | None = None
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class HttpResponse:
    """HTTP response data container."""

    status_code: int
    body: Any  # JSON-decoded response body, or raw text when not JSON
    headers: dict[str, str]
    url: str


class IHttpClient(Protocol):
    """Abstraction for HTTP client.

    Single Responsibility: Execute HTTP requests and return responses.
    Does NOT handle:
    - Request shaping or signing
    - Response validation
    - Error mapping
    - Retry logic
    """

    async def request(
        self,
        method: str,
        url: str,
        data: str | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> HttpResponse:
        """Execute a request.

        Args:
            method: HTTP verb
            url: Full URL including any query string
            data: Already-serialized request body
            headers: HTTP headers
            timeout: Request timeout in seconds

        Raises:
            aiohttp.ClientError: On network or connection errors
        """
        ...

    async def close(self) -> None:
        """Release the underlying session."""
        ...


class IRequestSigner(Protocol):
    """Abstraction for request authentication.

    Single Responsibility: Given a shaped request, return a copy carrying
    authentication headers. Never changes url, method or body.
    """

    def sign(self, request: HttpRequest, timestamp_ms: int | None = None) -> HttpRequest:
        """Return a signed copy of ``request``."""
        ...


class IThrottle(Protocol):
    """Abstraction for pacing outbound calls."""

    async def acquire(self) -> None:
        """Wait until the next request may start."""
        ...
