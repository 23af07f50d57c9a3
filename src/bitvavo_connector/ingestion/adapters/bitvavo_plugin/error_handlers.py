"""Concrete error handlers for Bitvavo error mapping.

Bitvavo error bodies look like ``{"errorCode": 105, "error": "..."}``; the
numeric code is kept on the exception, the text goes into its message.
New status families are added by registering another handler with
ErrorMapperChain.
"""

from typing import Any

from .exceptions import (
    AuthenticationError,
    BadRequestError,
    BitvavoAPIError,
    NotFoundError,
    RateLimitError,
    ServerError,
)
from .strategies import (
    ErrorMapperChain,
    IErrorHandler,
    extract_error_code,
    extract_error_message,
    parse_retry_after,
)


class StatusErrorHandler(IErrorHandler):
    """Maps a fixed set of status codes to one exception type."""

    status_codes: frozenset[int] = frozenset()
    error_type: type[BitvavoAPIError] = BitvavoAPIError
    reason = "Request failed"

    def can_handle(self, status_code: int, body: Any) -> bool:
        return status_code in self.status_codes

    def handle(
        self,
        status_code: int,
        body: Any,
        endpoint: str,
        headers: dict[str, str] | None = None,
    ) -> BitvavoAPIError:
        return self.error_type(
            f"{self.reason} for {endpoint}: {extract_error_message(body)}",
            status_code=status_code,
            endpoint=endpoint,
            error_code=extract_error_code(body),
            **self.extra(headers),
        )

    def extra(self, headers: dict[str, str] | None) -> dict[str, Any]:
        return {}


class BadRequestHandler(StatusErrorHandler):
    status_codes = frozenset({400})
    error_type = BadRequestError
    reason = "Bad parameters"


class AuthenticationHandler(StatusErrorHandler):
    """Bad key, bad signature or a timestamp outside the access window."""

    status_codes = frozenset({401, 403})
    error_type = AuthenticationError
    reason = "Authentication failed"


class NotFoundHandler(StatusErrorHandler):
    status_codes = frozenset({404})
    error_type = NotFoundError
    reason = "Resource not found"


class RateLimitHandler(StatusErrorHandler):
    status_codes = frozenset({429})
    error_type = RateLimitError
    reason = "Rate limit exceeded"

    def extra(self, headers: dict[str, str] | None) -> dict[str, Any]:
        return {"retry_after": parse_retry_after(headers)}


class ServerErrorHandler(StatusErrorHandler):
    error_type = ServerError
    reason = "Server error"

    def can_handle(self, status_code: int, body: Any) -> bool:
        return 500 <= status_code < 600


def create_error_mapper_chain() -> ErrorMapperChain:
    """Chain with every standard Bitvavo handler registered."""
    chain = ErrorMapperChain()
    for handler in (
        BadRequestHandler(),
        AuthenticationHandler(),
        NotFoundHandler(),
        RateLimitHandler(),
        ServerErrorHandler(),
    ):
        chain.register(handler)
    return chain
