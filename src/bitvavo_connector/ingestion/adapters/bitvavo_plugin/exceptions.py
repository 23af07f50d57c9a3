"""
Bitvavo Exception Hierarchy

Provides specific exception types for the failure modes of the connector,
enabling proper error classification and handling downstream.

Errors raised before any network I/O (missing credentials, undeclared
endpoints, currency code collisions) derive from BitvavoError directly;
errors returned by the API derive from BitvavoAPIError.
"""


class BitvavoError(Exception):
    """Base exception for all connector errors."""


class MissingCredentialsError(BitvavoError):
    """A private endpoint was requested without an API key and secret."""

    def __init__(self, message: str, missing: tuple[str, ...] = ()):
        super().__init__(message)
        self.missing = missing


class UnsupportedEndpointError(BitvavoError):
    """The (scope, method, path) triple is not declared for this exchange."""


class CurrencyCodeCollisionError(BitvavoError):
    """Two provider ids normalized to the same canonical currency code."""

    def __init__(self, code: str, first_id: str | None, second_id: str | None):
        super().__init__(
            f"Currency ids {first_id!r} and {second_id!r} both map to code {code!r}"
        )
        self.code = code
        self.first_id = first_id
        self.second_id = second_id


class BitvavoAPIError(BitvavoError):
    """Base exception for errors returned by the Bitvavo API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        endpoint: str | None = None,
        error_code: int | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.endpoint = endpoint
        self.error_code = error_code


class BadRequestError(BitvavoAPIError):
    """400 - Bad parameter(s) in the request."""

    pass


class AuthenticationError(BitvavoAPIError):
    """401/403 - Invalid key, bad signature or expired access window."""

    pass


class NotFoundError(BitvavoAPIError):
    """404 - Resource not found (market, order, endpoint)."""

    pass


class RateLimitError(BitvavoAPIError):
    """429 - Too many requests, rate limit exceeded."""

    def __init__(self, message: str, retry_after: float | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ServerError(BitvavoAPIError):
    """500+ - Server-side error."""

    pass


class ResponseValidationError(BitvavoAPIError):
    """Response validation failed."""

    pass
