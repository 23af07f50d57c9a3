"""Chain of responsibility for turning Bitvavo error responses into exceptions.

Handlers are asked in registration order; the first one that claims the
status code builds the exception. Helpers here read the pieces of a Bitvavo
error response that every handler needs.
"""

from typing import Any, Protocol

from .exceptions import BitvavoAPIError


class IErrorHandler(Protocol):
    """One error family (usually one status code or a status range)."""

    def can_handle(self, status_code: int, body: Any) -> bool:
        ...

    def handle(
        self,
        status_code: int,
        body: Any,
        endpoint: str,
        headers: dict[str, str] | None = None,
    ) -> BitvavoAPIError:
        """Build (not raise) the exception for this response."""
        ...


class ErrorMapperChain:
    """Ordered handler registry; unmatched statuses fall back to BitvavoAPIError."""

    def __init__(self):
        self._handlers: list[IErrorHandler] = []

    def register(self, handler: IErrorHandler) -> None:
        self._handlers.append(handler)

    def map_error(
        self,
        status_code: int,
        body: Any,
        endpoint: str,
        headers: dict[str, str] | None = None,
    ) -> BitvavoAPIError:
        """
        Args:
            status_code: HTTP status of the failed response
            body: Decoded body, or raw text when it was not JSON
            endpoint: Path template that was requested
            headers: Response headers (Retry-After)

        Returns:
            The exception for the caller to raise
        """
        for handler in self._handlers:
            if handler.can_handle(status_code, body):
                return handler.handle(status_code, body, endpoint, headers)

        return BitvavoAPIError(
            f"Unexpected status {status_code} for {endpoint}: {extract_error_message(body)}",
            status_code=status_code,
            endpoint=endpoint,
            error_code=extract_error_code(body),
        )


def extract_error_message(body: Any) -> str:
    """Human-readable text of an error body (``error``, then ``message``)."""
    if isinstance(body, dict):
        return body.get("error") or body.get("message") or str(body)
    return body if isinstance(body, str) else str(body)


def extract_error_code(body: Any) -> int | None:
    """Bitvavo's numeric ``errorCode``, if the body carries one."""
    code = body.get("errorCode") if isinstance(body, dict) else None
    if isinstance(code, int) and not isinstance(code, bool):
        return code
    return None


def parse_retry_after(headers: dict[str, str] | None) -> float | None:
    """Seconds from a ``Retry-After`` header, matched case-insensitively."""
    if not headers:
        return None
    for name, value in headers.items():
        if name.lower() == "retry-after":
            try:
                return float(value)
            except (TypeError, ValueError):
                return None
    return None
