"""Ports for judging responses once the transport has returned.

Three questions are kept apart from the HTTP client:
is a 2xx body shaped the way the normalizer expects, which exception does a
non-2xx response become, and is a failed attempt worth repeating.
"""

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass
class ValidationResult:
    """Outcome of a structural check on a response body."""

    is_valid: bool
    error_message: str | None = None
    error_code: str | None = None

    @classmethod
    def failure(cls, message: str, code: str) -> "ValidationResult":
        return cls(is_valid=False, error_message=message, error_code=code)


class IResponseValidator(Protocol):
    """Checks a successful body before it reaches the mappers.

    Only shape is checked (array vs object, required keys). Field values are
    the mappers' concern and are never rejected here.
    """

    def validate(self, endpoint: str, data: Any) -> ValidationResult:
        """
        Args:
            endpoint: Path template as requested, e.g. "markets" or "{market}/book"
            data: Decoded body
        """
        ...


class IErrorMapper(Protocol):
    """Turns a non-2xx response into the exception raised to the caller."""

    def map_error(
        self,
        status_code: int,
        body: Any,
        endpoint: str,
        headers: dict[str, str] | None = None,
    ) -> Exception:
        ...


class IRetryHandler(Protocol):
    """Retry eligibility per status code, and the pause before the next attempt."""

    def should_retry(self, status_code: int) -> bool:
        ...

    def get_retry_delay(
        self,
        attempt_number: int,
        status_code: int,
        response_headers: dict[str, str] | None = None,
    ) -> float:
        """Seconds to wait after attempt ``attempt_number`` (1-based) failed.

        A ``Retry-After`` header, when present, takes precedence over backoff.
        """
        ...
