"""Response validation and retry policy injected into BitvavoClient."""

from typing import Any

from bitvavo_connector.ingestion.config.value_objects import RetryConfig
from bitvavo_connector.ingestion.ports.validators import (
    IResponseValidator,
    IRetryHandler,
    ValidationResult,
)

from .strategies import parse_retry_after


class BitvavoResponseValidator(IResponseValidator):
    """Shape checks for the payloads the adapter parses itself.

    ``markets`` and ``assets`` must be arrays of objects and ``time`` must be an
    object carrying ``time``. Every other endpoint is returned raw and passes.
    """

    LIST_ENDPOINTS = frozenset({"markets", "assets"})

    def validate(self, endpoint: str, data: Any) -> ValidationResult:
        if endpoint in self.LIST_ENDPOINTS:
            if not isinstance(data, list):
                return ValidationResult.failure(
                    f"'{endpoint}' response must be an array", "INVALID_STRUCTURE"
                )
            if not all(isinstance(item, dict) for item in data):
                return ValidationResult.failure(
                    f"'{endpoint}' entries must be objects", "INVALID_ENTRY_TYPE"
                )
        elif endpoint == "time":
            if not isinstance(data, dict) or "time" not in data:
                return ValidationResult.failure(
                    "Missing 'time' field in response", "MISSING_TIME_FIELD"
                )
        return ValidationResult(is_valid=True)


class BitvavoRetryHandler(IRetryHandler):
    """Capped exponential backoff; a server-sent Retry-After wins when present."""

    def __init__(self, config: RetryConfig):
        self.config = config

    def should_retry(self, status_code: int) -> bool:
        return status_code in self.config.retryable_status_codes

    def get_retry_delay(
        self,
        attempt_number: int,
        status_code: int,
        response_headers: dict[str, str] | None = None,
    ) -> float:
        retry_after = parse_retry_after(response_headers)
        if retry_after is not None:
            delay = retry_after
        else:
            delay = self.config.base_delay * self.config.backoff_multiplier ** (
                attempt_number - 1
            )
        return min(delay, self.config.max_delay)
