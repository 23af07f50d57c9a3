"""Configuration value objects for dependency injection.

Instead of injecting the global settings object, inject specific configuration
dataclasses into each component. Enables:
- Easy testing with different configurations
- Clear constructor contracts
- Validation at composition root
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class HttpClientConfig:
    """Configuration for HTTP client."""

    timeout: float = 30.0


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior."""

    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0
    backoff_multiplier: float = 2.0
    retryable_status_codes: tuple[int, ...] = (429, 500, 502, 503, 504)


@dataclass(frozen=True)
class Credentials:
    """API key + secret pair. Only presence is checked here, never validity."""

    api_key: str | None = field(default=None, repr=False)
    secret: str | None = field(default=None, repr=False)

    @property
    def has_key(self) -> bool:
        return bool(self.api_key)

    @property
    def has_secret(self) -> bool:
        return bool(self.secret)

    def missing(self) -> tuple[str, ...]:
        """Names of the credential fields that are not configured."""
        missing = []
        if not self.has_key:
            missing.append("api_key")
        if not self.has_secret:
            missing.append("secret")
        return tuple(missing)


@dataclass(frozen=True)
class BitvavoConfig:
    """Configuration for the Bitvavo client."""

    credentials: Credentials = field(default_factory=Credentials)
    access_window: int = 10000  # Milliseconds a signed request stays valid
    rate_limit: int = 100  # Minimum milliseconds between requests
    http_config: HttpClientConfig = field(default_factory=HttpClientConfig)
    retry_config: RetryConfig = field(default_factory=RetryConfig)
