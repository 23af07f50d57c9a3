"""Dependency injection container for the Bitvavo connector.

Wires the abstractions and their implementations together.
This is the single place where concrete implementations are chosen.

Usage:
    container = BitvavoDependencyContainer(credentials=Credentials(key, secret))
    adapter = container.create_adapter()
"""

from collections.abc import Mapping

from bitvavo_connector.config.state import ConfigState
from bitvavo_connector.ingestion.config.value_objects import (
    BitvavoConfig,
    Credentials,
    HttpClientConfig,
    RetryConfig,
)
from bitvavo_connector.ingestion.connectors.aiohttp_client import AiohttpClient
from bitvavo_connector.ingestion.ports import (
    IErrorMapper,
    IHttpClient,
    IRequestSigner,
    IResponseValidator,
    IRetryHandler,
    IThrottle,
)

from .adapter import BitvavoAdapter
from .client import BitvavoClient
from .description import BITVAVO, ExchangeDescription
from .error_handlers import create_error_mapper_chain
from .impls import BitvavoResponseValidator, BitvavoRetryHandler
from .rate_limiter import RequestThrottler
from .signer import BitvavoSigner


class BitvavoDependencyContainer:
    """Dependency injection container for the Bitvavo client and adapter.

    Responsible for:
    1. Choosing concrete implementations for each protocol
    2. Creating configuration value objects
    3. Wiring dependencies together

    Tests can subclass this and override the create_* methods to inject mocks.
    """

    def __init__(
        self,
        credentials: Credentials | None = None,
        description: ExchangeDescription = BITVAVO,
        access_window: int = 10000,
        rate_limit: int | None = None,
        http_config: HttpClientConfig | None = None,
        retry_config: RetryConfig | None = None,
        common_currencies: Mapping[str, str] | None = None,
    ):
        """Initialize container with configuration.

        Args:
            credentials: API key/secret (optional; public endpoints only without)
            description: Static exchange metadata
            access_window: Validity window of signed requests (ms)
            rate_limit: Minimum ms between requests (defaults to description)
            http_config: HTTP client configuration (optional, uses defaults)
            retry_config: Retry behavior configuration (optional, uses defaults)
            common_currencies: Override of the currency code alias table
        """
        self.description = description
        self.common_currencies = common_currencies
        self.config = BitvavoConfig(
            credentials=credentials or Credentials(),
            access_window=access_window,
            rate_limit=description.rate_limit if rate_limit is None else rate_limit,
            http_config=http_config or HttpClientConfig(),
            retry_config=retry_config or RetryConfig(),
        )

    def create_http_client(self) -> IHttpClient:
        """Create HTTP client implementation (currently AiohttpClient)."""
        return AiohttpClient(self.config.http_config)

    def create_signer(self) -> IRequestSigner | None:
        """Create the request signer, or None when credentials are incomplete."""
        credentials = self.config.credentials
        if not (credentials.has_key and credentials.has_secret):
            return None
        return BitvavoSigner(credentials, access_window=self.config.access_window)

    def create_throttle(self) -> IThrottle:
        return RequestThrottler(self.config.rate_limit)

    def create_response_validator(self) -> IResponseValidator:
        return BitvavoResponseValidator()

    def create_retry_handler(self) -> IRetryHandler:
        return BitvavoRetryHandler(self.config.retry_config)

    def create_error_mapper(self) -> IErrorMapper:
        return create_error_mapper_chain()

    def create_client(self) -> BitvavoClient:
        """Create fully-wired BitvavoClient."""
        return BitvavoClient(
            config=self.config,
            description=self.description,
            http_client=self.create_http_client(),
            signer=self.create_signer(),
            throttle=self.create_throttle(),
            response_validator=self.create_response_validator(),
            retry_handler=self.create_retry_handler(),
            error_mapper=self.create_error_mapper(),
        )

    def create_adapter(self) -> BitvavoAdapter:
        """Create BitvavoAdapter on top of a fresh client."""
        return BitvavoAdapter(self.create_client(), self.common_currencies)


def create_bitvavo_adapter_from_settings(settings: ConfigState) -> BitvavoAdapter:
    """Factory function to create BitvavoAdapter from a ConfigState.

    Logging is process-wide and left to the caller: run
    ``settings.logging.apply()`` once at startup.

    Args:
        settings: Loaded configuration state

    Returns:
        Fully configured BitvavoAdapter
    """
    bitvavo = settings.bitvavo
    description = BITVAVO.with_urls(
        public=bitvavo.public_url, private=bitvavo.private_url
    ).with_version(bitvavo.version)

    container = BitvavoDependencyContainer(
        credentials=Credentials(api_key=bitvavo.api_key, secret=bitvavo.api_secret),
        description=description,
        access_window=bitvavo.access_window,
        rate_limit=bitvavo.rate_limit,
        http_config=HttpClientConfig(timeout=settings.http.timeout),
        retry_config=RetryConfig(
            max_attempts=settings.retry.max_attempts,
            base_delay=settings.retry.base_delay,
            max_delay=settings.retry.max_delay,
            backoff_multiplier=settings.retry.backoff_multiplier,
        ),
        common_currencies=bitvavo.common_currencies or None,
    )
    return container.create_adapter()
