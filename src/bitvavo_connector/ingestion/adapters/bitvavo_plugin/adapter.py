from collections.abc import Mapping
from typing import Any

from bitvavo_connector.common.utils.safe_access import safe_integer
from bitvavo_connector.infrastructure.observability import get_ingestion_logger
from bitvavo_connector.ingestion.adapters.base import BaseAdapter
from bitvavo_connector.ingestion.models.enums import ClientType, ConnectionType
from bitvavo_connector.shared.models.enums import (
    ApiScope,
    CollisionPolicy,
    DataVenue,
    HttpMethod,
    WrapperImplementation,
)
from bitvavo_connector.shared.models.markets import Currency, Market

from .client import BitvavoClient
from .exceptions import UnsupportedEndpointError
from .mappers import parse_currencies, parse_markets
from .request_builder import check_required_credentials


class BitvavoAdapter(BaseAdapter):
    """Adapter for the Bitvavo spot exchange.

    Named operations (fetch_time, fetch_markets, fetch_currencies) go through
    the injected BitvavoClient and hand raw JSON to the mappers. ``request``
    exposes every other declared endpoint and returns raw JSON.
    """

    venue = DataVenue.BITVAVO
    wrapper = WrapperImplementation.NONE

    client_type = ClientType.NATIVE
    connection_type = ConnectionType.REST

    def __init__(
        self,
        client: BitvavoClient,
        common_currencies: Mapping[str, str] | None = None,
        config: dict[str, Any] | None = None,
    ):
        super().__init__(config)
        self.client = client
        self.description = client.description
        self.common_currencies = common_currencies
        self.log = get_ingestion_logger("bitvavo-adapter", exchange=self.description.id)

    async def connect(self) -> None:
        """The HTTP session is opened lazily on the first request."""
        self._connected = True

    async def close(self) -> None:
        """Release the HTTP session, whether or not connect() was called."""
        await self.client.close()
        self._connected = False

    def check_required_credentials(self) -> None:
        """Raise MissingCredentialsError unless api_key and secret are configured."""
        check_required_credentials(self.client.config.credentials, self.description)

    async def request(
        self,
        path: str,
        scope: ApiScope | str = ApiScope.PUBLIC,
        method: HttpMethod | str = HttpMethod.GET,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Call any endpoint declared for Bitvavo and return the raw JSON.

        Raises:
            UnsupportedEndpointError: Before any I/O if the endpoint is not declared
            MissingCredentialsError: Before any I/O for private calls without credentials
        """
        scope = ApiScope(scope)
        method = HttpMethod(method.upper())
        if not self.description.has_endpoint(scope, method, path):
            raise UnsupportedEndpointError(
                f"{method.value} {path} is not a {scope.value} "
                f"{self.description.name} endpoint"
            )
        return await self.client.request(path, scope, method, params)

    async def fetch_time(self, params: Mapping[str, Any] | None = None) -> int | None:
        """Server clock in Unix milliseconds.

        Response: ``{"time": 1590379519148}``
        """
        response = await self.request("time", params=params)
        return safe_integer(response, "time")

    async def fetch_markets(self, params: Mapping[str, Any] | None = None) -> list[Market]:
        """All Bitvavo markets as canonical Market entities."""
        response = await self.request("markets", params=params)
        markets = parse_markets(response, self.common_currencies)
        self.log.info("markets_fetched", count=len(markets))
        return markets

    async def fetch_currencies(
        self,
        params: Mapping[str, Any] | None = None,
        policy: CollisionPolicy = CollisionPolicy.RAISE,
    ) -> dict[str, Currency]:
        """All Bitvavo assets as canonical Currency entities keyed by code.

        Raises:
            CurrencyCodeCollisionError: Two ids share a code and policy is RAISE
        """
        response = await self.request("assets", params=params)
        currencies = parse_currencies(response, policy, self.common_currencies)
        self.log.info("currencies_fetched", count=len(currencies))
        return currencies

    def trading_fee(self, volume: float = 0.0) -> tuple[float, float]:
        """``(maker, taker)`` fee for a 30-day trading volume in EUR."""
        return self.description.fees.fee_for_volume(volume)
