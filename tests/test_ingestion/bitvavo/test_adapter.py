"""
Tests for BitvavoAdapter named operations and the dependency container.
"""

import pytest

from bitvavo_connector.config import ConfigState
from bitvavo_connector.ingestion.adapters.bitvavo_plugin import (
    BitvavoAdapter,
    BitvavoDependencyContainer,
    BitvavoSigner,
    create_bitvavo_adapter_from_settings,
)
from bitvavo_connector.ingestion.adapters.bitvavo_plugin.exceptions import (
    CurrencyCodeCollisionError,
    MissingCredentialsError,
    UnsupportedEndpointError,
)
from bitvavo_connector.ingestion.adapters.bitvavo_plugin.rate_limiter import (
    RequestThrottler,
)
from bitvavo_connector.ingestion.connectors import AiohttpClient
from bitvavo_connector.shared.models import CollisionPolicy, DataVenue


class TestFetchOperations:
    @pytest.mark.asyncio
    async def test_fetch_time(self, public_container, http_client):
        http_client.queue({"time": 1590379519148})
        adapter = public_container.create_adapter()

        assert await adapter.fetch_time() == 1590379519148
        assert http_client.calls[0]["url"] == "https://api.bitvavo.com/v2/time"

    @pytest.mark.asyncio
    async def test_fetch_markets(self, public_container, http_client, ada_btc_market):
        halted = {**ada_btc_market, "market": "XBT-EUR", "base": "XBT", "quote": "EUR", "status": "halted"}
        http_client.queue([ada_btc_market, halted])
        adapter = public_container.create_adapter()

        markets = await adapter.fetch_markets()

        assert [m.symbol for m in markets] == ["ADA/BTC", "BTC/EUR"]
        assert [m.active for m in markets] == [True, False]

    @pytest.mark.asyncio
    async def test_fetch_currencies(self, public_container, http_client, ada_asset):
        http_client.queue([ada_asset, {**ada_asset, "symbol": "BTC", "withdrawalStatus": "MAINTENANCE"}])
        adapter = public_container.create_adapter()

        currencies = await adapter.fetch_currencies()

        assert set(currencies) == {"ADA", "BTC"}
        assert currencies["ADA"].active is True
        assert currencies["BTC"].active is False

    @pytest.mark.asyncio
    async def test_fetch_currencies_collision_policy(self, public_container, http_client, ada_asset):
        raws = [{**ada_asset, "symbol": "XBT"}, {**ada_asset, "symbol": "BTC"}]
        http_client.queue(raws)
        http_client.queue(raws)
        adapter = public_container.create_adapter()

        with pytest.raises(CurrencyCodeCollisionError):
            await adapter.fetch_currencies()

        currencies = await adapter.fetch_currencies(policy=CollisionPolicy.KEEP_LAST)
        assert currencies["BTC"].id == "BTC"

    @pytest.mark.asyncio
    async def test_common_currencies_override(self, make_container, http_client, ada_btc_market):
        container = make_container(common_currencies={"ADA": "CARDANO"})
        http_client.queue([ada_btc_market])
        adapter = container.create_adapter()

        markets = await adapter.fetch_markets()

        assert markets[0].symbol == "CARDANO/BTC"


class TestGenericRequest:
    @pytest.mark.asyncio
    async def test_undeclared_endpoint_rejected_before_io(self, private_container, http_client):
        adapter = private_container.create_adapter()

        with pytest.raises(UnsupportedEndpointError):
            await adapter.request("withdrawal", "private", "PUT", {"amount": "1"})
        with pytest.raises(UnsupportedEndpointError):
            await adapter.request("order", "public", "POST")

        assert http_client.calls == []

    @pytest.mark.asyncio
    async def test_declared_endpoint_returns_raw_json(self, private_container, http_client):
        http_client.queue([{"symbol": "BTC", "available": "1.5", "inOrder": "0"}])
        adapter = private_container.create_adapter()

        result = await adapter.request("balance", "private", "get", {"symbol": "BTC"})

        assert result == [{"symbol": "BTC", "available": "1.5", "inOrder": "0"}]
        assert http_client.calls[0]["url"].endswith("/v2/balance?symbol=BTC")

    @pytest.mark.asyncio
    async def test_private_request_without_credentials(self, public_container, http_client):
        adapter = public_container.create_adapter()

        with pytest.raises(MissingCredentialsError):
            await adapter.request("balance", "private")

        assert http_client.calls == []


class TestAdapterMetadata:
    def test_lineage(self, public_container):
        adapter = public_container.create_adapter()

        assert adapter.venue is DataVenue.BITVAVO
        assert "venue=bitvavo" in repr(adapter)

    def test_trading_fee(self, public_container):
        adapter = public_container.create_adapter()

        assert adapter.trading_fee() == (0.0020, 0.0025)
        assert adapter.trading_fee(1000000) == (0.0001, 0.0016)

    def test_check_required_credentials(self, public_container, private_container):
        private_container.create_adapter().check_required_credentials()

        with pytest.raises(MissingCredentialsError) as exc_info:
            public_container.create_adapter().check_required_credentials()

        assert exc_info.value.missing == ("api_key", "secret")

    @pytest.mark.asyncio
    async def test_context_manager(self, public_container, http_client):
        async with public_container.create_adapter() as adapter:
            assert adapter.connected

        assert not adapter.connected
        assert http_client.closed

    @pytest.mark.asyncio
    async def test_close_without_connect_releases_transport(
        self, public_container, http_client, ada_btc_market
    ):
        http_client.queue([ada_btc_market])
        adapter = public_container.create_adapter()

        await adapter.fetch_markets()
        await adapter.close()

        assert http_client.closed
        assert not adapter.connected


class TestDependencyContainer:
    def test_default_wiring(self):
        container = BitvavoDependencyContainer()
        client = container.create_client()

        assert isinstance(client.http_client, AiohttpClient)
        assert isinstance(client.throttle, RequestThrottler)
        assert client.throttle.interval == pytest.approx(0.1)
        assert client.signer is None

    def test_signer_created_with_credentials(self, credentials):
        container = BitvavoDependencyContainer(credentials=credentials, access_window=5000)

        signer = container.create_signer()

        assert isinstance(signer, BitvavoSigner)
        assert signer.access_window == 5000

    def test_adapter_from_settings(self):
        settings = ConfigState(
            bitvavo={
                "public_url": "https://sandbox.test",
                "api_key": "key",
                "api_secret": "secret",
                "rate_limit": 250,
                "common_currencies": {"XBT": "BTC"},
            },
            http={"timeout": 5},
            retry={"max_attempts": 5},
        )

        adapter = create_bitvavo_adapter_from_settings(settings)

        assert isinstance(adapter, BitvavoAdapter)
        assert adapter.description.urls.public == "https://sandbox.test"
        assert adapter.description.urls.private == "https://api.bitvavo.com"
        assert adapter.client.config.rate_limit == 250
        assert adapter.client.config.http_config.timeout == 5
        assert adapter.client.config.retry_config.max_attempts == 5
        assert adapter.client.config.credentials.has_secret
        assert adapter.common_currencies == {"XBT": "BTC"}
