"""
Tests for the aiohttp transport that need no network.
"""

import pytest

from bitvavo_connector.ingestion.config.value_objects import HttpClientConfig
from bitvavo_connector.ingestion.connectors import AiohttpClient
from bitvavo_connector.ingestion.connectors.aiohttp_client import decode_body


class TestDecodeBody:
    def test_json_object(self):
        assert decode_body('{"time": 1539180275424}') == {"time": 1539180275424}

    def test_json_array(self):
        assert decode_body("[]") == []

    def test_plain_text_kept(self):
        assert decode_body("Bad Gateway") == "Bad Gateway"

    def test_empty_is_none(self):
        assert decode_body("") is None


class TestAiohttpClientLifecycle:
    @pytest.mark.asyncio
    async def test_close_without_session(self):
        client = AiohttpClient(HttpClientConfig())
        await client.close()
        await client.close()

    @pytest.mark.asyncio
    async def test_session_reopened_after_close(self):
        client = AiohttpClient(HttpClientConfig(timeout=5))
        first = client.session
        assert first is client.session

        await client.close()
        assert first.closed

        second = client.session
        assert second is not first
        await client.close()
