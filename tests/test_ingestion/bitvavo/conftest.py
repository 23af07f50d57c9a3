"""
Fixtures for Bitvavo plugin tests.

FakeHttpClient stands in for AiohttpClient so no test touches the network.
"""

from collections import deque
from typing import Any

import pytest

from bitvavo_connector.ingestion.adapters.bitvavo_plugin import (
    BitvavoDependencyContainer,
)
from bitvavo_connector.ingestion.config.value_objects import Credentials, RetryConfig
from bitvavo_connector.ingestion.ports import HttpResponse


class FakeHttpClient:
    """Returns queued responses (or raises queued exceptions) and records calls."""

    def __init__(self, responses: list[Any] | None = None):
        self.responses = deque(responses or [])
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def queue(self, body: Any, status_code: int = 200, headers: dict | None = None):
        self.responses.append(
            HttpResponse(status_code=status_code, body=body, headers=headers or {}, url="")
        )

    async def request(self, method, url, data=None, headers=None, timeout=None):
        self.calls.append(
            {"method": method, "url": url, "data": data, "headers": headers, "timeout": timeout}
        )
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        response = self.responses.popleft()
        if isinstance(response, BaseException):
            raise response
        return response

    async def close(self):
        self.closed = True


class NoopThrottle:
    def __init__(self):
        self.acquired = 0

    async def acquire(self):
        self.acquired += 1


class FakeContainer(BitvavoDependencyContainer):
    """Container wired with the fake transport and a no-op throttle."""

    def __init__(self, http_client: FakeHttpClient, **kwargs):
        kwargs.setdefault(
            "retry_config", RetryConfig(max_attempts=3, base_delay=0.0, max_delay=0.0)
        )
        super().__init__(**kwargs)
        self.http_client = http_client
        self.throttle = NoopThrottle()

    def create_http_client(self):
        return self.http_client

    def create_throttle(self):
        return self.throttle


@pytest.fixture
def http_client() -> FakeHttpClient:
    return FakeHttpClient()


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(api_key="test-key", secret="test-secret")


@pytest.fixture
def public_container(http_client) -> FakeContainer:
    return FakeContainer(http_client)


@pytest.fixture
def private_container(http_client, credentials) -> FakeContainer:
    return FakeContainer(http_client, credentials=credentials)


@pytest.fixture
def make_container(http_client):
    """Build a FakeContainer with custom keyword arguments."""

    def _make(**kwargs) -> FakeContainer:
        return FakeContainer(http_client, **kwargs)

    return _make
