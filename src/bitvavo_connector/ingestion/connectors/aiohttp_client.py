"""aiohttp transport for the connector.

Bodies arrive already serialized so the bytes on the wire are exactly the
bytes that were signed.
"""

import json
from typing import Any

import aiohttp

from bitvavo_connector.ingestion.config.value_objects import HttpClientConfig
from bitvavo_connector.ingestion.ports.http import HttpResponse, IHttpClient


def decode_body(text: str) -> Any:
    """JSON value of ``text``; raw text when it is not JSON, None when empty."""
    if not text:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


class AiohttpClient(IHttpClient):
    """IHttpClient backed by one lazily opened aiohttp.ClientSession."""

    def __init__(self, config: HttpClientConfig):
        self.config = config
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.config.timeout)
            )
        return self._session

    async def request(
        self,
        method: str,
        url: str,
        data: str | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> HttpResponse:
        """
        Raises:
            aiohttp.ClientError: Connection level failures
            asyncio.TimeoutError: No complete response within ``timeout``
        """
        per_call = aiohttp.ClientTimeout(total=timeout or self.config.timeout)
        async with self.session.request(
            method, url, data=data or None, headers=headers, timeout=per_call
        ) as resp:
            text = await resp.text()

        return HttpResponse(
            status_code=resp.status,
            body=decode_body(text),
            headers=dict(resp.headers),
            url=str(resp.url),
        )

    async def close(self) -> None:
        session, self._session = self._session, None
        if session is not None and not session.closed:
            await session.close()
