"""Transport connectors."""

from .aiohttp_client import AiohttpClient

__all__ = ["AiohttpClient"]
