"""
Base adapter for single-venue exchange connectors.

Data lineage is explicit through venue + wrapper tracking.
"""

from abc import ABC, abstractmethod
from typing import Any

from bitvavo_connector.ingestion.models.enums import (
    ClientType,
    ConnectionType,
)
from bitvavo_connector.shared.models.enums import (
    DataVenue,
    WrapperImplementation,
)
from bitvavo_connector.shared.models.markets import Currency, Market


class BaseAdapter(ABC):
    """
    The shape one exchange adapter must conform to.

    - venue: WHERE the data originates (the actual exchange)
    - wrapper: HOW we access it (NONE for the native API)

    Adapters return canonical entities (Market, Currency); raw provider
    payloads stay available under each entity's ``info``.

    Attributes:
        venue: Data venue - WHERE data comes from
        wrapper: Wrapper implementation - HOW we access it
        client_type: Type of client implementation (WRAPPER, NATIVE)
        connection_type: Network protocol (REST, WEBSOCKET)
    """

    venue: DataVenue
    wrapper: WrapperImplementation

    client_type: ClientType
    connection_type: ConnectionType

    def __init__(self, config: dict[str, Any] | None = None):
        """Initialize adapter state."""
        self.config = config or {}
        self._connected = False

    @abstractmethod
    async def connect(self) -> None:
        """Establish connection to the provider (idempotent)."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close connection and clean up resources (idempotent)."""
        pass

    @abstractmethod
    async def fetch_time(self) -> int | None:
        """Server clock in Unix milliseconds."""
        pass

    @abstractmethod
    async def fetch_markets(self) -> list[Market]:
        """All markets listed by the venue."""
        pass

    @abstractmethod
    async def fetch_currencies(self) -> dict[str, Currency]:
        """All currencies listed by the venue, keyed by canonical code."""
        pass

    @property
    def connected(self) -> bool:
        return self._connected

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"venue={self.venue.value}, "
            f"wrapper={self.wrapper.value}, "
            f"client_type={self.client_type.value}, "
            f"connected={self._connected})"
        )
