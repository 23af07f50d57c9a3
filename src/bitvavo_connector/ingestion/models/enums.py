"""
Enums describing how an adapter talks to its provider.
"""

from enum import Enum


class ClientType(str, Enum):
    """
    Type of client implementation used by adapter.

    - WRAPPER: Uses third-party wrapper
    - NATIVE: Direct integration with provider's API
    """

    WRAPPER = "wrapper"
    NATIVE = "native"


class ConnectionType(str, Enum):
    """Network connection type used by adapter."""

    REST = "rest"
    WEBSOCKET = "websocket"
