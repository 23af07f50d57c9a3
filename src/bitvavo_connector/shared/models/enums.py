"""
Shared enumerations for the Bitvavo connector.

Separates request routing values (scope, verb) from provider status sentinels.
"""

import enum


# ============================================================================
# REQUEST ROUTING
# ============================================================================
class ApiScope(str, enum.Enum):
    """Endpoint classification; selects base URL and credential requirement."""

    PUBLIC = "public"
    PRIVATE = "private"


class HttpMethod(str, enum.Enum):
    """Verbs accepted by the REST API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @property
    def is_read(self) -> bool:
        """Read verbs carry leftover params in the query string, not the body."""
        return self is HttpMethod.GET


# ============================================================================
# PROVIDER STATUS SENTINELS
# ============================================================================
class MarketStatus(str, enum.Enum):
    """Values observed in the ``status`` field of ``GET /markets``.

    Only TRADING marks a market active. Values outside this enum are
    tolerated and treated as inactive.
    """

    TRADING = "trading"
    HALTED = "halted"
    AUCTION = "auction"


class AssetStatus(str, enum.Enum):
    """Values observed in ``depositStatus`` / ``withdrawalStatus`` of ``GET /assets``."""

    OK = "OK"
    MAINTENANCE = "MAINTENANCE"
    DELISTED = "DELISTED"


# ============================================================================
# DATA LINEAGE
# ============================================================================
class DataVenue(str, enum.Enum):
    """The venue where the data originates."""

    BITVAVO = "bitvavo"


class WrapperImplementation(str, enum.Enum):
    """How we access the venue. NONE means direct native API access."""

    NONE = "none"


class CollisionPolicy(str, enum.Enum):
    """What to do when two provider ids normalize to the same currency code.

    - RAISE: refuse to build the mapping
    - KEEP_FIRST: the earliest record in provider order wins
    - KEEP_LAST: the latest record in provider order wins
    """

    RAISE = "raise"
    KEEP_FIRST = "keep_first"
    KEEP_LAST = "keep_last"
