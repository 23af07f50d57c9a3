"""Shared domain models."""

from bitvavo_connector.shared.models.enums import (
    ApiScope,
    AssetStatus,
    CollisionPolicy,
    DataVenue,
    HttpMethod,
    MarketStatus,
    WrapperImplementation,
)
from bitvavo_connector.shared.models.markets import (
    Currency,
    CurrencyLimits,
    Market,
    MarketLimits,
    MarketPrecision,
    MinMax,
)

__all__ = [
    # Enums
    "ApiScope",
    "HttpMethod",
    "MarketStatus",
    "AssetStatus",
    "DataVenue",
    "WrapperImplementation",
    "CollisionPolicy",
    # Models
    "Market",
    "MarketPrecision",
    "MarketLimits",
    "Currency",
    "CurrencyLimits",
    "MinMax",
]
