# bitvavo_connector/shared/models/markets.py

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MinMax(BaseModel):
    """A bound pair. ``None`` means the provider does not publish that bound."""

    model_config = ConfigDict(frozen=True)

    min: float | None = Field(default=None)
    max: float | None = Field(default=None)


class MarketPrecision(BaseModel):
    """Decimal places allowed for prices and amounts."""

    model_config = ConfigDict(frozen=True)

    price: int | None = Field(default=None)
    amount: int | None = Field(default=None)


class MarketLimits(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: MinMax = Field(default_factory=MinMax)
    price: MinMax = Field(default_factory=MinMax)
    cost: MinMax = Field(default_factory=MinMax)


class CurrencyLimits(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: MinMax = Field(default_factory=MinMax)
    price: MinMax = Field(default_factory=MinMax)
    cost: MinMax = Field(default_factory=MinMax)
    withdraw: MinMax = Field(default_factory=MinMax)


class Market(BaseModel):
    """
    Canonical tradable market.

    ``id`` is the provider's own market key and the join key back to it;
    ``symbol`` is always ``base + "/" + quote``. The raw provider record is
    kept untouched under ``info``.
    """

    model_config = ConfigDict(frozen=True)

    # ========== IDENTIFIERS ==========
    id: str | None = Field(default=None, description="Provider market id")
    symbol: str | None = Field(default=None, description="Canonical BASE/QUOTE")
    base: str | None = Field(default=None)
    quote: str | None = Field(default=None)
    base_id: str | None = Field(default=None)
    quote_id: str | None = Field(default=None)

    # ========== TRADING RULES ==========
    active: bool = Field(default=False)
    precision: MarketPrecision = Field(default_factory=MarketPrecision)
    limits: MarketLimits = Field(default_factory=MarketLimits)

    # ========== TRACEABILITY ==========
    info: dict[str, Any] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary"""
        return self.model_dump()


class Currency(BaseModel):
    """
    Canonical currency/asset.

    ``active`` is only true when the asset can be both deposited and
    withdrawn. ``fee`` is the withdrawal fee; ``None`` means unknown.
    """

    model_config = ConfigDict(frozen=True)

    id: str | None = Field(default=None, description="Provider asset symbol")
    code: str | None = Field(default=None, description="Canonical currency code")
    name: str | None = Field(default=None)
    active: bool = Field(default=False)
    fee: float | None = Field(default=None)
    precision: int | None = Field(default=None)
    limits: CurrencyLimits = Field(default_factory=CurrencyLimits)
    info: dict[str, Any] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary"""
        return self.model_dump()
