"""Static description of the Bitvavo exchange.

Endpoint lists, URLs, fee schedule and credential requirements are fixed per
adapter, so they are modelled as frozen dataclasses assembled once at import
time. Overrides (e.g. a different base URL) go through ``with_urls`` which
returns a new description.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from bitvavo_connector.shared.models.enums import ApiScope, HttpMethod


@dataclass(frozen=True)
class ApiUrls:
    public: str
    private: str
    www: str | None = None
    doc: str | None = None
    fees: str | None = None
    logo: str | None = None


@dataclass(frozen=True)
class FeeTier:
    """Fee applied from ``volume`` (30-day, quote currency) upwards."""

    volume: float
    fee: float


@dataclass(frozen=True)
class TradingFees:
    tier_based: bool
    percentage: bool
    taker: float
    maker: float
    taker_tiers: tuple[FeeTier, ...] = ()
    maker_tiers: tuple[FeeTier, ...] = ()

    @staticmethod
    def _tier_fee(tiers: tuple[FeeTier, ...], volume: float, default: float) -> float:
        fee = default
        for tier in sorted(tiers, key=lambda t: t.volume):
            if volume >= tier.volume:
                fee = tier.fee
            else:
                break
        return fee

    def fee_for_volume(self, volume: float) -> tuple[float, float]:
        """Return ``(maker, taker)`` for the highest tier reached by ``volume``."""
        if volume < 0:
            raise ValueError(f"Trading volume must be non-negative, got {volume}")
        if not self.tier_based:
            return self.maker, self.taker
        return (
            self._tier_fee(self.maker_tiers, volume, self.maker),
            self._tier_fee(self.taker_tiers, volume, self.taker),
        )


@dataclass(frozen=True)
class ExchangeDescription:
    """Everything about the exchange that is configuration, not behaviour."""

    id: str
    name: str
    version: str
    urls: ApiUrls
    api: Mapping[ApiScope, Mapping[HttpMethod, tuple[str, ...]]]
    fees: TradingFees
    countries: tuple[str, ...] = ()
    rate_limit: int = 1000  # Milliseconds between requests
    certified: bool = False
    has: Mapping[str, bool] = field(default_factory=dict)
    required_credentials: tuple[str, ...] = ("api_key", "secret")

    def base_url(self, scope: ApiScope) -> str:
        """Base URL for the given scope."""
        if scope is ApiScope.PRIVATE:
            return self.urls.private
        return self.urls.public

    def has_endpoint(self, scope: ApiScope, method: HttpMethod, path: str) -> bool:
        """Whether ``path`` is declared for ``scope`` and ``method``."""
        return path in self.api.get(scope, {}).get(method, ())

    def endpoints(self) -> list[tuple[ApiScope, HttpMethod, str]]:
        """Flat list of every declared (scope, method, path)."""
        return [
            (scope, method, path)
            for scope, methods in self.api.items()
            for method, paths in methods.items()
            for path in paths
        ]

    def with_urls(
        self, public: str | None = None, private: str | None = None
    ) -> "ExchangeDescription":
        """Copy of this description with base URLs overridden."""
        urls = replace(
            self.urls,
            public=public or self.urls.public,
            private=private or self.urls.private,
        )
        return replace(self, urls=urls)

    def with_version(self, version: str) -> "ExchangeDescription":
        return replace(self, version=version)


def _tiers(rows: list[tuple[float, float]]) -> tuple[FeeTier, ...]:
    return tuple(FeeTier(volume=volume, fee=fee) for volume, fee in rows)


BITVAVO = ExchangeDescription(
    id="bitvavo",
    name="Bitvavo",
    countries=("NL",),
    rate_limit=100,
    version="v2",
    certified=True,
    has=MappingProxyType(
        {
            "CORS": False,
            "publicAPI": True,
            "privateAPI": True,
            "fetchCurrencies": True,
            "fetchMarkets": True,
            "fetchTime": True,
        }
    ),
    urls=ApiUrls(
        public="https://api.bitvavo.com",
        private="https://api.bitvavo.com",
        www="https://bitvavo.com/",
        doc="https://docs.bitvavo.com/",
        fees="https://bitvavo.com/en/fees",
        logo="https://user-images.githubusercontent.com/1294454/82067900-faeb0f80-96d9-11ea-9f22-0071cfcb9871.jpg",
    ),
    api=MappingProxyType(
        {
            ApiScope.PUBLIC: MappingProxyType(
                {
                    HttpMethod.GET: (
                        "time",
                        "markets",
                        "assets",
                        "{market}/book",
                        "{market}/trades",
                        "{market}/candles",
                        "ticker/price",
                        "ticker/book",
                        "ticker/24h",
                    ),
                }
            ),
            ApiScope.PRIVATE: MappingProxyType(
                {
                    HttpMethod.GET: (
                        "order",
                        "orders",
                        "ordersOpen",
                        "trades",
                        "balance",
                        "deposit",
                        "depositHistory",
                        "withdrawalHistory",
                    ),
                    HttpMethod.POST: ("order", "withdrawal"),
                    HttpMethod.PUT: ("order",),
                    HttpMethod.DELETE: ("order", "orders"),
                }
            ),
        }
    ),
    fees=TradingFees(
        tier_based=True,
        percentage=True,
        taker=0.25 / 100,
        maker=0.20 / 100,
        taker_tiers=_tiers(
            [
                (0, 0.0025),
                (50000, 0.0024),
                (100000, 0.0022),
                (250000, 0.0020),
                (500000, 0.0018),
                (1000000, 0.0016),
                (2500000, 0.0014),
                (5000000, 0.0012),
                (10000000, 0.0010),
            ]
        ),
        maker_tiers=_tiers(
            [
                (0, 0.0020),
                (50000, 0.0015),
                (100000, 0.0010),
                (250000, 0.0006),
                (500000, 0.0003),
                (1000000, 0.0001),
                (2500000, -0.0001),
                (5000000, -0.0003),
                (10000000, -0.0005),
            ]
        ),
    ),
    required_credentials=("api_key", "secret"),
)
