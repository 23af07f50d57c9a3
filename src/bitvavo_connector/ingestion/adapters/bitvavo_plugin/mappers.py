# bitvavo_connector/ingestion/adapters/bitvavo_plugin/mappers.py

"""Normalization of raw Bitvavo records into canonical entities.

``market_from`` and ``currency_from`` are pure: they never raise on missing
or mistyped fields, never mutate the raw record, and never turn an unknown
number into 0.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from bitvavo_connector.common.utils.safe_access import (
    safe_float,
    safe_integer,
    safe_string,
    safe_value,
)
from bitvavo_connector.infrastructure.observability import get_processing_logger
from bitvavo_connector.shared.models.enums import (
    AssetStatus,
    CollisionPolicy,
    MarketStatus,
)
from bitvavo_connector.shared.models.markets import (
    Currency,
    CurrencyLimits,
    Market,
    MarketLimits,
    MarketPrecision,
    MinMax,
)

from .exceptions import CurrencyCodeCollisionError

# Legacy tickers some venues still report, mapped to their canonical code
COMMON_CURRENCIES = {
    "XBT": "BTC",
    "BCC": "BCH",
    "BCHABC": "BCH",
    "BCHSV": "BSV",
    "DRK": "DASH",
}

log = get_processing_logger("bitvavo-mappers", exchange="bitvavo")


def safe_currency_code(
    currency_id: str | None,
    common_currencies: Mapping[str, str] | None = None,
) -> str | None:
    """Canonical currency code for a provider currency id."""
    if currency_id is None:
        return None
    aliases = COMMON_CURRENCIES if common_currencies is None else common_currencies
    code = currency_id.upper()
    return aliases.get(code, code)


def market_from(
    raw: Mapping[str, Any],
    common_currencies: Mapping[str, str] | None = None,
) -> Market:
    """Convert one ``GET /markets`` record into a Market.

    Example record:
        {
            "market": "ADA-BTC",
            "status": "trading",
            "base": "ADA",
            "quote": "BTC",
            "pricePrecision": 5,
            "minOrderInBaseAsset": "100",
            "minOrderInQuoteAsset": "0.001",
            "orderTypes": ["market", "limit"]
        }
    """
    base_id = safe_string(raw, "base")
    quote_id = safe_string(raw, "quote")
    base = safe_currency_code(base_id, common_currencies)
    quote = safe_currency_code(quote_id, common_currencies)

    return Market(
        id=safe_string(raw, "market"),
        symbol=f"{base}/{quote}" if base is not None and quote is not None else None,
        base=base,
        quote=quote,
        base_id=base_id,
        quote_id=quote_id,
        active=safe_string(raw, "status") == MarketStatus.TRADING.value,
        # Bitvavo publishes no amount precision per market
        precision=MarketPrecision(price=safe_integer(raw, "pricePrecision"), amount=None),
        limits=MarketLimits(
            amount=MinMax(min=safe_float(raw, "minOrderInBaseAsset")),
            price=MinMax(),
            cost=MinMax(min=safe_float(raw, "minOrderInQuoteAsset")),
        ),
        info=dict(raw) if isinstance(raw, Mapping) else {},
    )


def currency_from(
    raw: Mapping[str, Any],
    common_currencies: Mapping[str, str] | None = None,
) -> Currency:
    """Convert one ``GET /assets`` record into a Currency.

    Example record:
        {
            "symbol": "ADA",
            "name": "Cardano",
            "decimals": 6,
            "depositFee": "0",
            "depositConfirmations": 15,
            "depositStatus": "OK",
            "withdrawalFee": "0.2",
            "withdrawalMinAmount": "0.2",
            "withdrawalStatus": "OK",
            "networks": ["Mainnet"],
            "message": ""
        }
    """
    currency_id = safe_string(raw, "symbol")
    deposit = safe_value(raw, "depositStatus") == AssetStatus.OK.value
    withdrawal = safe_value(raw, "withdrawalStatus") == AssetStatus.OK.value

    return Currency(
        id=currency_id,
        code=safe_currency_code(currency_id, common_currencies),
        name=safe_string(raw, "name"),
        active=deposit and withdrawal,
        fee=safe_float(raw, "withdrawalFee"),
        precision=safe_integer(raw, "decimals"),
        limits=CurrencyLimits(withdraw=MinMax(min=safe_float(raw, "withdrawalMinAmount"))),
        info=dict(raw) if isinstance(raw, Mapping) else {},
    )


def parse_markets(
    raws: Iterable[Mapping[str, Any]],
    common_currencies: Mapping[str, str] | None = None,
) -> list[Market]:
    """Normalize a ``GET /markets`` response, preserving provider order."""
    markets = [market_from(raw, common_currencies) for raw in raws]
    log.debug(
        "markets_parsed",
        count=len(markets),
        active=sum(1 for market in markets if market.active),
    )
    return markets


def parse_currencies(
    raws: Iterable[Mapping[str, Any]],
    policy: CollisionPolicy = CollisionPolicy.RAISE,
    common_currencies: Mapping[str, str] | None = None,
) -> dict[str, Currency]:
    """Normalize a ``GET /assets`` response into a mapping keyed by code.

    Args:
        raws: Raw asset records in provider order
        policy: How to resolve two ids normalizing to the same code
        common_currencies: Optional override of the code alias table

    Raises:
        CurrencyCodeCollisionError: On a collision under CollisionPolicy.RAISE
    """
    result: dict[str, Currency] = {}
    for raw in raws:
        currency = currency_from(raw, common_currencies)
        code = currency.code
        if code is None:
            log.warning("currency_without_symbol_skipped", info=currency.info)
            continue

        existing = result.get(code)
        if existing is not None:
            if policy is CollisionPolicy.RAISE:
                raise CurrencyCodeCollisionError(code, existing.id, currency.id)
            log.warning(
                "currency_code_collision",
                code=code,
                kept=existing.id if policy is CollisionPolicy.KEEP_FIRST else currency.id,
                dropped=currency.id if policy is CollisionPolicy.KEEP_FIRST else existing.id,
            )
            if policy is CollisionPolicy.KEEP_FIRST:
                continue

        result[code] = currency

    log.debug("currencies_parsed", count=len(result))
    return result
