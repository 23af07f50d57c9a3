"""
Root conftest: puts src/ on the path and provides raw Bitvavo payloads.
"""

import logging
import sys
from pathlib import Path

import pytest

# Ensure src on path
sys.path.insert(0, str(Path(__file__).parent / "src"))

logger = logging.getLogger(__name__)


@pytest.fixture
def ada_btc_market() -> dict:
    """One record of ``GET /v2/markets``."""
    return {
        "market": "ADA-BTC",
        "status": "trading",
        "base": "ADA",
        "quote": "BTC",
        "pricePrecision": 5,
        "minOrderInBaseAsset": "100",
        "minOrderInQuoteAsset": "0.001",
        "orderTypes": ["market", "limit"],
    }


@pytest.fixture
def ada_asset() -> dict:
    """One record of ``GET /v2/assets``."""
    return {
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
        "message": "",
    }
