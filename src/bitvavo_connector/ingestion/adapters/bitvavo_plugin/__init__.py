"""
Bitvavo plugin: request shaping, signing, normalization and the adapter.
"""

from .adapter import BitvavoAdapter
from .client import BitvavoClient
from .dependency_container import (
    BitvavoDependencyContainer,
    create_bitvavo_adapter_from_settings,
)
from .description import BITVAVO, ExchangeDescription
from .exceptions import (
    AuthenticationError,
    BadRequestError,
    BitvavoAPIError,
    BitvavoError,
    CurrencyCodeCollisionError,
    MissingCredentialsError,
    NotFoundError,
    RateLimitError,
    ResponseValidationError,
    ServerError,
    UnsupportedEndpointError,
)
from .mappers import currency_from, market_from, parse_currencies, parse_markets
from .request_builder import build_request
from .signer import BitvavoSigner

__all__ = [
    "BITVAVO",
    "ExchangeDescription",
    "BitvavoAdapter",
    "BitvavoClient",
    "BitvavoDependencyContainer",
    "BitvavoSigner",
    "create_bitvavo_adapter_from_settings",
    "build_request",
    "market_from",
    "currency_from",
    "parse_markets",
    "parse_currencies",
    # Errors
    "BitvavoError",
    "BitvavoAPIError",
    "MissingCredentialsError",
    "UnsupportedEndpointError",
    "CurrencyCodeCollisionError",
    "BadRequestError",
    "AuthenticationError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "ResponseValidationError",
]
