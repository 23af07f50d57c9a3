"""Configuration package for bitvavo_connector."""

from .state import (
    BitvavoSettings,
    ConfigLoader,
    ConfigState,
    HttpSettings,
    LoggingConfig,
    RetrySettings,
    deep_merge,
    get_config,
)

__all__ = [
    "BitvavoSettings",
    "ConfigLoader",
    "ConfigState",
    "HttpSettings",
    "LoggingConfig",
    "RetrySettings",
    "deep_merge",
    "get_config",
]
