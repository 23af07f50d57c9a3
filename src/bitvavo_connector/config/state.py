"""
Runtime configuration for the connector.

Resolution order, later wins:
  1. model defaults
  2. bitvavo.yaml, http.yaml, logging.yaml in the config directory
  3. env/<env>.yaml
  4. environment variables (credentials, access window, log level)
"""

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from bitvavo_connector.infrastructure.observability import (
    get_infrastructure_logger,
    setup_logging,
)

log = get_infrastructure_logger("config-loader")


# =============================================================================
# SETTINGS MODELS
# =============================================================================


class BitvavoSettings(BaseModel):
    """Exchange endpoints, credentials and pacing."""

    model_config = ConfigDict(extra="allow")

    public_url: str = Field(default="https://api.bitvavo.com")
    private_url: str = Field(default="https://api.bitvavo.com")
    version: str = Field(default="v2")
    api_key: str | None = Field(default=None, repr=False)
    api_secret: str | None = Field(default=None, repr=False)
    access_window: int = Field(default=10000, ge=1, le=60000)
    rate_limit: int = Field(default=100, ge=0, description="Milliseconds between requests")
    common_currencies: dict[str, str] = Field(default_factory=dict)

    @field_validator("public_url", "private_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Base URLs must be absolute and carry no trailing slash."""
        if not v.startswith(("https://", "http://")):
            raise ValueError("Base URL must start with http:// or https://")
        return v.rstrip("/")

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key and self.api_secret)


class HttpSettings(BaseModel):
    model_config = ConfigDict(extra="allow")

    timeout: float = Field(default=30.0, gt=0)


class RetrySettings(BaseModel):
    """Backoff for idempotent (GET) requests."""

    model_config = ConfigDict(extra="allow")

    max_attempts: int = Field(default=3, ge=1, le=20)
    base_delay: float = Field(default=1.0, ge=0)
    max_delay: float = Field(default=30.0, ge=0)
    backoff_multiplier: float = Field(default=2.0, ge=1.0)


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    level: str = Field(default="INFO")
    json_logs: bool = Field(default=True)

    def apply(self) -> None:
        """Configure process-wide logging from these settings."""
        setup_logging(level=self.level, json_logs=self.json_logs)


class ConfigState(BaseModel):
    """Everything the connector reads at startup."""

    model_config = ConfigDict(extra="allow")

    bitvavo: BitvavoSettings = Field(default_factory=BitvavoSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)
    retry: RetrySettings = Field(default_factory=RetrySettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    env: str = Field(default="dev")
    config_dir: str = Field(default="./config")


# =============================================================================
# LOADER
# =============================================================================

# env var -> (section, key, cast)
ENV_OVERRIDES: dict[str, tuple[str, str, Callable[[str], Any]]] = {
    "BITVAVO_API_KEY": ("bitvavo", "api_key", str),
    "BITVAVO_API_SECRET": ("bitvavo", "api_secret", str),
    "BITVAVO_ACCESS_WINDOW": ("bitvavo", "access_window", int),
    "LOG_LEVEL": ("logging", "level", str),
}


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """New dict with ``override`` merged into ``base``; nested dicts merge key by key."""
    result = dict(base)
    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        else:
            result[key] = value
    return result


class ConfigLoader:
    """Reads YAML from ``config_dir``, applies env overrides, validates once."""

    CONFIG_FILES = ("bitvavo.yaml", "http.yaml", "logging.yaml")

    def __init__(self, config_dir: str = "./config", env: str | None = None):
        self.config_dir = Path(config_dir)
        self.env = env or os.getenv("BITVAVO_ENV", "dev")

    def _read(self, path: Path) -> dict[str, Any]:
        """Mapping stored in ``path``; a missing file counts as empty."""
        if not path.exists():
            log.debug("config_file_missing", path=str(path))
            return {}

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        log.debug("config_file_loaded", path=str(path))
        return data

    def _env_overrides(self) -> dict[str, Any]:
        overrides: dict[str, Any] = {}
        for name, (section, key, cast) in ENV_OVERRIDES.items():
            value = os.getenv(name)
            if value:
                overrides.setdefault(section, {})[key] = cast(value)
        return overrides

    def load(self) -> ConfigState:
        """
        Raises:
            pydantic.ValidationError: A value fails validation
            ValueError: A config file is not a mapping, or an env override cannot be cast
        """
        sources = [self.config_dir / name for name in self.CONFIG_FILES]
        sources.append(self.config_dir / "env" / f"{self.env}.yaml")

        config: dict[str, Any] = {}
        for path in sources:
            config = deep_merge(config, self._read(path))
        config = deep_merge(config, self._env_overrides())

        state = ConfigState(env=self.env, config_dir=str(self.config_dir), **config)

        log.info(
            "config_loaded",
            config_dir=str(self.config_dir),
            env=self.env,
            credentials=state.bitvavo.has_credentials,
            rate_limit_ms=state.bitvavo.rate_limit,
        )
        return state


def get_config(config_dir: str | None = None) -> ConfigState:
    """
    Load configuration from ``config_dir``, ``$BITVAVO_CONFIG_DIR`` or ./config.
    """
    if config_dir is None:
        config_dir = os.getenv("BITVAVO_CONFIG_DIR", "./config")
        if not Path(config_dir).exists():
            log.warning("config_dir_missing", config_dir=config_dir)

    return ConfigLoader(config_dir=config_dir).load()


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
