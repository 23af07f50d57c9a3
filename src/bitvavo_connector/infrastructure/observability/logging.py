"""
Structured logging for bitvavo-connector.

Every event is a flat, machine-readable record:
    {
        "app": "bitvavo-connector",
        "layer": "ingestion",
        "component": "bitvavo-client",
        "exchange": "bitvavo",
        "event": "request_prepared",
        "path": "markets",
        ...
    }

Layers:
    - infrastructure: config loading, logging setup
    - ingestion: request shaping, signing, transport, adapter calls
    - processing: normalization of raw provider records

Values bound under credential-like keys are masked before rendering.
"""

import logging
import sys
from typing import Any, Literal

import structlog
from structlog.types import EventDict, Processor

APP_NAME = "bitvavo-connector"

Layer = Literal["infrastructure", "ingestion", "processing"]

SEVERITY = {
    "debug": "DEBUG",
    "info": "INFO",
    "warning": "WARNING",
    "error": "ERROR",
    "critical": "CRITICAL",
}

SECRET_KEYS = frozenset(
    {
        "api_secret",
        "secret",
        "signature",
        "bitvavo-access-signature",
        "bitvavo-access-key",
    }
)
REDACTED = "***"


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict["app"] = APP_NAME
    return event_dict


def add_severity_level(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    """Cloud-logging style ``severity`` next to structlog's ``level``."""
    level = event_dict.get("level")
    if level:
        event_dict["severity"] = SEVERITY.get(level, "INFO")
    return event_dict


def redact_secrets(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask credential values, including inside a bound ``headers`` mapping."""
    for key in list(event_dict):
        if key.lower() in SECRET_KEYS:
            event_dict[key] = REDACTED
    headers = event_dict.get("headers")
    if isinstance(headers, dict):
        event_dict["headers"] = {
            name: REDACTED if name.lower() in SECRET_KEYS else value
            for name, value in headers.items()
        }
    return event_dict


def build_processors(json_logs: bool, include_timestamp: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_app_context,
        structlog.stdlib.add_log_level,
        add_severity_level,
        redact_secrets,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if include_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    return processors


def setup_logging(
    level: str = "INFO",
    json_logs: bool = True,
    include_timestamp: bool = True,
) -> None:
    """
    Configure stdlib logging and structlog for the whole process.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL; unknown names mean INFO
        json_logs: JSON lines when True, colored console output otherwise
        include_timestamp: Prepend an ISO ``timestamp`` to every event

    Usage:
        >>> from bitvavo_connector.infrastructure.observability import setup_logging
        >>> setup_logging(level="DEBUG", json_logs=False)
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=build_processors(json_logs, include_timestamp),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(
    name: str | None = None,
    layer: Layer | None = None,
    component: str | None = None,
    **initial_context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Logger bound with architectural context.

    Args:
        name: Logger name, also bound as ``module``
        layer: Architectural layer
        component: Component within the layer
        **initial_context: Extra key-value pairs bound to every event

    Usage:
        >>> log = get_logger(__name__, layer="ingestion", component="bitvavo-client")
        >>> log.info("request_prepared", path="markets")
    """
    logger = structlog.get_logger(name)

    context = {
        key: value
        for key, value in (("layer", layer), ("component", component), ("module", name))
        if value
    }
    context.update(initial_context)

    return logger.bind(**context) if context else logger


# ============================================================================
# Layer-Specific Logger Factories
# ============================================================================


def _layer_logger(layer: Layer, component: str, **context: Any) -> structlog.stdlib.BoundLogger:
    return get_logger(layer, layer=layer, component=component, **context)


def get_infrastructure_logger(component: str, **context: Any) -> structlog.stdlib.BoundLogger:
    """
    Usage:
        >>> log = get_infrastructure_logger("config-loader")
        >>> log.info("config_loaded", env="dev")
    """
    return _layer_logger("infrastructure", component, **context)


def get_ingestion_logger(
    component: str,
    exchange: str | None = None,
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Args:
        component: e.g. "bitvavo-client", "bitvavo-adapter"
        exchange: Exchange id; omitted from events when None

    Usage:
        >>> log = get_ingestion_logger("bitvavo-client", exchange="bitvavo")
        >>> log.info("request_prepared", path="markets")
    """
    if exchange:
        context = {"exchange": exchange, **context}
    return _layer_logger("ingestion", component, **context)


def get_processing_logger(component: str, **context: Any) -> structlog.stdlib.BoundLogger:
    """
    Usage:
        >>> log = get_processing_logger("bitvavo-mappers")
        >>> log.info("markets_parsed", count=200)
    """
    return _layer_logger("processing", component, **context)
