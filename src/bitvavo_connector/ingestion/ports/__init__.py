"""Ports for the ingestion layer."""

from .http import (  # noqa: F401
    HttpRequest,
    HttpResponse,
    IHttpClient,
    IRequestSigner,
    IThrottle,
)
from .validators import (  # noqa: F401
    IErrorMapper,
    IResponseValidator,
    IRetryHandler,
    ValidationResult,
)

__all__ = [
    "HttpRequest",
    "HttpResponse",
    "IHttpClient",
    "IRequestSigner",
    "IThrottle",
    "IResponseValidator",
    "IErrorMapper",
    "IRetryHandler",
    "ValidationResult",
]
