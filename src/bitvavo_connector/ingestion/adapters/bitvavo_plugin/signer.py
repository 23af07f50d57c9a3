"""
Request signer for the Bitvavo REST API.

Signing is a separate stage from request shaping: the signer takes an
already-built HttpRequest and returns a copy with authentication headers,
leaving url, method and body untouched.

Signature: hex HMAC-SHA256 keyed with the API secret over
``timestamp + METHOD + /v2/path?query + body``.
"""

import hashlib
import hmac
import json
from dataclasses import replace
from typing import Any
from urllib.parse import urlsplit

from bitvavo_connector.common.utils.date_utils import to_unix_ms, utc_now
from bitvavo_connector.ingestion.config.value_objects import Credentials
from bitvavo_connector.ingestion.ports.http import HttpRequest

from .exceptions import MissingCredentialsError

HEADER_KEY = "Bitvavo-Access-Key"
HEADER_SIGNATURE = "Bitvavo-Access-Signature"
HEADER_TIMESTAMP = "Bitvavo-Access-Timestamp"
HEADER_WINDOW = "Bitvavo-Access-Window"


def encode_body(body: dict[str, Any] | None) -> str:
    """Serialize a request body exactly as it is sent and signed."""
    if body is None:
        return ""
    return json.dumps(body, separators=(",", ":"))


def signing_path(url: str) -> str:
    """Path plus query of ``url``, the part of the URL covered by the signature."""
    parts = urlsplit(url)
    return f"{parts.path}?{parts.query}" if parts.query else parts.path


class BitvavoSigner:
    """HMAC-SHA256 signer for private Bitvavo requests."""

    def __init__(self, credentials: Credentials, access_window: int = 10000):
        if not credentials.has_key or not credentials.has_secret:
            raise MissingCredentialsError(
                "Cannot sign requests without api_key and secret",
                missing=credentials.missing(),
            )
        self._credentials = credentials
        self.access_window = access_window

    def signature(self, timestamp_ms: int, method: str, url: str, body: str) -> str:
        message = f"{timestamp_ms}{method.upper()}{signing_path(url)}{body}"
        return hmac.new(
            self._credentials.secret.encode("utf-8"),
            message.encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()

    def sign(self, request: HttpRequest, timestamp_ms: int | None = None) -> HttpRequest:
        """Return a copy of ``request`` carrying the Bitvavo auth headers.

        Args:
            request: Shaped request from build_request
            timestamp_ms: Unix ms to sign with; defaults to now

        Returns:
            New HttpRequest; the original is not modified
        """
        if timestamp_ms is None:
            timestamp_ms = to_unix_ms(utc_now())

        headers = dict(request.headers)
        headers.update(
            {
                HEADER_KEY: self._credentials.api_key,
                HEADER_SIGNATURE: self.signature(
                    timestamp_ms, request.method, request.url, encode_body(request.body)
                ),
                HEADER_TIMESTAMP: str(timestamp_ms),
                HEADER_WINDOW: str(self.access_window),
                "Content-Type": "application/json",
            }
        )
        return replace(request, headers=headers)
