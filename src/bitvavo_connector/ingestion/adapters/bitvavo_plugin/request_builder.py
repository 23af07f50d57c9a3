# bitvavo_connector/ingestion/adapters/bitvavo_plugin/request_builder.py

"""Request shaping for the Bitvavo REST API.

``build_request`` is a pure function of its inputs: it performs no I/O, keeps
no state and never signs. A private request with missing credentials fails
here, before any URL is returned and before the transport is touched.
"""

import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from bitvavo_connector.ingestion.config.value_objects import Credentials
from bitvavo_connector.ingestion.ports.http import HttpRequest
from bitvavo_connector.shared.models.enums import ApiScope, HttpMethod

from .description import BITVAVO, ExchangeDescription
from .exceptions import MissingCredentialsError

_PLACEHOLDER = re.compile(r"\{([^{}]+)\}")


def extract_params(path: str) -> list[str]:
    """Names of the ``{placeholder}`` tokens in ``path``, in order."""
    return _PLACEHOLDER.findall(path)


def implode_params(path: str, params: Mapping[str, Any]) -> str:
    """Substitute ``{name}`` tokens with values from ``params``.

    Tokens without a matching parameter are left in place.
    """

    def _substitute(match: re.Match) -> str:
        name = match.group(1)
        if name in params:
            return str(params[name])
        return match.group(0)

    return _PLACEHOLDER.sub(_substitute, path)


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def encode_query(params: Mapping[str, Any]) -> str:
    """URL-encode params in insertion order; booleans become true/false."""
    return urlencode({key: _query_value(value) for key, value in params.items()})


def check_required_credentials(
    credentials: Credentials | None,
    description: ExchangeDescription = BITVAVO,
) -> None:
    """Raise MissingCredentialsError unless every required credential is present."""
    credentials = credentials or Credentials()
    missing = tuple(
        name for name in credentials.missing() if name in description.required_credentials
    )
    if missing:
        raise MissingCredentialsError(
            f"{description.name} requires {', '.join(missing)} for private endpoints",
            missing=missing,
        )


def build_request(
    path: str,
    scope: ApiScope | str = ApiScope.PUBLIC,
    method: HttpMethod | str = HttpMethod.GET,
    params: Mapping[str, Any] | None = None,
    credentials: Credentials | None = None,
    description: ExchangeDescription = BITVAVO,
) -> HttpRequest:
    """Turn a logical (path, scope, method, params) tuple into an HttpRequest.

    Args:
        path: Path template relative to the versioned base, e.g. "{market}/book"
        scope: public or private; selects base URL and credential requirement
        method: HTTP verb
        params: Path and request parameters
        credentials: Configured API key/secret (presence only is checked)
        description: Static exchange metadata (version, base URLs)

    Returns:
        HttpRequest with url, method and body; headers are left empty

    Raises:
        MissingCredentialsError: Private scope without key and secret
    """
    scope = ApiScope(scope)
    method = HttpMethod(method.upper())
    params = dict(params or {})

    path_names = set(extract_params(path))
    query = {key: value for key, value in params.items() if key not in path_names}

    url = f"/{description.version}/{implode_params(path, params)}"
    body: dict[str, Any] | None = None

    if method.is_read:
        if query:
            url += "?" + encode_query(query)
    else:
        body = query

    if scope is ApiScope.PRIVATE:
        check_required_credentials(credentials, description)

    return HttpRequest(
        url=description.base_url(scope) + url,
        method=method.value,
        body=body,
    )
