"""
Tests for request shaping.

build_request never signs and never performs I/O; its only failure path is
the credential check for private scope.
"""

import pytest

from bitvavo_connector.ingestion.adapters.bitvavo_plugin.description import BITVAVO
from bitvavo_connector.ingestion.adapters.bitvavo_plugin.exceptions import (
    MissingCredentialsError,
)
from bitvavo_connector.ingestion.adapters.bitvavo_plugin.request_builder import (
    build_request,
    check_required_credentials,
    encode_query,
    extract_params,
    implode_params,
)
from bitvavo_connector.ingestion.config.value_objects import Credentials
from bitvavo_connector.shared.models import ApiScope, HttpMethod

FULL = Credentials(api_key="key", secret="secret")


class TestPathHelpers:
    def test_extract_params(self):
        assert extract_params("{market}/book") == ["market"]
        assert extract_params("ticker/24h") == []

    def test_implode_params(self):
        assert implode_params("{market}/candles", {"market": "BTC-EUR"}) == "BTC-EUR/candles"

    def test_implode_leaves_unmatched_tokens(self):
        assert implode_params("{market}/book", {}) == "{market}/book"

    def test_encode_query_booleans(self):
        assert encode_query({"a": True, "b": False, "c": 1}) == "a=true&b=false&c=1"


class TestBuildRequestPublic:
    def test_path_param_interpolated_not_leaked(self):
        request = build_request(
            "{market}/book", "public", "GET", {"market": "ADA-BTC", "depth": 10}, FULL
        )

        assert request.url.endswith("/v2/ADA-BTC/book?depth=10")
        assert "market=" not in request.url
        assert request.method == "GET"
        assert request.body is None
        assert request.headers == {}

    def test_credentials_irrelevant_for_public(self):
        request = build_request("{market}/book", "public", "GET", {"market": "ADA-BTC"}, None)

        assert request.url == "https://api.bitvavo.com/v2/ADA-BTC/book"

    def test_no_query_string_without_leftovers(self):
        assert build_request("markets").url == "https://api.bitvavo.com/v2/markets"

    def test_query_keeps_insertion_order(self):
        request = build_request(
            "{market}/candles",
            params={"market": "BTC-EUR", "interval": "1h", "limit": 2},
        )

        assert request.url.endswith("/v2/BTC-EUR/candles?interval=1h&limit=2")

    def test_enum_and_lowercase_arguments(self):
        by_enum = build_request("time", ApiScope.PUBLIC, HttpMethod.GET)
        by_string = build_request("time", "public", "get")

        assert by_enum == by_string

    def test_input_params_not_mutated(self):
        params = {"market": "ADA-BTC", "depth": 10}
        build_request("{market}/book", params=params)

        assert params == {"market": "ADA-BTC", "depth": 10}

    def test_respects_description_version_and_url(self):
        description = BITVAVO.with_urls(public="https://sandbox.test").with_version("v3")

        request = build_request("markets", description=description)

        assert request.url == "https://sandbox.test/v3/markets"

    def test_unknown_scope_rejected(self):
        with pytest.raises(ValueError):
            build_request("markets", scope="internal")


class TestBuildRequestPrivate:
    def test_missing_credentials_fails(self):
        with pytest.raises(MissingCredentialsError) as exc_info:
            build_request("order", "private", "POST", {"market": "ADA-BTC"}, Credentials())

        assert exc_info.value.missing == ("api_key", "secret")

    @pytest.mark.parametrize(
        "credentials,missing",
        [
            (None, ("api_key", "secret")),
            (Credentials(api_key="key"), ("secret",)),
            (Credentials(secret="secret"), ("api_key",)),
            (Credentials(api_key="", secret="secret"), ("api_key",)),
        ],
    )
    def test_partial_credentials_fail(self, credentials, missing):
        with pytest.raises(MissingCredentialsError) as exc_info:
            build_request("balance", "private", "GET", None, credentials)

        assert exc_info.value.missing == missing

    def test_delete_params_go_to_body(self):
        request = build_request("order", "private", "DELETE", {"orderId": "1"}, FULL)

        assert request.body == {"orderId": "1"}
        assert "?" not in request.url
        assert request.url == "https://api.bitvavo.com/v2/order"
        assert request.method == "DELETE"

    def test_post_body(self):
        params = {"market": "BTC-EUR", "side": "buy", "orderType": "limit"}

        request = build_request("order", "private", "POST", params, FULL)

        assert request.body == params
        assert request.url.endswith("/v2/order")

    def test_non_get_without_params_has_empty_body(self):
        request = build_request("orders", "private", "DELETE", None, FULL)
        assert request.body == {}

    def test_private_get_uses_query_string(self):
        request = build_request("order", "private", "GET", {"market": "BTC-EUR", "orderId": "x"}, FULL)

        assert request.url.endswith("/v2/order?market=BTC-EUR&orderId=x")
        assert request.body is None

    def test_headers_never_set_by_builder(self):
        assert build_request("balance", "private", "GET", None, FULL).headers == {}

    def test_uses_private_base_url(self):
        description = BITVAVO.with_urls(private="https://private.test")

        request = build_request("balance", "private", "GET", None, FULL, description)

        assert request.url == "https://private.test/v2/balance"


class TestCheckRequiredCredentials:
    def test_passes_with_full_credentials(self):
        check_required_credentials(FULL)

    def test_message_names_missing_fields(self):
        with pytest.raises(MissingCredentialsError, match="secret"):
            check_required_credentials(Credentials(api_key="key"))
