"""
Tests for error mapping, response validation and retry decisions.
"""

import pytest

from bitvavo_connector.ingestion.adapters.bitvavo_plugin.error_handlers import (
    create_error_mapper_chain,
)
from bitvavo_connector.ingestion.adapters.bitvavo_plugin.exceptions import (
    AuthenticationError,
    BadRequestError,
    BitvavoAPIError,
    NotFoundError,
    RateLimitError,
    ServerError,
)
from bitvavo_connector.ingestion.adapters.bitvavo_plugin.impls import (
    BitvavoResponseValidator,
    BitvavoRetryHandler,
)
from bitvavo_connector.ingestion.config.value_objects import RetryConfig


class TestErrorMapperChain:
    @pytest.fixture
    def chain(self):
        return create_error_mapper_chain()

    @pytest.mark.parametrize(
        "status_code,error_type",
        [
            (400, BadRequestError),
            (401, AuthenticationError),
            (403, AuthenticationError),
            (404, NotFoundError),
            (429, RateLimitError),
            (500, ServerError),
            (503, ServerError),
        ],
    )
    def test_status_mapping(self, chain, status_code, error_type):
        error = chain.map_error(status_code, {"errorCode": 105, "error": "boom"}, "markets")

        assert type(error) is error_type
        assert error.status_code == status_code
        assert error.endpoint == "markets"
        assert error.error_code == 105
        assert "boom" in str(error)

    def test_unmatched_status_falls_back(self, chain):
        error = chain.map_error(418, "teapot", "time")

        assert type(error) is BitvavoAPIError
        assert error.error_code is None
        assert "teapot" in str(error)

    def test_rate_limit_retry_after(self, chain):
        error = chain.map_error(429, {}, "markets", {"Retry-After": "2.5"})

        assert error.retry_after == 2.5

    def test_rate_limit_bad_retry_after(self, chain):
        error = chain.map_error(429, {}, "markets", {"Retry-After": "soon"})

        assert error.retry_after is None

    def test_bool_error_code_ignored(self, chain):
        assert chain.map_error(400, {"errorCode": True}, "order").error_code is None


class TestBitvavoResponseValidator:
    @pytest.fixture
    def validator(self):
        return BitvavoResponseValidator()

    @pytest.mark.parametrize("endpoint", ["markets", "assets"])
    def test_list_endpoints(self, validator, endpoint):
        assert validator.validate(endpoint, [{"a": 1}]).is_valid
        assert validator.validate(endpoint, []).is_valid

        result = validator.validate(endpoint, {"error": "x"})
        assert not result.is_valid
        assert result.error_code == "INVALID_STRUCTURE"

        result = validator.validate(endpoint, [{"a": 1}, "b"])
        assert not result.is_valid
        assert result.error_code == "INVALID_ENTRY_TYPE"

    def test_time_endpoint(self, validator):
        assert validator.validate("time", {"time": 1}).is_valid
        assert not validator.validate("time", {}).is_valid
        assert not validator.validate("time", [1]).is_valid

    def test_other_endpoints_pass_through(self, validator):
        assert validator.validate("{market}/book", {"bids": [], "asks": []}).is_valid


class TestBitvavoRetryHandler:
    @pytest.fixture
    def handler(self):
        return BitvavoRetryHandler(
            RetryConfig(base_delay=1.0, max_delay=10.0, backoff_multiplier=2.0)
        )

    @pytest.mark.parametrize("status_code", [429, 500, 502, 503, 504])
    def test_retryable(self, handler, status_code):
        assert handler.should_retry(status_code)

    @pytest.mark.parametrize("status_code", [400, 401, 403, 404, 501])
    def test_not_retryable(self, handler, status_code):
        assert not handler.should_retry(status_code)

    def test_exponential_backoff_capped(self, handler):
        delays = [handler.get_retry_delay(n, 503) for n in range(1, 6)]

        assert delays == [1.0, 2.0, 4.0, 8.0, 10.0]

    def test_retry_after_header(self, handler):
        assert handler.get_retry_delay(1, 429, {"Retry-After": "3"}) == 3.0
        assert handler.get_retry_delay(1, 429, {"Retry-After": "60"}) == 10.0
        assert handler.get_retry_delay(2, 429, {"Retry-After": "later"}) == 2.0
