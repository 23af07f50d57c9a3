import asyncio
from collections.abc import Mapping
from typing import Any

import aiohttp

from bitvavo_connector.infrastructure.observability import get_ingestion_logger
from bitvavo_connector.ingestion.config.value_objects import BitvavoConfig
from bitvavo_connector.ingestion.ports import (
    HttpRequest,
    HttpResponse,
    IErrorMapper,
    IHttpClient,
    IRequestSigner,
    IResponseValidator,
    IRetryHandler,
    IThrottle,
)
from bitvavo_connector.shared.models.enums import ApiScope, HttpMethod

from .description import ExchangeDescription
from .exceptions import ResponseValidationError
from .request_builder import build_request
from .signer import encode_body


class BitvavoClient:
    """Async client for the Bitvavo REST API.

    Single Responsibility: Coordinate request shaping, signing, pacing,
    transport, validation and error mapping for one call.

    Dependencies injected (not instantiated):
    - http_client: Executes HTTP requests
    - signer: Adds auth headers to private requests (None when no credentials)
    - throttle: Paces request starts
    - response_validator: Validates response structures
    - retry_handler: Decides retry eligibility and delays
    - error_mapper: Maps error responses to exceptions
    """

    def __init__(
        self,
        config: BitvavoConfig,
        description: ExchangeDescription,
        http_client: IHttpClient,
        signer: IRequestSigner | None,
        throttle: IThrottle,
        response_validator: IResponseValidator,
        retry_handler: IRetryHandler,
        error_mapper: IErrorMapper,
    ):
        self.config = config
        self.description = description
        self.http_client = http_client
        self.signer = signer
        self.throttle = throttle
        self.response_validator = response_validator
        self.retry_handler = retry_handler
        self.error_mapper = error_mapper
        self.log = get_ingestion_logger("bitvavo-client", exchange=description.id)

    def prepare(
        self,
        path: str,
        scope: ApiScope | str = ApiScope.PUBLIC,
        method: HttpMethod | str = HttpMethod.GET,
        params: Mapping[str, Any] | None = None,
    ) -> HttpRequest:
        """Shape and, for private scope, sign a request. No I/O.

        Raises:
            MissingCredentialsError: Private scope without key and secret
        """
        scope = ApiScope(scope)
        request = build_request(
            path,
            scope,
            method,
            params,
            self.config.credentials,
            self.description,
        )
        if scope is ApiScope.PRIVATE:
            # build_request already refused missing credentials, so a signer exists
            request = self.signer.sign(request)
        return request

    async def request(
        self,
        path: str,
        scope: ApiScope | str = ApiScope.PUBLIC,
        method: HttpMethod | str = HttpMethod.GET,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Execute one API call and return the decoded JSON body.

        Only GET requests are retried; a retried private request is re-signed
        so its timestamp stays inside the access window.

        Args:
            path: Path template, e.g. "markets" or "{market}/book"
            scope: public or private
            method: HTTP verb
            params: Path and request parameters

        Returns:
            Parsed JSON response data

        Raises:
            MissingCredentialsError: Before any I/O, for private calls without credentials
            BitvavoAPIError subclasses: For error responses
            aiohttp.ClientError / asyncio.TimeoutError: When transport keeps failing
        """
        scope = ApiScope(scope)
        method = HttpMethod(method.upper())
        max_attempts = self.config.retry_config.max_attempts if method.is_read else 1

        for attempt_number in range(1, max_attempts + 1):
            request = self.prepare(path, scope, method, params)
            self.log.debug(
                "request_prepared",
                path=path,
                scope=scope.value,
                method=method.value,
                attempt=attempt_number,
            )

            await self.throttle.acquire()
            try:
                response = await self._send(request)
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                if attempt_number >= max_attempts:
                    self.log.error("transport_failed", path=path, error=str(e))
                    raise
                sleep_time = self.retry_handler.get_retry_delay(attempt_number, 500, None)
                self.log.warning(
                    "transport_error_retrying",
                    path=path,
                    attempt=attempt_number,
                    max_attempts=max_attempts,
                    sleep=sleep_time,
                    error=str(e),
                )
                await asyncio.sleep(sleep_time)
                continue

            if 200 <= response.status_code < 300:
                return self._validated(path, response)

            if (
                attempt_number < max_attempts
                and self.retry_handler.should_retry(response.status_code)
            ):
                sleep_time = self.retry_handler.get_retry_delay(
                    attempt_number, response.status_code, response.headers
                )
                self.log.warning(
                    "retryable_status",
                    path=path,
                    status=response.status_code,
                    attempt=attempt_number,
                    max_attempts=max_attempts,
                    sleep=sleep_time,
                )
                await asyncio.sleep(sleep_time)
                continue

            error = self.error_mapper.map_error(
                response.status_code, response.body, path, response.headers
            )
            self.log.error(
                "request_failed",
                path=path,
                status=response.status_code,
                error=str(error),
            )
            raise error

        # Loop always returns or raises
        raise RuntimeError(f"Failed to fetch {path} after {max_attempts} attempts")

    async def _send(self, request: HttpRequest) -> HttpResponse:
        return await self.http_client.request(
            request.method,
            request.url,
            data=encode_body(request.body) if request.body is not None else None,
            headers=request.headers or None,
            timeout=self.config.http_config.timeout,
        )

    def _validated(self, path: str, response: HttpResponse) -> Any:
        validation = self.response_validator.validate(path, response.body)
        if not validation.is_valid:
            self.log.warning(
                "response_validation_failed",
                path=path,
                error=validation.error_message,
            )
            raise ResponseValidationError(
                f"Invalid response structure for {path}: {validation.error_message}",
                status_code=response.status_code,
                endpoint=path,
            )
        self.log.debug("request_succeeded", path=path, status=response.status_code)
        return response.body

    async def close(self) -> None:
        await self.http_client.close()
