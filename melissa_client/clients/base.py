import logging
from collections.abc import Mapping
from http import HTTPStatus
from typing import Any

import httpx
from pydantic import ValidationError

from melissa_client.errors import ApiError, ConfigurationError
from melissa_client.identity import ID_PARAM, apply_identity, select_identity
from melissa_client.logger import LogSink
from melissa_client.models.config import ClientConfig, LoggingConfig
from melissa_client.models.request_models import HttpMethod, RequestSpec, Service
from melissa_client.routing import build_url

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def is_response_successful(status_code: int) -> bool:
    return HTTPStatus.OK <= status_code < HTTPStatus.MULTIPLE_CHOICES


class _SharedTransport(httpx.AsyncBaseTransport):
    """Hands requests to an injected transport but leaves closing it to the client owner.

    The per-call AsyncClient closes its transport on exit, which would cut the
    connections of other calls still running on the same injected transport.
    """

    def __init__(self, transport: httpx.AsyncBaseTransport) -> None:
        self._transport = transport

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        return await self._transport.handle_async_request(request)

    async def aclose(self) -> None:
        return None


class BaseMelissaClient:
    """Request dispatcher shared by all Melissa service operations.

    Every call opens its own httpx.AsyncClient, attaches the `id` credential,
    and either returns the parsed body or raises ApiError. Transport failures
    (httpx.RequestError, including timeouts) propagate unchanged.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        logger: LogSink | None = None,
        logging_config: LoggingConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        **config_kwargs: Any,
    ) -> None:
        if config is not None and config_kwargs:
            raise TypeError("Pass either a ClientConfig or individual settings, not both.")
        if config is None:
            try:
                config = ClientConfig(**config_kwargs)
            except ValidationError as exc:
                raise ConfigurationError(f"Invalid Melissa client configuration: {exc}") from exc
        self._config = config
        self._logger = logger
        self._logging_config = logging_config or LoggingConfig()
        self._transport = transport

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def aclose(self) -> None:
        """Close the injected transport, if any. Per-call clients clean up after themselves."""
        if self._transport is not None:
            await self._transport.aclose()

    async def _get(
        self,
        service: Service | str,
        endpoint: str,
        query_params: Mapping[str, Any] | None = None,
        token: str | None = None,
    ) -> Any:
        return await self._dispatch(HttpMethod.GET, service, endpoint, query_params, token=token)

    async def _post(
        self,
        service: Service | str,
        endpoint: str,
        query_params: Mapping[str, Any] | None = None,
        body: Any = None,
        token: str | None = None,
    ) -> Any:
        return await self._dispatch(HttpMethod.POST, service, endpoint, query_params, body=body, token=token)

    async def _put(
        self,
        service: Service | str,
        endpoint: str,
        query_params: Mapping[str, Any] | None = None,
        body: Any = None,
        token: str | None = None,
    ) -> Any:
        return await self._dispatch(HttpMethod.PUT, service, endpoint, query_params, body=body, token=token)

    async def _delete(
        self,
        service: Service | str,
        endpoint: str,
        query_params: Mapping[str, Any] | None = None,
        token: str | None = None,
    ) -> Any:
        return await self._dispatch(HttpMethod.DELETE, service, endpoint, query_params, token=token)

    async def _dispatch(
        self,
        method: HttpMethod,
        service: Service | str,
        endpoint: str,
        query_params: Mapping[str, Any] | None,
        *,
        body: Any = None,
        token: str | None = None,
    ) -> Any:
        # Service coercion happens in build_url so unknown names surface as ConfigurationError.
        url = build_url(service, endpoint)
        request_spec = RequestSpec(
            method=method,
            service=service,
            endpoint=endpoint,
            query_params=dict(query_params or {}),
            body=body,
            token=token,
        )
        return await self._request(request_spec, url)

    async def _request(self, request_spec: RequestSpec, url: str) -> Any:
        """Send one request and classify the response by status code."""
        identity = select_identity(request_spec.token, self._config.license_key, self._config.user_id)
        params = apply_identity(request_spec.query_params, identity)
        method = request_spec.method.value
        path = httpx.URL(url).path

        if self._config.debug:
            self._log(logging.DEBUG, f"Dispatching {method} {url} query={_mask_identity(params)}")

        try:
            transport = self._call_transport()
            async with httpx.AsyncClient(timeout=self._config.timeout_seconds, transport=transport) as client:
                response = await client.request(
                    method,
                    url,
                    params=params,
                    json=request_spec.body,
                    headers=JSON_HEADERS,
                )
        except httpx.RequestError as exc:
            self._log(self._logging_config.error_level, f"{method} {path} failed: {exc!r}")
            raise

        data = self._parse_body(response)
        status_code = response.status_code
        successful = is_response_successful(status_code)
        self._log_call(method, path, status_code, params, request_spec.body, data, successful)

        if not successful:
            raise ApiError(status_code, url, meta=data)
        return data

    def _call_transport(self) -> httpx.AsyncBaseTransport | None:
        if self._transport is None:
            return None
        return _SharedTransport(self._transport)

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        """Parse the body as JSON, falling back to raw text (None when empty)."""
        try:
            return response.json()
        except ValueError:
            return response.text or None

    def _log_call(
        self,
        method: str,
        path: str,
        status_code: int,
        params: dict[str, Any],
        request_body: Any,
        response_body: Any,
        successful: bool,
    ) -> None:
        if self._logger is None:
            return
        cfg = self._logging_config
        parts = [f"{method} {path} status={status_code}"]
        if cfg.include_query:
            parts.append(f"query={_mask_identity(params)}")
        if cfg.include_request_body:
            parts.append(f"request_body={request_body!r}")
        if cfg.include_response_body:
            parts.append(f"response_body={response_body!r}")
        self._log(cfg.level if successful else cfg.error_level, " ".join(parts))

    def _log(self, level: int, message: str) -> None:
        if self._logger is not None:
            self._logger.log(level, message)


def _mask_identity(params: Mapping[str, Any]) -> dict[str, Any]:
    masked = dict(params)
    if masked.get(ID_PARAM):
        masked[ID_PARAM] = "***"
    return masked
