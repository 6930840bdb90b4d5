"""Default transport built on :class:`httpx.Client`.

:class:`HttpxClientBuilder` is the default ``http_client_builder`` of
:class:`~base_connector.client.HttpApiClient`. The transport it builds
chains, for every request:

1. authentication (adapted to :class:`httpx.Auth`)
2. the retry plugin, when a retry configuration was given
3. journaling of the exchange
4. response handling: 4xx/5xx responses raise
   :class:`~base_connector.exceptions.ApiResponseError` with the error
   formatter's rendering of the exchange

``httpx`` failures are translated into
:class:`~base_connector.exceptions.TransportError` subclasses with the
httpx exception chained. Provider failures surface as
:class:`~base_connector.exceptions.AuthenticationError`.
"""

import logging
from typing import Any, Dict, Generator, Mapping, Optional, Union

import httpx

from ...exceptions import (
    AuthenticationError,
    ClientError,
    ConfigurationError,
    NetworkError,
    RequestTimeoutError,
    ServerError,
    TransportError,
)
from .formatter import FullHttpMessageFormatter, format_exchange
from .journal import NullJournal
from .retry import RetryPlugin, RetryPluginConfig

logger = logging.getLogger(__name__)


class AuthenticationAuth(httpx.Auth):
    """Adapt an authentication provider to the ``httpx.Auth`` flow.

    :raises AuthenticationError: If the provider fails on the request or
        does not hand back a request
    """

    def __init__(self, authentication):
        self.authentication = authentication

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        provider = type(self.authentication).__name__
        try:
            authenticated = self.authentication.authenticate(request)
        except (TypeError, ValueError) as e:
            raise AuthenticationError(
                f"{provider} could not authenticate the request: {e}",
                details={"url": str(request.url)},
            ) from e
        if not isinstance(authenticated, httpx.Request):
            raise AuthenticationError(
                f"{provider}.authenticate() returned "
                f"{type(authenticated).__name__}, expected a request",
                details={"url": str(request.url)},
            )
        yield authenticated


def coerce_retry_config(
    config: Union[None, RetryPluginConfig, Mapping[str, Any]],
) -> Optional[RetryPluginConfig]:
    """Validate a retry configuration given as a model or a mapping."""
    if config is None or isinstance(config, RetryPluginConfig):
        return config
    if isinstance(config, Mapping):
        return RetryPluginConfig(**config)
    raise TypeError(
        f"retry_plugin_config must be a mapping or RetryPluginConfig, "
        f"got {type(config).__name__}"
    )


class HttpxTransport:
    """Send requests through a dedicated :class:`httpx.Client`."""

    def __init__(
        self,
        client: httpx.Client,
        journal=None,
        error_formatter=None,
        retry_plugin: Optional[RetryPlugin] = None,
    ):
        self.client = client
        self.journal = journal if journal is not None else NullJournal()
        self.error_formatter = (
            error_formatter if error_formatter is not None else FullHttpMessageFormatter()
        )
        self.retry_plugin = retry_plugin

    def _send_once(self, request: httpx.Request) -> httpx.Response:
        try:
            response = self.client.send(request)
        except httpx.TransportError as e:
            self.journal.add_failure(request, e)
            raise
        self.journal.add_success(request, response)
        return response

    def send_request(self, request: httpx.Request) -> httpx.Response:
        """Send a request and return its response.

        :raises ClientError: For 4xx responses
        :raises ServerError: For 5xx responses
        :raises RequestTimeoutError: When the exchange timed out
        :raises NetworkError: When the remote could not be reached
        """
        try:
            if self.retry_plugin is not None:
                response = self.retry_plugin.send(request, self._send_once)
            else:
                response = self._send_once(request)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(
                f"Request timed out: {request.method} {request.url}", request=request
            ) from e
        except httpx.TransportError as e:
            raise NetworkError(
                f"Request failed: {request.method} {request.url}: {e}",
                request=request,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(str(e), request=request) from e

        self._handle_response(request, response)
        return response

    def _handle_response(self, request: httpx.Request, response: httpx.Response) -> None:
        if response.status_code < 400:
            return
        message = format_exchange(self.error_formatter, request, response)
        logger.debug(
            "Error response %s for %s %s",
            response.status_code,
            request.method,
            request.url,
        )
        if response.status_code < 500:
            raise ClientError(message, request=request, response=response)
        raise ServerError(message, request=request, response=response)

    def close(self) -> None:
        self.client.close()


class HttpxClientBuilder:
    """Build :class:`HttpxTransport` instances.

    :param timeout: Timeout in seconds, or an :class:`httpx.Timeout`
    :param transport: Optional lower level ``httpx`` transport, e.g.
        :class:`httpx.MockTransport` in tests
    :param client_options: Extra keyword arguments for :class:`httpx.Client`
    """

    def __init__(
        self,
        timeout: Union[float, httpx.Timeout] = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
        **client_options: Any,
    ):
        self.timeout = timeout
        self.transport = transport
        self.client_options = client_options

    def build(
        self,
        *,
        authentication,
        journal,
        error_formatter,
        retry_plugin_config=None,
    ) -> HttpxTransport:
        try:
            retry_config = coerce_retry_config(retry_plugin_config)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid retry plugin configuration: {e}",
                setting="retry_plugin_config",
            ) from e

        client_config: Dict[str, Any] = {
            "auth": AuthenticationAuth(authentication),
            "timeout": self.timeout,
            **self.client_options,
        }
        if self.transport is not None:
            client_config["transport"] = self.transport

        logger.debug(
            "Building HTTP transport (retry=%s)",
            retry_config.retries if retry_config else "off",
        )
        return HttpxTransport(
            httpx.Client(**client_config),
            journal=journal,
            error_formatter=error_formatter,
            retry_plugin=RetryPlugin(retry_config) if retry_config else None,
        )
