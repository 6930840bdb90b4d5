"""HTTP API client for fetching external entities from a remote API.

:class:`HttpApiClient` builds requests against a configured endpoint and
sends them through a lazily built transport. Every moving part is
injected through the ``options`` mapping:

- ``user_agent_prefix``: prefix of the ``User-Agent`` header
- ``http_client_builder``: builds the transport (:class:`HttpClientBuilder`)
- ``uri_factory``: parses and resolves URIs (:class:`UriFactory`)
- ``request_factory``: builds requests (:class:`RequestFactory`)
- ``journal``: records exchanges (:class:`Journal`)
- ``error_formatter``: renders error responses (:class:`ErrorFormatter`)
- ``retry_plugin_config``: retry parameters handed to the transport

Examples:
    >>> auth = BearerAuthentication(ProviderConfig(token="secret"))
    >>> client = HttpApiClient(auth, "https://api.example.com")
    >>> response = client.get("/items")
"""

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

import httpx

from . import __version__
from .auth import AuthenticationRegistry, ProviderConfig
from .config.settings import DEFAULT_ENDPOINT, Settings, get_settings
from .exceptions import ConfigurationError
from .interfaces import (
    Authenticator,
    ErrorFormatter,
    HeaderTypes,
    HttpClientBuilder,
    Journal,
    RequestFactory,
    Transport,
    UriFactory,
    UriTypes,
)
from .utils.http import (
    FullHttpMessageFormatter,
    HttpxClientBuilder,
    HttpxRequestFactory,
    HttpxUriFactory,
    NullJournal,
    RetryPluginConfig,
    coerce_retry_config,
)

logger = logging.getLogger(__name__)

CLIENT_IDENTIFIER = f"base-connector-python/{__version__}"
JSON_CONTENT_TYPE = "application/json"
DEFAULT_ACCEPT = "application/json; charset=utf-8"

CONFIG_USER_AGENT_PREFIX = "user_agent_prefix"
CONFIG_HTTP_CLIENT_BUILDER = "http_client_builder"
CONFIG_URI_FACTORY = "uri_factory"
CONFIG_REQUEST_FACTORY = "request_factory"
CONFIG_JOURNAL = "journal"
CONFIG_ERROR_FORMATTER = "error_formatter"
CONFIG_RETRY_PLUGIN_CONFIG = "retry_plugin_config"

_CAPABILITIES = {
    CONFIG_HTTP_CLIENT_BUILDER: HttpClientBuilder,
    CONFIG_URI_FACTORY: UriFactory,
    CONFIG_REQUEST_FACTORY: RequestFactory,
    CONFIG_JOURNAL: Journal,
    CONFIG_ERROR_FORMATTER: ErrorFormatter,
}


@dataclass(frozen=True)
class ClientOptions:
    """Resolved client configuration.

    Built by :func:`resolve_options`; every field holds either the
    supplied value or its default.
    """

    user_agent_prefix: Optional[str] = None
    http_client_builder: HttpClientBuilder = field(default_factory=HttpxClientBuilder)
    uri_factory: UriFactory = field(default_factory=HttpxUriFactory)
    request_factory: RequestFactory = field(default_factory=HttpxRequestFactory)
    journal: Journal = field(default_factory=NullJournal)
    error_formatter: ErrorFormatter = field(default_factory=FullHttpMessageFormatter)
    retry_plugin_config: Optional[RetryPluginConfig] = None


def resolve_options(options: Optional[Mapping[str, Any]] = None) -> ClientOptions:
    """Fill the recognised options from ``options`` or their defaults.

    :param options: Mapping of option name to value
    :return: The resolved options
    :raises ConfigurationError: For unknown keys, collaborators missing
        their capability methods, or an invalid retry configuration
    """
    options = dict(options or {})
    known = {
        CONFIG_USER_AGENT_PREFIX,
        CONFIG_RETRY_PLUGIN_CONFIG,
        *_CAPABILITIES,
    }
    unknown = sorted(set(options) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown client option(s): {', '.join(unknown)}", setting=unknown[0]
        )

    resolved: Dict[str, Any] = {}

    prefix = options.get(CONFIG_USER_AGENT_PREFIX)
    if prefix is not None and not isinstance(prefix, str):
        raise ConfigurationError(
            "user_agent_prefix must be a string", setting=CONFIG_USER_AGENT_PREFIX
        )
    resolved[CONFIG_USER_AGENT_PREFIX] = prefix or None

    for key, capability in _CAPABILITIES.items():
        value = options.get(key)
        if value is None:
            continue
        if not isinstance(value, capability):
            raise ConfigurationError(
                f"Option '{key}' must implement {capability.__name__}, "
                f"got {type(value).__name__}",
                setting=key,
            )
        resolved[key] = value

    try:
        resolved[CONFIG_RETRY_PLUGIN_CONFIG] = coerce_retry_config(
            options.get(CONFIG_RETRY_PLUGIN_CONFIG)
        )
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"Invalid retry plugin configuration: {e}",
            setting=CONFIG_RETRY_PLUGIN_CONFIG,
        ) from e

    return ClientOptions(**resolved)


class TransportState(str, Enum):
    """Lifecycle of the cached transport."""

    UNBUILT = "unbuilt"
    BUILT = "built"


class HttpApiClient:
    """Client for a remote HTTP API.

    :param authentication: Provider decorating every outgoing request
    :type authentication: Authenticator
    :param endpoint: Base URL; defaults to :data:`DEFAULT_ENDPOINT`
    :type endpoint: Optional[str]
    :param options: Collaborator overrides, see the module documentation
    :type options: Optional[Mapping[str, Any]]
    :raises ConfigurationError: If authentication is missing or an option
        is invalid
    """

    def __init__(
        self,
        authentication: Optional[Authenticator] = None,
        endpoint: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
    ):
        if authentication is None:
            raise ConfigurationError(
                "Authentication is required", setting="authentication"
            )
        if not isinstance(authentication, Authenticator):
            raise ConfigurationError(
                f"Authentication must implement authenticate(), "
                f"got {type(authentication).__name__}",
                setting="authentication",
            )
        if endpoint is not None and not isinstance(endpoint, str):
            raise ConfigurationError("Endpoint must be a string", setting="endpoint")

        self._authentication = authentication
        self._endpoint = endpoint or DEFAULT_ENDPOINT
        self._options = resolve_options(options)

        self._transport: Optional[Transport] = None
        self._transport_state = TransportState.UNBUILT
        self._transport_lock = threading.Lock()

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        **options: Any,
    ) -> "HttpApiClient":
        """Create a client from :class:`Settings`.

        The authentication provider is looked up by ``settings.auth_method``.
        Keyword arguments override the options derived from the settings.

        :raises ConfigurationError: If the provider is unknown or its
            credentials are missing
        """
        settings = settings or get_settings()
        authentication = AuthenticationRegistry.create(
            settings.auth_method,
            ProviderConfig(
                token=settings.token,
                username=settings.username,
                password=settings.password,
                header_name=settings.header_name,
            ),
        )

        options.setdefault(CONFIG_USER_AGENT_PREFIX, settings.user_agent_prefix)
        options.setdefault(
            CONFIG_HTTP_CLIENT_BUILDER, HttpxClientBuilder(timeout=settings.timeout)
        )
        return cls(authentication, settings.endpoint, options)

    @property
    def authentication(self) -> Authenticator:
        return self._authentication

    @property
    def options(self) -> ClientOptions:
        return self._options

    @property
    def transport_state(self) -> TransportState:
        return self._transport_state

    def get_endpoint(self) -> str:
        """Return the configured base endpoint."""
        return self._endpoint

    def get_user_agent(self) -> str:
        prefix = self._options.user_agent_prefix
        if prefix:
            return f"{prefix} ({CLIENT_IDENTIFIER})"
        return CLIENT_IDENTIFIER

    def get_default_headers(self) -> Dict[str, str]:
        """Return headers sent with every request unless overridden."""
        return {
            "User-Agent": self.get_user_agent(),
            "Accept": DEFAULT_ACCEPT,
        }

    def get_base_uri(self) -> httpx.URL:
        """Return the endpoint as a URI.

        :raises httpx.InvalidURL: If the endpoint is not a valid URI
        """
        return self._options.uri_factory.create_uri(self._endpoint)

    def get(self, uri: UriTypes, headers: HeaderTypes = None) -> httpx.Response:
        return self._send("GET", uri, headers, None)

    def head(self, uri: UriTypes, headers: HeaderTypes = None) -> httpx.Response:
        return self._send("HEAD", uri, headers, None)

    def post(
        self, uri: UriTypes, body: Any = None, headers: HeaderTypes = None
    ) -> httpx.Response:
        return self._send("POST", uri, self._with_json_content_type(headers), body)

    def put(
        self, uri: UriTypes, body: Any = None, headers: HeaderTypes = None
    ) -> httpx.Response:
        return self._send("PUT", uri, self._with_json_content_type(headers), body)

    def delete(
        self, uri: UriTypes, body: Any = None, headers: HeaderTypes = None
    ) -> httpx.Response:
        return self._send("DELETE", uri, headers, body)

    def send_request(self, request: httpx.Request) -> httpx.Response:
        """Send an already built request.

        Relative request URIs are resolved against the endpoint and
        missing default headers are added. Failures of the transport are
        propagated unchanged.
        """
        request = self._prepare_request(request)
        logger.debug("Sending %s %s", request.method, request.url)
        return self._get_http_client().send_request(request)

    def invalidate_transport(self) -> None:
        """Drop the cached transport so the next request rebuilds it."""
        with self._transport_lock:
            transport = self._transport
            self._transport = None
            self._transport_state = TransportState.UNBUILT
        if transport is not None:
            logger.debug("Invalidated HTTP transport")
            close = getattr(transport, "close", None)
            if callable(close):
                close()

    def close(self) -> None:
        """Release the transport, if one was built."""
        self.invalidate_transport()

    def __enter__(self) -> "HttpApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _get_http_client(self) -> Transport:
        if self._transport_state is TransportState.UNBUILT:
            with self._transport_lock:
                if self._transport_state is TransportState.UNBUILT:
                    self._transport = self._options.http_client_builder.build(
                        authentication=self._authentication,
                        journal=self._options.journal,
                        error_formatter=self._options.error_formatter,
                        retry_plugin_config=self._options.retry_plugin_config,
                    )
                    self._transport_state = TransportState.BUILT
                    logger.debug("Built HTTP transport for %s", self._endpoint)
        return self._transport

    def _send(
        self, method: str, uri: UriTypes, headers: HeaderTypes, body: Any
    ) -> httpx.Response:
        merged = httpx.Headers(self.get_default_headers())
        merged.update(headers or {})
        request = self._options.request_factory.create_request(
            method, self._resolve_uri(uri), merged, body
        )
        return self.send_request(request)

    def _resolve_uri(self, uri: UriTypes) -> httpx.URL:
        return self._options.uri_factory.resolve(self.get_base_uri(), uri)

    def _prepare_request(self, request: httpx.Request) -> httpx.Request:
        # The caller's request is left untouched.
        headers = httpx.Headers(request.headers)
        for name, value in self.get_default_headers().items():
            headers.setdefault(name, value)
        url = request.url
        if not url.is_absolute_url:
            url = self._resolve_uri(url)
        return httpx.Request(
            request.method,
            url,
            headers=headers,
            content=request.read(),
            extensions=request.extensions,
        )

    @staticmethod
    def _with_json_content_type(headers: HeaderTypes) -> httpx.Headers:
        headers = httpx.Headers(headers)
        if "Content-Type" not in headers:
            headers["Content-Type"] = JSON_CONTENT_TYPE
        return headers
