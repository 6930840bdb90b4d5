"""Capability contracts for the collaborators of :class:`HttpApiClient`.

Every collaborator is accepted structurally: anything implementing the
methods below satisfies the capability, whether or not it subclasses one
of the default implementations.
"""

from typing import Any, Mapping, Optional, Protocol, Union, runtime_checkable

import httpx

UriTypes = Union[str, httpx.URL]
HeaderTypes = Optional[Mapping[str, str]]


@runtime_checkable
class Authenticator(Protocol):
    """Decorates an outgoing request with credentials."""

    def authenticate(self, request: httpx.Request) -> httpx.Request: ...


@runtime_checkable
class UriFactory(Protocol):
    """Turns strings into URIs and resolves them against a base."""

    def create_uri(self, uri: UriTypes) -> httpx.URL: ...

    def resolve(self, base: httpx.URL, uri: UriTypes) -> httpx.URL: ...


@runtime_checkable
class RequestFactory(Protocol):
    """Builds a request value from its parts."""

    def create_request(
        self,
        method: str,
        uri: UriTypes,
        headers: HeaderTypes = None,
        body: Any = None,
    ) -> httpx.Request: ...


@runtime_checkable
class Transport(Protocol):
    """Sends a request and returns its response."""

    def send_request(self, request: httpx.Request) -> httpx.Response: ...


@runtime_checkable
class Journal(Protocol):
    """Records exchanged requests and responses."""

    def add_success(self, request: httpx.Request, response: httpx.Response) -> None: ...

    def add_failure(self, request: httpx.Request, error: Exception) -> None: ...


@runtime_checkable
class ErrorFormatter(Protocol):
    """Renders failed exchanges into diagnostic text."""

    def format_request(self, request: httpx.Request) -> str: ...

    def format_response(self, response: httpx.Response) -> str: ...


@runtime_checkable
class HttpClientBuilder(Protocol):
    """Builds the transport used by a client."""

    def build(
        self,
        *,
        authentication: Authenticator,
        journal: Journal,
        error_formatter: ErrorFormatter,
        retry_plugin_config: Optional[Any] = None,
    ) -> Transport: ...
