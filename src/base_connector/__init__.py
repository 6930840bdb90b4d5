"""Base connector package.

This package provides a thin HTTP API client used to fetch external
entities from a remote API, and the base class for storage clients
built on top of it.

:var __version__: Current package version
:type __version__: str
"""

__version__ = "0.1.0"

from .client import HttpApiClient, resolve_options  # noqa: E402
from .exceptions import (  # noqa: E402
    ApiResponseError,
    BaseConnectorError,
    ClientError,
    ConfigurationError,
    NetworkError,
    RequestTimeoutError,
    ServerError,
    TransportError,
)
from .storage import EntityStorageClientBase, HttpStorageClient  # noqa: E402

__all__ = [
    "__version__",
    "HttpApiClient",
    "resolve_options",
    "EntityStorageClientBase",
    "HttpStorageClient",
    "BaseConnectorError",
    "ConfigurationError",
    "TransportError",
    "NetworkError",
    "RequestTimeoutError",
    "ApiResponseError",
    "ClientError",
    "ServerError",
]
