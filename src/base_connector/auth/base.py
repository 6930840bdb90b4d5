"""Define the base authentication interface.

Authentication providers decorate outgoing requests (headers, signatures)
before the transport sends them. Concrete providers live in
:mod:`base_connector.auth.providers` and are registered with the
:class:`~base_connector.auth.registry.AuthenticationRegistry`.
"""

from abc import ABC, abstractmethod
from typing import Any

import httpx


class Authentication(ABC):
    """Provide the core authentication interface."""

    @property
    @abstractmethod
    def provider_type(self) -> str:
        """Return the provider type identifier (e.g. "bearer", "basic")."""
        pass

    @abstractmethod
    def authenticate(self, request: httpx.Request) -> httpx.Request:
        """Return the request decorated with credentials.

        :param request: Outgoing request.
        :return: The authenticated request.
        """
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} provider_type={self.provider_type!r}>"


class ProviderConfig:
    """Hold provider configuration values.

    Store arbitrary configuration for providers with both mapping-style and
    attribute-style access for convenience.
    """

    def __init__(self, **kwargs):
        self._config = kwargs

    def get(self, key: str, default: Any = None) -> Any:
        """Return configuration value by key.

        :param key: Configuration key to retrieve.
        :param default: Default value if key not present.
        :return: The configuration value or the default.
        """
        return self._config.get(key, default)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        if name in self._config:
            return self._config[name]
        raise AttributeError(f"Config has no attribute '{name}'")
