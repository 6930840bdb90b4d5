"""Look up authentication providers by the name used in settings.

``Settings.auth_method`` names a provider; :meth:`HttpApiClient.from_settings`
asks the registry to build it. Providers join the registry by decorating
their class:

.. code-block:: python

   from base_connector.auth import Authentication, register_authentication

   @register_authentication("signed")
   class SignedAuthentication(Authentication):
       def __init__(self, config):
           self.secret = config.secret

       @property
       def provider_type(self) -> str:
           return "signed"

       def authenticate(self, request):
           request.headers["X-Signature"] = sign(request, self.secret)
           return request
"""

import logging
from typing import Dict, List, Type

from ..exceptions import ConfigurationError
from .base import Authentication, ProviderConfig

logger = logging.getLogger(__name__)


class AuthenticationRegistry:
    """Map ``auth_method`` names to provider classes."""

    _providers: Dict[str, Type[Authentication]] = {}

    @classmethod
    def register(cls, name: str, provider_class: Type[Authentication]) -> None:
        """Make ``provider_class`` available as ``name``.

        :raises ValueError: If ``name`` is taken
        """
        if name in cls._providers:
            raise ValueError(f"Authentication method '{name}' is already registered")
        cls._providers[name] = provider_class
        logger.debug("Registered %s as auth method '%s'", provider_class.__name__, name)

    @classmethod
    def create(cls, name: str, config: ProviderConfig) -> Authentication:
        """Build the provider registered as ``name``.

        :raises ConfigurationError: If no provider is registered under
            ``name``, or the provider rejects ``config``
        """
        provider_class = cls._providers.get(name)
        if provider_class is None:
            raise ConfigurationError(
                f"Unknown authentication method '{name}'. "
                f"Available methods: {', '.join(cls.names()) or 'none'}",
                setting="auth_method",
            )
        return provider_class(config)

    @classmethod
    def names(cls) -> List[str]:
        return sorted(cls._providers)


def register_authentication(name: str):
    """Class decorator registering a provider under ``name``."""

    def decorator(provider_class: Type[Authentication]):
        AuthenticationRegistry.register(name, provider_class)
        return provider_class

    return decorator
