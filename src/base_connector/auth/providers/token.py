"""Token based authentication providers.

``bearer`` sends ``Authorization: Bearer <token>``; ``header`` sends the
token under a configurable header, as API-key style services expect.
"""

import logging

import httpx

from ...exceptions import ConfigurationError
from ..base import Authentication, ProviderConfig
from ..registry import register_authentication

logger = logging.getLogger(__name__)


@register_authentication("bearer")
class BearerAuthentication(Authentication):
    """Authenticate requests with an OAuth-style bearer token."""

    def __init__(self, config: ProviderConfig):
        token = config.get("token")
        if not token:
            raise ConfigurationError(
                "Bearer authentication requires a token", setting="token"
            )
        self.token = token

    @property
    def provider_type(self) -> str:
        return "bearer"

    def authenticate(self, request: httpx.Request) -> httpx.Request:
        request.headers["Authorization"] = f"Bearer {self.token}"
        return request


@register_authentication("header")
class HeaderAuthentication(Authentication):
    """Authenticate requests with a static token in a named header."""

    def __init__(self, config: ProviderConfig):
        token = config.get("token")
        if not token:
            raise ConfigurationError(
                "Header authentication requires a token", setting="token"
            )
        self.token = token
        self.header_name = config.get("header_name") or "X-Api-Key"

    @property
    def provider_type(self) -> str:
        return "header"

    def authenticate(self, request: httpx.Request) -> httpx.Request:
        request.headers[self.header_name] = self.token
        logger.debug("Injected %s header for %s", self.header_name, request.url.host)
        return request
