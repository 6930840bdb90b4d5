"""HTTP basic authentication provider."""

import base64

import httpx

from ...exceptions import ConfigurationError
from ..base import Authentication, ProviderConfig
from ..registry import register_authentication


@register_authentication("basic")
class BasicAuthentication(Authentication):
    """Authenticate requests with a username and password.

    The password may be empty; the username may not.
    """

    def __init__(self, config: ProviderConfig):
        username = config.get("username")
        if not username:
            raise ConfigurationError(
                "Basic authentication requires a username", setting="username"
            )
        self.username = username
        self.password = config.get("password") or ""

    @property
    def provider_type(self) -> str:
        return "basic"

    def authenticate(self, request: httpx.Request) -> httpx.Request:
        credentials = f"{self.username}:{self.password}".encode("utf-8")
        token = base64.b64encode(credentials).decode("ascii")
        request.headers["Authorization"] = f"Basic {token}"
        return request
