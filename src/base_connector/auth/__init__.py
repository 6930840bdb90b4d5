"""Authentication for the base connector.

Uses a pluggable provider architecture: providers register themselves by
name and are created from a :class:`ProviderConfig`.
"""

# Import providers to trigger registration
from . import (  # noqa: F401  # imported for side effects (provider registration)
    providers,
)
from .base import Authentication, ProviderConfig
from .providers import BasicAuthentication, BearerAuthentication, HeaderAuthentication
from .registry import AuthenticationRegistry, register_authentication

__all__ = [
    "Authentication",
    "ProviderConfig",
    "AuthenticationRegistry",
    "register_authentication",
    "BasicAuthentication",
    "BearerAuthentication",
    "HeaderAuthentication",
]
