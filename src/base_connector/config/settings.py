"""Configuration settings for the base connector.

Settings are loaded from environment variables (prefixed with
``BASE_CONNECTOR_``) and ``.env`` files. They provide the documented
defaults used when a client is built through
:meth:`base_connector.client.HttpApiClient.from_settings`, and the level
:func:`configure_logging` installs.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..utils.security import setup_secure_logging

DEFAULT_ENDPOINT = "https://api.enterprise.apigee.com/v1"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    :param endpoint: Base URL of the remote API
    :type endpoint: str
    :param user_agent_prefix: Optional prefix for the User-Agent header
    :type user_agent_prefix: Optional[str]
    :param auth_method: Registered authentication provider name
    :type auth_method: str
    :param username: Username for basic authentication
    :type username: Optional[str]
    :param password: Password for basic authentication
    :type password: Optional[str]
    :param token: Token for bearer or header authentication
    :type token: Optional[str]
    :param header_name: Header used by header authentication
    :type header_name: str
    :param timeout: Transport timeout in seconds
    :type timeout: float
    :param log_level: Logging level for the application
    :type log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    """

    model_config = SettingsConfigDict(
        env_prefix="BASE_CONNECTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    endpoint: str = Field(DEFAULT_ENDPOINT, description="Remote API base URL")
    user_agent_prefix: Optional[str] = Field(
        None, description="Prefix prepended to the client User-Agent"
    )

    # Authentication
    auth_method: str = Field("bearer", description="Authentication provider name")
    username: Optional[str] = Field(None, description="Basic auth username")
    password: Optional[str] = Field(None, description="Basic auth password")
    token: Optional[str] = Field(None, description="Bearer or API key token")
    header_name: str = Field(
        "X-Api-Key", description="Header name used by header authentication"
    )

    # Transport
    timeout: float = Field(30.0, gt=0, description="Transport timeout in seconds")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        "INFO", description="Logging level"
    )

    @field_validator("endpoint")
    @classmethod
    def endpoint_not_blank(cls, v: str) -> str:
        """Fall back to the default endpoint for blank values."""
        v = (v or "").strip()
        return v or DEFAULT_ENDPOINT

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Install sanitizing root logging at ``settings.log_level``.

    Applications call this once at startup, before building clients.
    """
    settings = settings or get_settings()
    setup_secure_logging(settings.log_level)
