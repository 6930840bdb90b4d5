"""Configuration for the base connector."""

from .settings import DEFAULT_ENDPOINT, Settings, configure_logging, get_settings

__all__ = ["DEFAULT_ENDPOINT", "Settings", "configure_logging", "get_settings"]
