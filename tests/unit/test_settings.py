"""Tests for environment settings and building clients from them."""

import httpx
import pytest

from base_connector.auth import BasicAuthentication, BearerAuthentication
from base_connector.client import CLIENT_IDENTIFIER, HttpApiClient
from base_connector.config import DEFAULT_ENDPOINT, Settings, get_settings
from base_connector.exceptions import ConfigurationError
from base_connector.utils.http import HttpxClientBuilder


def test_defaults():
    settings = Settings()
    assert settings.endpoint == DEFAULT_ENDPOINT
    assert settings.auth_method == "bearer"
    assert settings.timeout == 30.0
    assert settings.log_level == "INFO"


def test_environment_variables(monkeypatch):
    monkeypatch.setenv("BASE_CONNECTOR_ENDPOINT", "https://api.example.com")
    monkeypatch.setenv("BASE_CONNECTOR_USER_AGENT_PREFIX", "Drupal/10")
    monkeypatch.setenv("BASE_CONNECTOR_TIMEOUT", "5")
    monkeypatch.setenv("BASE_CONNECTOR_LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.endpoint == "https://api.example.com"
    assert settings.user_agent_prefix == "Drupal/10"
    assert settings.timeout == 5.0
    assert settings.log_level == "DEBUG"


def test_blank_endpoint_falls_back():
    assert Settings(endpoint="  ").endpoint == DEFAULT_ENDPOINT


def test_from_settings_bearer():
    settings = Settings(
        endpoint="https://api.example.com", token="abc", user_agent_prefix="Site"
    )
    client = HttpApiClient.from_settings(settings)

    assert isinstance(client.authentication, BearerAuthentication)
    assert client.get_endpoint() == "https://api.example.com"
    assert client.get_user_agent() == f"Site ({CLIENT_IDENTIFIER})"
    assert client.options.http_client_builder.timeout == 30.0


def test_from_settings_basic_from_environment(monkeypatch):
    monkeypatch.setenv("BASE_CONNECTOR_AUTH_METHOD", "basic")
    monkeypatch.setenv("BASE_CONNECTOR_USERNAME", "admin")
    monkeypatch.setenv("BASE_CONNECTOR_PASSWORD", "pw")

    client = HttpApiClient.from_settings()

    assert isinstance(client.authentication, BasicAuthentication)
    assert client.get_endpoint() == DEFAULT_ENDPOINT


def test_from_settings_options_override():
    seen = {}

    def handler(request):
        seen["user_agent"] = request.headers["User-Agent"]
        return httpx.Response(200)

    builder = HttpxClientBuilder(transport=httpx.MockTransport(handler))
    client = HttpApiClient.from_settings(
        Settings(token="abc", user_agent_prefix="FromSettings"),
        http_client_builder=builder,
        user_agent_prefix="Explicit",
    )
    client.get("/ping")

    assert seen["user_agent"] == f"Explicit ({CLIENT_IDENTIFIER})"


def test_from_settings_unknown_provider():
    with pytest.raises(ConfigurationError) as exc_info:
        HttpApiClient.from_settings(Settings(auth_method="kerberos"))
    assert exc_info.value.setting == "auth_method"


def test_from_settings_missing_credentials():
    with pytest.raises(ConfigurationError) as exc_info:
        HttpApiClient.from_settings(Settings(auth_method="bearer"))
    assert exc_info.value.setting == "token"
