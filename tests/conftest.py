import sys
from pathlib import Path

import httpx
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from base_connector.auth import BearerAuthentication, ProviderConfig  # noqa: E402
from base_connector.config.settings import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep connector settings from the host environment out of tests."""
    import os

    for name in list(os.environ):
        if name.upper().startswith("BASE_CONNECTOR_"):
            monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def bearer_auth():
    return BearerAuthentication(ProviderConfig(token="test-token"))


class RecordingTransport:
    """Transport double recording every request it is given."""

    def __init__(self, response=None, error=None):
        self.requests = []
        self.response = response
        self.error = error
        self.closed = False

    def send_request(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.response is not None:
            return self.response
        return httpx.Response(200, request=request)

    def close(self):
        self.closed = True


class RecordingBuilder:
    """Builder double counting how often a transport is built."""

    def __init__(self, transport=None):
        self.transport = transport or RecordingTransport()
        self.build_calls = []

    def build(self, *, authentication, journal, error_formatter, retry_plugin_config=None):
        self.build_calls.append(
            {
                "authentication": authentication,
                "journal": journal,
                "error_formatter": error_formatter,
                "retry_plugin_config": retry_plugin_config,
            }
        )
        return self.transport


@pytest.fixture
def recording_builder():
    return RecordingBuilder()
