"""HTTP collaborators public API (barrel module).

This package provides the default implementations of every capability
:class:`~base_connector.client.HttpApiClient` consumes:

- URI factory with base URI resolution
- Request factory
- Transport builder over ``httpx.Client``
- Retry plugin
- Journals
- Error formatters

Recommended import pattern for consumers:
    from base_connector.utils.http import HttpxClientBuilder, HistoryJournal
"""

from .formatter import FullHttpMessageFormatter, SimpleFormatter, format_exchange
from .journal import HistoryJournal, JournalEntry, LoggingJournal, NullJournal
from .request import HttpxRequestFactory, encode_body
from .retry import RetryPlugin, RetryPluginConfig
from .transport import (
    AuthenticationAuth,
    HttpxClientBuilder,
    HttpxTransport,
    coerce_retry_config,
)
from .uri import HttpxUriFactory

__all__ = [
    "AuthenticationAuth",
    "FullHttpMessageFormatter",
    "HistoryJournal",
    "HttpxClientBuilder",
    "HttpxRequestFactory",
    "HttpxTransport",
    "HttpxUriFactory",
    "JournalEntry",
    "LoggingJournal",
    "NullJournal",
    "RetryPlugin",
    "RetryPluginConfig",
    "SimpleFormatter",
    "coerce_retry_config",
    "encode_body",
    "format_exchange",
]
