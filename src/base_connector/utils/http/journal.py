"""Journals record every exchange performed by a transport.

The transport reports each request together with either the response it
produced or the error it failed with.
"""

import logging
import threading
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional

import httpx

from ..security import sanitize_headers

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JournalEntry:
    """One recorded exchange."""

    request: httpx.Request
    response: Optional[httpx.Response] = None
    error: Optional[Exception] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


class NullJournal:
    """Journal that records nothing."""

    def add_success(self, request: httpx.Request, response: httpx.Response) -> None:
        pass

    def add_failure(self, request: httpx.Request, error: Exception) -> None:
        pass


class HistoryJournal:
    """Keep the most recent exchanges in memory.

    :param max_entries: Number of entries to retain; older ones are dropped
    :type max_entries: int
    """

    def __init__(self, max_entries: int = 100):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._entries: Deque[JournalEntry] = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    def add_success(self, request: httpx.Request, response: httpx.Response) -> None:
        with self._lock:
            self._entries.append(JournalEntry(request=request, response=response))

    def add_failure(self, request: httpx.Request, error: Exception) -> None:
        with self._lock:
            self._entries.append(JournalEntry(request=request, error=error))

    @property
    def entries(self) -> List[JournalEntry]:
        with self._lock:
            return list(self._entries)

    @property
    def last_request(self) -> Optional[httpx.Request]:
        with self._lock:
            return self._entries[-1].request if self._entries else None

    @property
    def last_response(self) -> Optional[httpx.Response]:
        with self._lock:
            return self._entries[-1].response if self._entries else None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class LoggingJournal:
    """Write each exchange to a logger with credentials redacted."""

    def __init__(self, log: Optional[logging.Logger] = None, level: int = logging.DEBUG):
        self.log = log or logger
        self.level = level

    def add_success(self, request: httpx.Request, response: httpx.Response) -> None:
        if not self.log.isEnabledFor(self.level):
            return
        self.log.log(
            self.level,
            "%s %s -> %s (request headers: %s)",
            request.method,
            request.url,
            response.status_code,
            sanitize_headers(request.headers.multi_items()),
        )

    def add_failure(self, request: httpx.Request, error: Exception) -> None:
        self.log.warning(
            "%s %s failed: %s: %s",
            request.method,
            request.url,
            type(error).__name__,
            error,
        )
