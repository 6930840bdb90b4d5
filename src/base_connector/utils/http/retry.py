"""Retry plugin for the default transport.

Retry is a transport concern: the client hands ``retry_plugin_config``
to the transport builder untouched, and the transport wraps each send in
:class:`RetryPlugin` when a configuration was given. Delays grow
exponentially and carry jitter to avoid synchronized retries.
"""

import logging
import random
import time
from typing import Callable, Optional, Tuple

import httpx
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class RetryPluginConfig(BaseModel):
    """Parameters of the retry plugin.

    :param retries: Number of retries after the first attempt
    :param delay: Initial delay between attempts in seconds
    :param backoff: Multiplier applied to the delay after each attempt
    :param status_codes: Response statuses that trigger a retry
    :param retry_network_errors: Whether connection failures are retried
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    retries: int = Field(1, ge=0, description="Retries after the first attempt")
    delay: float = Field(0.5, ge=0, description="Initial delay in seconds")
    backoff: float = Field(2.0, ge=1, description="Delay multiplier")
    status_codes: Tuple[int, ...] = Field(
        (429, 502, 503, 504), description="Statuses that trigger a retry"
    )
    retry_network_errors: bool = Field(
        True, description="Retry when the connection fails"
    )


class RetryPlugin:
    """Resend requests according to a :class:`RetryPluginConfig`."""

    def __init__(
        self,
        config: RetryPluginConfig,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self._sleep = sleep

    def _wait(self, attempt: int, request: httpx.Request, reason: str) -> None:
        current_delay = self.config.delay * (self.config.backoff**attempt)
        jitter = random.uniform(0.8, 1.2)
        logger.info(
            "Retrying %s %s after %s (attempt %d of %d)",
            request.method,
            request.url,
            reason,
            attempt + 2,
            self.config.retries + 1,
        )
        self._sleep(current_delay * jitter)

    def send(
        self,
        request: httpx.Request,
        send_once: Callable[[httpx.Request], httpx.Response],
    ) -> httpx.Response:
        """Send the request, retrying per configuration.

        The last response (or error) is returned (or raised) once the
        retries are exhausted.
        """
        last_exception: Optional[Exception] = None
        for attempt in range(self.config.retries + 1):
            final = attempt == self.config.retries
            try:
                response = send_once(request)
            except httpx.TransportError as e:
                if not self.config.retry_network_errors or final:
                    raise
                last_exception = e
                self._wait(attempt, request, type(e).__name__)
                continue

            if response.status_code in self.config.status_codes and not final:
                response.close()
                self._wait(attempt, request, f"status {response.status_code}")
                continue
            return response

        assert last_exception is not None
        raise last_exception
