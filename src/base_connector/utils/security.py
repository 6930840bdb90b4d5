"""Credential redaction and secure logging setup.

Outgoing requests carry credentials injected by the authentication
providers; everything that writes requests to logs or diagnostics goes
through :func:`sanitize_headers` or :class:`SanitizingFormatter` first.
"""

import logging
import re
import sys
from typing import Any, Dict, Iterable, Mapping, Tuple, Union

# Patterns for sensitive data detection
SENSITIVE_PATTERNS = {
    "jwt_token": re.compile(r"eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+"),
    "bearer_token": re.compile(r"Bearer\s+[A-Za-z0-9._~+/=-]+", re.IGNORECASE),
    "basic_auth": re.compile(r"Basic\s+[A-Za-z0-9+/=]+", re.IGNORECASE),
}

# Headers that should never be logged
SENSITIVE_HEADERS = {
    "authorization",
    "proxy-authorization",
    "x-api-key",
    "x-auth-token",
    "cookie",
    "set-cookie",
    "x-access-token",
}

REDACTED = "[REDACTED]"


def sanitize_string(value: str) -> str:
    """Redact credentials embedded in a string.

    :param value: String to sanitize
    :type value: str
    :return: String with credential patterns replaced
    :rtype: str
    """
    if not value:
        return value
    for pattern_name, pattern in SENSITIVE_PATTERNS.items():
        value = pattern.sub(f"<{pattern_name}:REDACTED>", value)
    return value


def sanitize_headers(
    headers: Union[Mapping[str, Any], Iterable[Tuple[str, Any]]],
) -> Dict[str, Any]:
    """Return a copy of the headers with credential values redacted.

    :param headers: Header mapping or sequence of pairs
    :return: New dictionary safe to log
    """
    items = headers.items() if isinstance(headers, Mapping) else headers
    sanitized: Dict[str, Any] = {}
    for key, value in items:
        if key.lower() in SENSITIVE_HEADERS:
            sanitized[key] = REDACTED
        else:
            sanitized[key] = value
    return sanitized


class SanitizingFormatter(logging.Formatter):
    """Formatter that removes credentials from log messages."""

    def format(self, record: logging.LogRecord) -> str:
        if record.args:
            try:
                record.msg = sanitize_string(record.msg % record.args)
                record.args = None
            except (TypeError, ValueError):
                record.msg = sanitize_string(str(record.msg))
        else:
            record.msg = sanitize_string(str(record.msg))
        return super().format(record)


_LOGGING_CONFIGURED = False


def setup_secure_logging(level: str = "INFO") -> None:
    """Set up root logging with automatic sanitization.

    Calling it more than once is a no-op.

    :param level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    :type level: str
    """
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        logging.getLogger(__name__).debug(
            "Logging already configured, skipping duplicate setup"
        )
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        SanitizingFormatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        handlers=[handler],
        force=True,
    )

    # httpx logs every request at INFO
    if level.upper() != "DEBUG":
        logging.getLogger("httpx").setLevel(logging.WARNING)

    _LOGGING_CONFIGURED = True
