"""Error formatters render failed exchanges into diagnostic text.

The transport uses the configured formatter to build the message of the
:class:`~base_connector.exceptions.ApiResponseError` it raises for error
responses. Credential headers are always redacted.
"""

from typing import Optional

import httpx

from ..security import sanitize_headers


def _request_body(request: httpx.Request) -> str:
    try:
        content = request.content
    except httpx.RequestNotRead:
        return "[streamed body]"
    return content.decode("utf-8", errors="replace")


def _response_body(response: httpx.Response) -> str:
    try:
        return response.text
    except httpx.ResponseNotRead:
        return "[streamed body]"


class SimpleFormatter:
    """Render one line per message."""

    def format_request(self, request: httpx.Request) -> str:
        return f"{request.method} {request.url}"

    def format_response(self, response: httpx.Response) -> str:
        return f"{response.status_code} {response.reason_phrase}".rstrip()


class FullHttpMessageFormatter:
    """Render the start line, redacted headers and (truncated) body.

    :param max_body_length: Characters of body to include; None for no limit
    :type max_body_length: Optional[int]
    """

    def __init__(self, max_body_length: Optional[int] = 1000):
        self.max_body_length = max_body_length

    def _truncate(self, body: str) -> str:
        if self.max_body_length is not None and len(body) > self.max_body_length:
            return body[: self.max_body_length]
        return body

    def _headers(self, headers: httpx.Headers) -> str:
        redacted = sanitize_headers(headers.multi_items())
        return "".join(f"{name}: {value}\r\n" for name, value in redacted.items())

    def format_request(self, request: httpx.Request) -> str:
        return (
            f"{request.method} {request.url.raw_path.decode('ascii')} HTTP/1.1\r\n"
            + self._headers(request.headers)
            + "\r\n"
            + self._truncate(_request_body(request))
        )

    def format_response(self, response: httpx.Response) -> str:
        return (
            f"{response.http_version} {response.status_code} "
            f"{response.reason_phrase}\r\n"
            + self._headers(response.headers)
            + "\r\n"
            + self._truncate(_response_body(response))
        )


def format_exchange(formatter, request: httpx.Request, response: httpx.Response) -> str:
    """Describe a failed exchange with the given formatter."""
    return (
        f"Request:\n{formatter.format_request(request)}\n"
        f"Response:\n{formatter.format_response(response)}"
    )
