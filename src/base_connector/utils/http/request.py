"""Request construction.

The default request factory builds plain :class:`httpx.Request` values.
Bodies that are already serialized (``str`` or ``bytes``) are sent as-is;
any other payload is encoded as JSON.
"""

import json
from typing import Any, Mapping, Optional, Union

import httpx


def encode_body(body: Any) -> Optional[bytes]:
    """Encode a request payload into bytes.

    :param body: Raw or pre-serialized payload, or None for no body
    :return: Encoded body or None
    """
    if body is None:
        return None
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    return json.dumps(body, ensure_ascii=False).encode("utf-8")


class HttpxRequestFactory:
    """Build :class:`httpx.Request` objects."""

    def create_request(
        self,
        method: str,
        uri: Union[str, httpx.URL],
        headers: Optional[Mapping[str, str]] = None,
        body: Any = None,
    ) -> httpx.Request:
        """Create a request.

        :param method: HTTP method
        :param uri: Target URI
        :param headers: Request headers
        :param body: Optional payload
        :return: The request
        :raises httpx.InvalidURL: If the URI cannot be parsed
        """
        return httpx.Request(
            method.upper(),
            uri,
            headers=headers,
            content=encode_body(body),
        )
