"""URI construction and base URI resolution."""

from typing import Union

import httpx


def _raw_path(url: httpx.URL) -> bytes:
    # raw_path carries the query; percent-escapes stay intact
    return url.raw_path.split(b"?", 1)[0]


class HttpxUriFactory:
    """Create :class:`httpx.URL` values and resolve them against a base.

    Relative URIs inherit the scheme, host and port of the base, and the
    base path is prepended to theirs, so ``/organizations`` against
    ``https://api.example.com/v1`` becomes
    ``https://api.example.com/v1/organizations``. Percent-encoded
    characters such as ``%2F`` are kept as sent. Absolute URIs are
    returned untouched; network-path references (``//host/path``) keep
    their host and take the scheme of the base.
    """

    def create_uri(self, uri: Union[str, httpx.URL]) -> httpx.URL:
        """Parse a URI.

        :raises httpx.InvalidURL: If the string is not a valid URI
        """
        return uri if isinstance(uri, httpx.URL) else httpx.URL(uri)

    def resolve(self, base: httpx.URL, uri: Union[str, httpx.URL]) -> httpx.URL:
        url = self.create_uri(uri)
        if url.is_absolute_url:
            return url
        if url.host:
            return url.copy_with(scheme=base.scheme)

        base_path = _raw_path(base).rstrip(b"/")
        # httpx reports "/" for an empty path
        raw = str(url)
        path = _raw_path(url) if raw and raw[0] not in "?#" else b""
        if path and not path.startswith(b"/"):
            path = b"/" + path
        raw_path = (base_path + path) or b"/"
        if url.query:
            raw_path += b"?" + url.query
        return base.copy_with(raw_path=raw_path, fragment=url.fragment or None)
