"""Storage client fetching entities through an :class:`HttpApiClient`."""

import logging
from typing import Any, Dict, List, Mapping, Optional

import httpx

from ..client import HttpApiClient
from ..exceptions import TransportError
from .base import EntityStorageClientBase
from .configuration import merge_configuration

logger = logging.getLogger(__name__)

DEFAULT_PLUGIN_DEFINITION = {
    "name": "http",
    "label": "HTTP",
    "description": "Fetches entities from a JSON API endpoint.",
}


class HttpStorageClient(EntityStorageClientBase):
    """Query a JSON collection endpoint.

    Configuration keys:

    - ``path``: collection path, relative to the client endpoint
    - ``list_key``: key holding the entity list when the API wraps it in
      an object; None when the response body is the list itself
    - ``parameters``: query parameters sent with every query

    :param client: Client used for requests
    :type client: HttpApiClient
    """

    def __init__(
        self,
        client: HttpApiClient,
        configuration: Optional[Mapping[str, Any]] = None,
        plugin_id: str = "http",
        plugin_definition: Optional[Mapping[str, Any]] = None,
    ):
        self.client = client
        super().__init__(
            configuration, plugin_id, plugin_definition or DEFAULT_PLUGIN_DEFINITION
        )

    def default_configuration(self) -> Dict[str, Any]:
        return {"path": "", "list_key": None, "parameters": {}}

    def query(self, parameters: Optional[Mapping[str, Any]] = None) -> List[Any]:
        """Fetch the entities matching ``parameters``.

        :raises TransportError: If the response is not the expected list
        """
        params = merge_configuration(self.configuration["parameters"], parameters)
        uri = httpx.URL(self.configuration["path"], params=params or None)
        response = self.client.get(uri)

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(
                f"Response of {uri} is not valid JSON", response=response
            ) from e

        list_key = self.configuration["list_key"]
        if list_key:
            if not isinstance(data, dict) or list_key not in data:
                raise TransportError(
                    f"Response of {uri} has no '{list_key}' member", response=response
                )
            data = data[list_key]

        if not isinstance(data, list):
            raise TransportError(
                f"Response of {uri} is not a list of entities", response=response
            )
        logger.debug("Fetched %d entities from %s", len(data), uri)
        return data
