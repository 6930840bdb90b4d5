"""Define the base class for external entity storage clients.

A storage client is a plugin: it carries a plugin id, a plugin definition
(``name``, ``label`` and optional ``description``) and a configuration
merged over its declared defaults. Concrete clients implement
:meth:`EntityStorageClientBase.query`; counting is derived from it.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional, Protocol, Sized, runtime_checkable

from .configuration import merge_configuration


@runtime_checkable
class Queryable(Protocol):
    """Anything that can run a query for entities."""

    def query(self, parameters: Optional[Mapping[str, Any]] = None) -> Sized: ...


def count_query(
    queryable: Queryable, parameters: Optional[Mapping[str, Any]] = None
) -> int:
    """Return the number of results ``queryable.query(parameters)`` yields."""
    return len(queryable.query(parameters or {}))


class EntityStorageClientBase(ABC):
    """Base class for external entity storage clients.

    :param configuration: Plugin instance configuration
    :type configuration: Optional[Mapping[str, Any]]
    :param plugin_id: Plugin identifier
    :type plugin_id: str
    :param plugin_definition: Plugin metadata (``name``, ``label``,
        ``description``)
    :type plugin_definition: Mapping[str, Any]
    """

    def __init__(
        self,
        configuration: Optional[Mapping[str, Any]],
        plugin_id: str,
        plugin_definition: Mapping[str, Any],
    ):
        self.plugin_id = plugin_id
        self.plugin_definition = dict(plugin_definition)
        self.configuration: Dict[str, Any] = {}
        self.set_configuration(configuration or {})

    def get_plugin_id(self) -> str:
        return self.plugin_id

    def get_plugin_definition(self) -> Dict[str, Any]:
        return self.plugin_definition

    def get_name(self) -> str:
        return self.plugin_definition["name"]

    def label(self) -> str:
        return self.plugin_definition["label"]

    def get_description(self) -> str:
        return self.plugin_definition.get("description") or ""

    def get_configuration(self) -> Dict[str, Any]:
        return self.configuration

    def set_configuration(self, configuration: Mapping[str, Any]) -> None:
        """Store ``configuration`` deep merged over the defaults."""
        self.configuration = merge_configuration(
            self.default_configuration(), configuration
        )

    def default_configuration(self) -> Dict[str, Any]:
        return {}

    def calculate_dependencies(self) -> Dict[str, Any]:
        return {}

    @abstractmethod
    def query(self, parameters: Optional[Mapping[str, Any]] = None) -> Sized:
        """Return the entities matching ``parameters``.

        :param parameters: Filter parameters understood by the client
        :return: Sized collection of entities
        """
        pass

    def count_query(self, parameters: Optional[Mapping[str, Any]] = None) -> int:
        """Return the number of entities matching ``parameters``."""
        return count_query(self, parameters)
