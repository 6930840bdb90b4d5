"""Storage clients for external entities."""

from .base import EntityStorageClientBase, Queryable, count_query
from .configuration import merge_configuration
from .http import HttpStorageClient

__all__ = [
    "EntityStorageClientBase",
    "HttpStorageClient",
    "Queryable",
    "count_query",
    "merge_configuration",
]
