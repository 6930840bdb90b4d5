"""Configuration merging for storage clients."""

import copy
from typing import Any, Dict, Mapping, Optional


def merge_configuration(
    defaults: Optional[Mapping[str, Any]],
    supplied: Optional[Mapping[str, Any]],
) -> Dict[str, Any]:
    """Deep merge a supplied configuration over its defaults.

    Supplied values win. Where both sides hold a mapping under the same
    key the two are merged recursively; any other supplied value
    (including lists and None) replaces the default outright. Neither
    argument is modified.

    :param defaults: Declared default configuration
    :param supplied: Configuration given by the caller
    :return: New merged configuration
    """
    merged: Dict[str, Any] = copy.deepcopy(dict(defaults or {}))
    for key, value in (supplied or {}).items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_configuration(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged
