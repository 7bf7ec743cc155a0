"""
YAML text <-> PathMap conversion.

Only strings and streams are handled here; nothing is read from or written
to disk on the map's behalf.

Example:
    >>> pm = load_yaml('''
    ... dir:
    ...   cache: /var/cache
    ... ''')
    >>> pm.get("dir.cache")
    '/var/cache'
"""

from __future__ import annotations

import typing as _typing

import yaml as _yaml

import dotprops.constants as constants
import dotprops.errors as errors
import dotprops.path_map._core as _core


def load_yaml(
    source: str | _typing.TextIO,
    *,
    parse: bool = False,
    delimiter: str = constants.DEFAULT_DELIMITER,
) -> _core.PathMap:
    """
    Build a PathMap from a YAML document.

    Args:
        source: YAML text or a text stream.
        parse: Treat top-level keys as paths (``dir.cache: /tmp``).
        delimiter: PathMap delimiter.

    Raises:
        InvalidConfigurationError: If the document is not a mapping or is
            not valid YAML.
    """
    try:
        data = _yaml.safe_load(source)
    except _yaml.YAMLError as e:
        raise errors.InvalidConfigurationError(f"Invalid YAML: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise errors.InvalidConfigurationError(
            f"YAML document must be a mapping, got {type(data).__name__}"
        )
    try:
        return _core.PathMap(data, parse=parse, delimiter=delimiter)
    except TypeError as e:
        raise errors.InvalidConfigurationError(f"Unsupported YAML key: {e}") from e


def dump_yaml(path_map: _core.PathMap) -> str:
    """Render the whole tree (markers included) as YAML, preserving key order."""
    return _yaml.safe_dump(
        path_map.all(),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
