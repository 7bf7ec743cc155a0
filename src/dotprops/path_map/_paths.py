"""
Path parsing for PathMap.

Paths are delimiter-joined segment strings. Integer keys are accepted at the
public boundary and turned into strings here, so the tree only ever holds
string keys.

Read paths may carry a one-character suffix selecting how a subtree is
returned:

- ``"dir.public"``  VALUE: the node's own value if it has one
- ``"dir.public."`` ARRAY: the subtree with value markers stripped
- ``"dir.public:"`` ALL: the subtree verbatim
"""

from __future__ import annotations

import enum as _enum
import typing as _typing

import dotprops.constants as constants
import dotprops.errors as errors

Key: _typing.TypeAlias = str | int


class GetMode(_enum.Enum):
    """How `PathMap.get` returns a mapping node."""

    ALL = "all"
    """Return the subtree verbatim, including value markers."""

    VALUE = "value"
    """Return the node's marker value when present, else the stripped subtree."""

    ARRAY = "array"
    """Return the subtree with value markers removed at every depth."""


def to_key(key: Key) -> str:
    """Coerce a public key (string or integer index) to its stored string form."""
    if isinstance(key, str):
        return key
    if isinstance(key, int) and not isinstance(key, bool):
        return str(key)
    raise TypeError(f"Keys must be strings or integers, got {type(key).__name__}")


def split_path(path: Key, delimiter: str) -> list[str]:
    """Split a path into its segments."""
    return to_key(path).split(delimiter)


def parse_get_path(path: Key) -> tuple[str, GetMode]:
    """
    Split a read path into the lookup key and the requested GetMode.

    The mode comes from the last character of the raw path. Any run of
    ``.`` and ``:`` at either end is trimmed from the lookup key.

    Raises:
        InvalidPathError: If the path is the empty string.
    """
    if path == "":
        raise errors.InvalidPathError(path)

    raw = to_key(path)
    if raw.endswith(constants.ARRAY_SUFFIX):
        mode = GetMode.ARRAY
    elif raw.endswith(constants.ALL_SUFFIX):
        mode = GetMode.ALL
    else:
        mode = GetMode.VALUE

    return raw.strip(constants.TRIM_CHARS), mode
