"""
Helpers operating on plain nested dicts.

These functions never touch a PathMap instance. They take and return
ordinary dicts so they can be used on the output of ``PathMap.all()`` too.
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

import dotprops.constants as constants
import dotprops.errors as errors
import dotprops.path_map._paths as _paths


def own(value: _typing.Any) -> _typing.Any:
    """
    Return a copy of value that shares no containers with the caller.

    Mappings become dicts with string keys, lists and tuples become lists,
    recursively. Anything else is stored as an opaque value by reference.
    """
    if isinstance(value, _abc.Mapping):
        return {_paths.to_key(k): own(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [own(v) for v in value]
    return value


def copy_tree(value: _typing.Any) -> _typing.Any:
    """Copy dicts and lists recursively, leaving other values alone."""
    if isinstance(value, dict):
        return {k: copy_tree(v) for k, v in value.items()}
    if isinstance(value, list):
        return [copy_tree(v) for v in value]
    return value


def strip_markers(value: _typing.Any) -> _typing.Any:
    """Return a copy of value with every value marker removed, at any depth."""
    if isinstance(value, dict):
        return {
            k: strip_markers(v)
            for k, v in value.items()
            if k != constants.VALUE_KEY
        }
    if isinstance(value, list):
        return [strip_markers(v) for v in value]
    return value


def flatten(
    tree: dict[str, _typing.Any],
    delimiter: str = constants.DEFAULT_DELIMITER,
    prefix: str = "",
) -> dict[str, _typing.Any]:
    """
    Flatten a nested dict into ``{joined.path: leaf}``.

    A value marker collapses onto its owner's path, so
    ``{"a": {"[=]": 1, "b": 2}}`` flattens to ``{"a": 1, "a.b": 2}``.
    Empty nested dicts have no leaves below them and are kept as ``{}`` leaves.
    A marker at the top level has no owner path and keeps its own key.

    Args:
        tree: The dict to flatten.
        delimiter: Joins the segments of the flat keys.
        prefix: Prepended to every flat key (used in recursion).

    Raises:
        MergeConflictError: If two nodes produce the same flat key, e.g. a
            literal ``"a.b"`` key next to a nested ``a -> b``.
    """
    flat: dict[str, _typing.Any] = {}

    for key, value in tree.items():
        if isinstance(value, dict) and value:
            fragment = flatten(value, delimiter, f"{prefix}{key}{delimiter}")
        elif key == constants.VALUE_KEY:
            fragment = {prefix.strip(delimiter) or constants.VALUE_KEY: copy_tree(value)}
        else:
            fragment = {f"{prefix}{key}": copy_tree(value)}

        for flat_key, leaf in fragment.items():
            if flat_key in flat:
                raise errors.MergeConflictError(flat_key)
            flat[flat_key] = leaf

    return flat


def next_index(node: dict[str, _typing.Any]) -> str:
    """Return the key a list-style append would use in node: max integer key + 1."""
    indexes = [int(k) for k in node if k.isascii() and k.isdigit()]
    return str(max(indexes) + 1) if indexes else "0"
