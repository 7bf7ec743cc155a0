"""
PathMap: dot-path addressed access into a tree of nested dicts.

Paths are delimiter-joined segment strings (``"dir.public.assets"``).
Reads never create structure; writes create intermediate dicts on demand.

Scalar/container collisions:
- A node holding a scalar that later needs children is wrapped as
  ``{"[=]": scalar}`` before descending, so no value is lost.
- Reads resolve the marker back to the scalar unless asked otherwise
  (see `GetMode`).

Thread safety: NOT thread-safe. Writes walk and mutate the live tree in
place; callers sharing an instance between threads need their own lock.
"""

from __future__ import annotations

import collections.abc as _abc
import logging as _logging
import typing as _typing

import dotprops.constants as constants
import dotprops.errors as errors
import dotprops.path_map._paths as _paths
import dotprops.path_map._tree as _tree

_logger = _logging.getLogger(__name__)

Key = _paths.Key
Keys: _typing.TypeAlias = Key | _abc.Iterable[Key]


class _MissingType:
    """Sentinel type for lookups that found nothing."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<MISSING>"


_MISSING = _MissingType()


def _as_keys(keys: Keys) -> list[Key]:
    """Normalize a single key or an iterable of keys to a list."""
    if isinstance(keys, (str, int)):
        return [keys]
    return list(keys)


class PathMap(_abc.MutableMapping[str, _typing.Any]):
    """
    A mapping from delimiter-joined paths to values in a nested dict tree.

    Example:
        >>> pm = PathMap()
        >>> pm.set("dir.cache", "/var/cache")
        PathMap({'dir': {'cache': '/var/cache'}}, delimiter='.')
        >>> pm.get("dir")
        {'cache': '/var/cache'}

    Collision handling:
        >>> pm = PathMap().set("a", 1).set("a.b", 2)
        >>> pm.get("a")    # the node's own value
        1
        >>> pm.get("a.")   # children only
        {'b': 2}
        >>> pm.get("a:")   # verbatim
        {'[=]': 1, 'b': 2}

    Args:
        items: Initial contents: a mapping, another PathMap, or a bare value
            (stored under key ``"0"``).
        parse: If True, each top-level key of items is treated as a path and
            inserted with `set`. If False, keys are stored literally.
        delimiter: Path segment separator. Must not be empty.

    Raises:
        InvalidConfigurationError: If delimiter is empty.

    Note:
        The instance owns its tree. Values are copied on the way in and
        dicts/lists are copied on the way out of `get`, `all` and `pull`, so
        mutating a returned value never changes the map. Objects other than
        dicts and lists are stored by reference.

        Python's mapping protocol proxies to the path operations:
        ``pm[path]`` is `get` (``KeyError`` when absent), ``pm[path] = v``
        is `set` (a falsy key appends instead), ``path in pm`` is `has` and
        ``del pm[path]`` is `delete`. Iteration and ``len()`` cover
        top-level keys in insertion order.
    """

    VALUE_KEY: _typing.ClassVar[str] = constants.VALUE_KEY

    def __init__(
        self,
        items: _typing.Any = None,
        parse: bool = False,
        delimiter: str = constants.DEFAULT_DELIMITER,
    ) -> None:
        if not delimiter:
            raise errors.InvalidConfigurationError(
                f"{type(self).__name__} delimiter cannot be empty"
            )
        self._delimiter = delimiter
        self._root: dict[str, _typing.Any] = {}
        self.replace(items, parse=parse)

    @property
    def delimiter(self) -> str:
        """The path segment separator."""
        return self._delimiter

    @classmethod
    def from_flat(
        cls,
        flat: _abc.Mapping[Key, _typing.Any],
        delimiter: str = constants.DEFAULT_DELIMITER,
    ) -> PathMap:
        """
        Build a PathMap from the output of `flatten`.

        Unlike ``PathMap(flat, parse=True)``, a scalar landing on a path that
        already holds children is stored under the value marker instead of
        replacing the subtree, so the result does not depend on key order.
        """
        path_map = cls(delimiter=delimiter)
        for key, value in flat.items():
            path = _paths.to_key(key)
            if isinstance(path_map._resolve(path), dict) and not isinstance(
                value, _abc.Mapping
            ):
                path = f"{path}{delimiter}{constants.VALUE_KEY}"
            path_map.set(path, value)
        return path_map

    def replace(self, items: _typing.Any = None, parse: bool = False) -> PathMap:
        """
        Discard the current contents and load items instead.

        Args:
            items: See the class docstring.
            parse: Insert each top-level key as a path instead of literally.

        Returns:
            self, for chaining.
        """
        contents = self._coerce(items)
        self._root = {}
        if parse:
            return self.set(contents)
        self._root = contents
        return self

    # =========================================================================
    # Writes
    # =========================================================================

    def set(
        self,
        path: Key | _abc.Mapping[Key, _typing.Any],
        value: _typing.Any = None,
    ) -> PathMap:
        """
        Set the value at path, creating intermediate dicts as needed.

        A scalar found on the way down is kept under the value marker of the
        dict that replaces it. Whatever sits at the final segment, scalar or
        whole subtree, is overwritten.

        Args:
            path: A path, or a mapping of path -> value to set in order.
                Each pair is independent; a failure partway leaves the
                earlier pairs applied.
            value: The value to store (ignored for the mapping form).

        Returns:
            self, for chaining.
        """
        if isinstance(path, _abc.Mapping):
            for key, item in path.items():
                self.set(key, item)
            return self

        segments = _paths.split_path(path, self._delimiter)
        node = self._root
        for segment in segments[:-1]:
            child = node.get(segment)
            if child is None:
                child = node[segment] = {}
            elif not isinstance(child, dict):
                _logger.debug(
                    "Wrapping scalar at %r under %s", segment, constants.VALUE_KEY
                )
                child = node[segment] = {constants.VALUE_KEY: child}
            node = child

        node[segments[-1]] = self._own(value)
        return self

    def add(
        self,
        path: Key | _abc.Mapping[Key, _typing.Any],
        value: _typing.Any = None,
    ) -> PathMap:
        """
        Set path to value only if `get` currently returns None for it.

        The mapping form checks each pair independently.

        Returns:
            self, for chaining.
        """
        if isinstance(path, _abc.Mapping):
            for key, item in path.items():
                self.add(key, item)
            return self

        if self.get(path) is None:
            self.set(path, value)
        return self

    def push(self, path: _typing.Any, value: _typing.Any = None) -> PathMap:
        """
        Append to a list-like value.

        With no value, path itself is appended to the top level under the
        next integer key. Otherwise value is appended to whatever `get`
        returns for path: nothing (a new list is created), a list, or a
        dict (stored under its next integer key, value markers inside it
        kept). Scalars, including a node's own marker value, are left
        untouched.

        Returns:
            self, for chaining.
        """
        if value is None:
            self._root[_tree.next_index(self._root)] = self._own(path)
            return self

        items = self.get(path)
        if items is None:
            items = [value]
        elif isinstance(items, list):
            items.append(value)
        elif isinstance(items, dict):
            # Re-read verbatim so markers below the node survive the write-back.
            items = self.get(f"{_paths.to_key(path)}{constants.ALL_SUFFIX}")
            items[_tree.next_index(items)] = value
        else:
            _logger.debug("Not pushing onto scalar value at %r", path)
            return self

        return self.set(path, items)

    def clear(self, paths: Keys | None = None) -> PathMap:  # type: ignore[override]
        """
        Empty the whole map, or reset each of paths to an empty dict.

        Clearing a path keeps its key; only its contents go.

        Returns:
            self, for chaining.
        """
        if paths is None:
            self._root = {}
            return self

        for path in _as_keys(paths):
            self.set(path, {})
        return self

    def delete(self, paths: Keys) -> PathMap:
        """
        Remove each of paths.

        A literal top-level key wins over segment walking. A path whose
        parents don't all exist as dicts is skipped silently.

        Returns:
            self, for chaining.
        """
        for path in _as_keys(paths):
            key = _paths.to_key(path)
            if key in self._root:
                del self._root[key]
                continue

            *parents, last = key.split(self._delimiter)
            node = self._root
            for segment in parents:
                child = node.get(segment)
                if not isinstance(child, dict):
                    _logger.debug("Skipping delete of unresolved path %r", key)
                    break
                node = child
            else:
                node.pop(last, None)

        return self

    # =========================================================================
    # Reads
    # =========================================================================

    def has(self, paths: Keys) -> bool:
        """
        Check whether every one of paths exists.

        A literal top-level key counts even if it contains the delimiter.
        Otherwise every segment must be a key of a dict on the way down.

        Returns:
            False for an empty map or an empty list of paths, else True only
            if all paths exist.
        """
        keys = _as_keys(paths)
        if not self._root or not keys:
            return False

        for path in keys:
            key = _paths.to_key(path)
            if key in self._root:
                continue
            if self._resolve(key) is _MISSING:
                return False
        return True

    def get(self, path: Key, default: _typing.Any = None) -> _typing.Any:
        """
        Return the value at path, or default if it does not exist.

        A trailing ``.`` returns the subtree without value markers, a
        trailing ``:`` returns it verbatim, and no suffix returns the node's
        own (marker) value when it has one. See `GetMode`.

        Raises:
            InvalidPathError: If path is the empty string.
        """
        key, mode = _paths.parse_get_path(path)

        if key in self._root:
            node = self._root[key]
        else:
            node = self._resolve(key)
            if node is _MISSING:
                return default

        return self._present(node, mode)

    def pull(self, path: Key | None = None, default: _typing.Any = None) -> _typing.Any:
        """Return the value at path and delete it; without path, empty the whole map."""
        if path is None:
            value = self.all()
            self.clear()
            return value

        value = self.get(path, default)
        self.delete(path)
        return value

    def all(self) -> dict[str, _typing.Any]:
        """Return a copy of the whole tree, value markers included."""
        return _tree.copy_tree(self._root)

    def flatten(
        self,
        delimiter: str = constants.DEFAULT_DELIMITER,
        items: _abc.Mapping[Key, _typing.Any] | None = None,
        prefix: str = "",
    ) -> dict[str, _typing.Any]:
        """
        Flatten the tree (or items) into ``{joined.path: leaf}``.

        Args:
            delimiter: Joins flat keys. May differ from the instance delimiter.
            items: A mapping to flatten instead of this map's tree.
            prefix: Prepended to every flat key.

        Raises:
            MergeConflictError: If two nodes produce the same flat key.
        """
        tree = self._root if items is None else _tree.own(items)
        return _tree.flatten(tree, delimiter, prefix)

    def copy(self) -> PathMap:
        """Return an independent PathMap with the same contents and delimiter."""
        return type(self)(self, delimiter=self._delimiter)

    # =========================================================================
    # Internals
    # =========================================================================

    def _resolve(self, key: str) -> _typing.Any:
        """Walk key segment by segment, returning the live node or _MISSING."""
        node: _typing.Any = self._root
        for segment in key.split(self._delimiter):
            if not isinstance(node, dict) or segment not in node:
                return _MISSING
            node = node[segment]
        return node

    @staticmethod
    def _present(node: _typing.Any, mode: _paths.GetMode) -> _typing.Any:
        """Copy a resolved node out of the tree according to mode."""
        if not isinstance(node, dict) or mode is _paths.GetMode.ALL:
            return _tree.copy_tree(node)
        if mode is _paths.GetMode.VALUE and constants.VALUE_KEY in node:
            return _tree.copy_tree(node[constants.VALUE_KEY])
        return _tree.strip_markers(node)

    @staticmethod
    def _own(value: _typing.Any) -> _typing.Any:
        if isinstance(value, PathMap):
            return value.all()
        return _tree.own(value)

    @classmethod
    def _coerce(cls, items: _typing.Any) -> dict[str, _typing.Any]:
        """Turn constructor input into an owned top-level dict."""
        if items is None:
            return {}
        if isinstance(items, PathMap):
            return items.all()
        if isinstance(items, _abc.Mapping):
            return _tree.own(items)
        if isinstance(items, (list, tuple)):
            return {str(i): _tree.own(item) for i, item in enumerate(items)}
        return {"0": _tree.own(items)}

    # =========================================================================
    # MutableMapping protocol
    # =========================================================================

    def __getitem__(self, path: Key) -> _typing.Any:
        value = self.get(path, _MISSING)
        if value is _MISSING:
            raise KeyError(path)
        return value

    def __setitem__(self, path: Key | None, value: _typing.Any) -> None:
        if not path:
            self._root[_tree.next_index(self._root)] = self._own(value)
        else:
            self.set(path, value)

    def __delitem__(self, path: Key) -> None:
        self.delete(path)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, int)):
            return False
        return self.has(path)

    def __iter__(self) -> _typing.Iterator[str]:
        return iter(self._root)

    def __len__(self) -> int:
        return len(self._root)

    def items(self) -> _abc.ItemsView[str, _typing.Any]:
        """Top-level (key, value) pairs of a copy of the tree, markers included."""
        return self.all().items()

    def values(self) -> _abc.ValuesView[_typing.Any]:
        """Top-level values of a copy of the tree, markers included."""
        return self.all().values()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PathMap):
            return self._root == other._root
        if isinstance(other, _abc.Mapping):
            return self._root == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._root!r}, delimiter={self._delimiter!r})"


def unflatten(
    flat: _abc.Mapping[Key, _typing.Any],
    delimiter: str = constants.DEFAULT_DELIMITER,
) -> dict[str, _typing.Any]:
    """
    Rebuild a nested dict from the output of `PathMap.flatten`.

    Example:
        >>> unflatten({"a": 1, "a.b": 2, "c.d": 3})
        {'a': {'[=]': 1, 'b': 2}, 'c': {'d': 3}}
    """
    return PathMap.from_flat(flat, delimiter).all()
