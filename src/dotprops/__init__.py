"""
dotprops - dot-path access to nested settings.

Read and write nested dicts through path strings like ``dir.public.assets``,
with a layered settings store on top.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("dotprops")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)
__author__ = "dotprops Contributors"

from dotprops.errors import (  # noqa: E402
    DotPropsError,
    InvalidConfigurationError,
    InvalidPathError,
    LockedSettingError,
    MergeConflictError,
)
from dotprops.path_map import PathMap, unflatten  # noqa: E402
from dotprops.settings import Settings, SettingsOptions  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "DotPropsError",
    "InvalidConfigurationError",
    "InvalidPathError",
    "LockedSettingError",
    "MergeConflictError",
    "PathMap",
    "Settings",
    "SettingsOptions",
    "unflatten",
]
