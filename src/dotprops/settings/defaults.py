"""
Static tables for the settings store.

This module provides a single source of truth for the fallback values
and generated directory layout used by `Settings`.

The shipped DEFAULTS only names the generated ``dir.*`` keys, so on its own
it never supplies a value. Applications add real fallbacks by extending it
in a subclass::

    class AppSettings(Settings):
        DEFAULTS = {**defaults.DEFAULTS, "app.name": "demo"}
"""

import typing as _typing

DEFAULTS: dict[str, _typing.Any] = {
    "dir.root": None,
    "dir.var": None,
    "dir.cache": None,
    "dir.storage": None,
    "dir.uploads": None,
    "dir.assets": None,
    "dir.public": None,
    "dir.public.assets": None,
    "dir.public.uploads": None,
}
"""Last-resort values returned when a setting is neither stored nor generated.

The ``dir.*`` entries are None because they are generated on demand.
"""

GENERATED_PATHS: dict[str, str | None] = {
    "dir.root": None,
    "dir.var": "var",
    "dir.cache": "var/cache",
    "dir.storage": "storage",
    "dir.uploads": "storage/uploads",
    "dir.assets": "assets",
    "dir.public": "public",
    "dir.public.assets": "public/assets",
    "dir.public.uploads": "public/uploads",
}
"""Settings computed by joining the project root with a relative suffix.

None means the project root itself.
"""
