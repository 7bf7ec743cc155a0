"""
Layered settings store built on PathMap.

Lookup order for `Settings.get`:
1. Values stored in the PathMap (constructor, `set`, `add`, `inject`)
2. Generated directories (``dir.*``), joined from the project root
3. The static DEFAULTS table
4. None

Writes can be refused per key (`lock`) or for the whole store (`freeze`).
A refused write returns False, or raises LockedSettingError when the store
was created with ``throw_on_error=True``.

The store is not thread-safe. Share an instance between threads only
behind your own lock.
"""

from __future__ import annotations

import collections.abc as _abc
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic

import dotprops.constants as constants
import dotprops.errors as errors
import dotprops.path_map as path_map
import dotprops.settings.defaults as defaults
import dotprops.settings.project as project
import dotprops.settings.types as types

_logger = _logging.getLogger(__name__)


class Settings:
    """
    Application settings addressed by dot paths.

    Example:
        >>> settings = Settings({"app.name": "demo"}, root_dir="/srv/demo")
        >>> settings.get("app.name")
        'demo'
        >>> settings.get("dir.cache")
        '/srv/demo/var/cache'
        >>> settings.lock("app.name")
        >>> settings.set("app.name", "other")
        False

    Args:
        settings: Initial values. Keys are paths (``{"dir.root": "/srv"}``).
        options: Behavior switches. Keyword overrides are applied on top.
        **option_overrides: Any SettingsOptions field, e.g. ``freeze=True``.

    Raises:
        InvalidConfigurationError: If the options do not validate.
    """

    DEFAULTS: _typing.ClassVar[_abc.Mapping[str, _typing.Any]] = defaults.DEFAULTS
    GENERATED_PATHS: _typing.ClassVar[_abc.Mapping[str, str | None]] = (
        defaults.GENERATED_PATHS
    )

    _shared: _typing.ClassVar[Settings | None] = None

    def __init__(
        self,
        settings: _abc.Mapping[str, _typing.Any] | None = None,
        *,
        options: types.SettingsOptions | None = None,
        **option_overrides: _typing.Any,
    ) -> None:
        base = options.model_dump() if options is not None else {}
        try:
            self._options = types.SettingsOptions.model_validate(
                {**base, **option_overrides}
            )
        except _pydantic.ValidationError as e:
            raise errors.InvalidConfigurationError(f"Invalid settings options: {e}") from e

        self._store = path_map.PathMap(settings, parse=True)
        self._frozen = self._options.freeze
        self._locked: list[str] = []

        if settings and self._options.lock_injected:
            self.lock(*settings.keys())

    # =========================================================================
    # Shared instance
    # =========================================================================

    @classmethod
    def instance(cls) -> Settings:
        """Return the shared instance, creating and sharing a default one if needed."""
        if Settings._shared is None:
            cls().share()
        assert Settings._shared is not None
        return Settings._shared

    def share(self) -> Settings:
        """
        Make this the shared instance unless one is already shared.

        Returns:
            The shared instance (self, or the one shared earlier).
        """
        if Settings._shared is None:
            Settings._shared = self
        return Settings._shared

    @classmethod
    def reset_shared(cls) -> None:
        """Forget the shared instance."""
        Settings._shared = None

    def __copy__(self) -> _typing.NoReturn:
        raise TypeError(f"{type(self).__name__} instances cannot be copied")

    def __deepcopy__(self, memo: dict[int, _typing.Any]) -> _typing.NoReturn:
        raise TypeError(f"{type(self).__name__} instances cannot be copied")

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def options(self) -> types.SettingsOptions:
        return self._options

    @property
    def store(self) -> path_map.PathMap:
        """The backing PathMap. Writes through it bypass locks."""
        return self._store

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def locked(self) -> tuple[str, ...]:
        """Locked keys, in the order they were locked."""
        return tuple(self._locked)

    # =========================================================================
    # Reads
    # =========================================================================

    def get(self, setting: str) -> _typing.Any:
        """Resolve a setting: stored, then generated, then default, then None."""
        _logger.debug("Requested setting: %s", setting)

        value = self._store.get(setting)
        if value is None or (setting in self.GENERATED_PATHS and isinstance(value, dict)):
            value = self._generate(setting)
        if value is None:
            value = self.DEFAULTS.get(setting)

        _logger.debug("Setting %s resolved to %r", setting, value)
        return value

    def has(self, setting: str) -> bool:
        """Check whether a value is stored for setting (generated and defaults excluded)."""
        return self._store.has(setting)

    def all(self) -> dict[str, _typing.Any]:
        """Return a copy of everything stored."""
        return self._store.all()

    def __contains__(self, setting: object) -> bool:
        return isinstance(setting, str) and self.has(setting)

    # =========================================================================
    # Writes
    # =========================================================================

    def set(
        self,
        setting: str | _abc.Mapping[str, _typing.Any],
        value: _typing.Any = None,
    ) -> bool:
        """
        Store value at setting.

        Returns:
            True if stored, False if the setting is locked or the store is
            frozen. The mapping form returns True only if every pair was
            stored; pairs are applied independently.

        Raises:
            LockedSettingError: Instead of returning False, in throw-on-error mode.
        """
        if isinstance(setting, _abc.Mapping):
            results = [self.set(key, item) for key, item in setting.items()]
            return all(results)

        if not self._check_writable(setting):
            return False
        self._store.set(setting, value)
        return True

    def add(
        self,
        setting: str | _abc.Mapping[str, _typing.Any],
        value: _typing.Any = None,
    ) -> bool:
        """
        Store value at setting only if nothing is stored there yet.

        Returns:
            True if added, False if the setting exists, is locked, or the
            store is frozen.

        Raises:
            LockedSettingError: For locked or frozen settings, in
                throw-on-error mode.
        """
        if isinstance(setting, _abc.Mapping):
            results = [self.add(key, item) for key, item in setting.items()]
            return all(results)

        if not self._check_writable(setting):
            return False
        if self._store.get(setting) is not None:
            return False
        self._store.set(setting, value)
        return True

    def inject(
        self,
        settings: _abc.Mapping[str, _typing.Any],
        lock: bool = False,
    ) -> Settings:
        """
        Add settings that are not stored yet, bypassing locks and freeze.

        Args:
            settings: Path -> value pairs.
            lock: Lock every injected key afterwards.

        Returns:
            self, for chaining.
        """
        self._store.add(settings)
        if lock:
            self.lock(*settings.keys())
        return self

    def lock(self, *settings: str) -> None:
        """Refuse future writes to each setting and everything below it."""
        for setting in settings:
            if setting not in self._locked:
                self._locked.append(setting)

    def is_locked(self, setting: str) -> bool:
        """
        Check whether a write to setting would touch a locked key.

        That is the case when setting is a locked key, lies below one, or is
        an ancestor whose write would replace one.
        """
        for locked in self._locked:
            if setting == locked:
                return True
            if setting.startswith(locked + self._store.delimiter):
                return True
            if locked.startswith(setting + self._store.delimiter):
                return True
        return False

    def freeze(self) -> None:
        """Refuse all further writes. Cannot be undone."""
        self._frozen = True

    # =========================================================================
    # Internals
    # =========================================================================

    def _check_writable(self, setting: str) -> bool:
        if self._frozen:
            reason = "frozen"
        elif self.is_locked(setting):
            reason = "locked"
        else:
            return True

        if self._options.throw_on_error:
            raise errors.LockedSettingError(setting, reason)
        _logger.warning("Refusing to change %s setting %r", reason, setting)
        return False

    def _project_root(self) -> _pathlib.Path:
        stored = self._store.get("dir.root")
        if isinstance(stored, (str, _pathlib.PurePath)):
            return _pathlib.Path(stored)
        if self._options.root_dir is not None:
            return self._options.root_dir
        return project.find_project_root()

    def _generate(self, setting: str) -> _typing.Any:
        """
        Compute a generated directory setting.

        Unfrozen stores keep the result, under the value marker when the
        node already has children (``dir.public`` next to
        ``dir.public.assets``). Frozen stores only return it.
        """
        if setting not in self.GENERATED_PATHS:
            return None

        root = self._project_root()
        suffix = self.GENERATED_PATHS[setting]
        generated = str(root.joinpath(*suffix.split("/")) if suffix else root)
        _logger.info("Generated %s: %s", setting, generated)

        if self._frozen:
            return generated

        target = setting
        if isinstance(self._store.get(setting), dict):
            target = f"{setting}{self._store.delimiter}{constants.VALUE_KEY}"
        self._store.set(target, generated)
        return generated
