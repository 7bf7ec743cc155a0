"""Option models for the settings store.

Options are validated with pydantic so a typo in an option name fails at
construction instead of being silently ignored.
"""

import pathlib as _pathlib

import pydantic as _pydantic


class OptionsBase(_pydantic.BaseModel):
    """Base class for option models: unknown fields are rejected."""

    model_config = _pydantic.ConfigDict(extra="forbid", frozen=True)


class SettingsOptions(OptionsBase):
    """
    Behavior switches for `Settings`.

    All switches are fixed for the lifetime of the store, except that an
    unfrozen store can still be frozen later with `Settings.freeze()`.
    """

    lock_injected: bool = False
    """Lock every key passed to the constructor."""

    freeze: bool = False
    """Refuse all writes; generated directories are computed but never stored."""

    throw_on_error: bool = False
    """Raise LockedSettingError on refused writes instead of returning False."""

    root_dir: _pathlib.Path | None = None
    """Project root used for generated directories when ``dir.root`` is unset.

    None means discover it (git root, then project markers, then cwd).
    """

    @_pydantic.field_validator("root_dir", mode="after")
    @classmethod
    def _expand_root_dir(cls, v: _pathlib.Path | None) -> _pathlib.Path | None:
        """Expand ``~`` so callers can pass user-relative paths."""
        return v.expanduser() if v is not None else None
