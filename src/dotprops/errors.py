"""
Exception hierarchy for dotprops.

Everything raised on purpose by the library derives from DotPropsError.
Argument errors also derive from ValueError so callers that only know the
builtin contract keep working.
"""


class DotPropsError(Exception):
    """Base class for dotprops errors."""

    pass


class InvalidConfigurationError(DotPropsError, ValueError):
    """Raised when a PathMap or Settings store is configured with bad values."""

    pass


class InvalidPathError(DotPropsError, ValueError):
    """Raised when a path cannot be resolved at all (e.g. the empty path)."""

    def __init__(self, path: object, message: str = "path cannot be empty") -> None:
        self.path = path
        super().__init__(f"Invalid path {path!r}: {message}")


class LockedSettingError(DotPropsError):
    """Raised when a locked or frozen setting is mutated in throw-on-error mode."""

    def __init__(self, setting: str, reason: str = "locked") -> None:
        self.setting = setting
        self.reason = reason
        super().__init__(f"Setting {setting!r} is {reason} and cannot be changed")


class MergeConflictError(DotPropsError):
    """Raised when flattening produces the same flat key from two different nodes."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Flattened key {key!r} is produced by more than one node")
