"""Project root discovery for generated directory settings."""

import logging as _logging
import pathlib as _pathlib
import subprocess as _subprocess

_logger = _logging.getLogger(__name__)

PROJECT_MARKERS = ("pyproject.toml", "setup.py", "setup.cfg", ".git")
"""Files whose presence marks a directory as a project root."""


def find_git_root(start_path: _pathlib.Path | None = None) -> _pathlib.Path | None:
    """Find the git repository root from the given path or current directory."""
    if start_path is None:
        start_path = _pathlib.Path.cwd()

    try:
        result = _subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            capture_output=True,
            text=True,
            cwd=start_path,
            timeout=5,
        )
        if result.returncode == 0:
            return _pathlib.Path(result.stdout.strip())
    except (_subprocess.TimeoutExpired, FileNotFoundError, OSError):
        pass
    return None


def find_marked_root(start_path: _pathlib.Path) -> _pathlib.Path | None:
    """Walk up from start_path to the nearest directory holding a project marker."""
    current = start_path.resolve()
    while True:
        if any((current / marker).exists() for marker in PROJECT_MARKERS):
            return current
        if current == current.parent:
            return None
        current = current.parent


def find_project_root(start_path: _pathlib.Path | None = None) -> _pathlib.Path:
    """
    Find the project root directory.

    Tries (in order):
    1. Git repository root
    2. Nearest directory containing pyproject.toml, setup.py, setup.cfg or .git
    3. Current working directory
    """
    if start_path is None:
        start_path = _pathlib.Path.cwd()

    root = find_git_root(start_path) or find_marked_root(start_path)
    if root is None:
        root = _pathlib.Path.cwd()
    _logger.debug("Project root for %s is %s", start_path, root)
    return root
