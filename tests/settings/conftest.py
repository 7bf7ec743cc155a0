"""
Shared fixtures for settings store tests.
"""

import pathlib as _pathlib
import typing as _typing

import pytest as _pytest

import dotprops.settings as settings
import dotprops.settings.project as project


@_pytest.fixture(autouse=True)
def reset_shared_settings() -> _typing.Generator[None, None, None]:
    """Make sure no test sees another test's shared instance."""
    settings.Settings.reset_shared()
    yield
    settings.Settings.reset_shared()


@_pytest.fixture
def project_root(
    tmp_path: _pathlib.Path, monkeypatch: _pytest.MonkeyPatch
) -> _pathlib.Path:
    """Pin project root discovery to a temporary directory."""
    root = tmp_path / "project"
    root.mkdir()
    monkeypatch.setattr(project, "find_project_root", lambda start_path=None: root)
    return root
