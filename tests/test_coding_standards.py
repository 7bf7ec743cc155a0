"""
Tests that enforce coding standards.

These tests verify that the codebase follows our import and logging
conventions:
- No 'from X import Y' outside __init__.py re-exports (and __future__)
- Third-party and stdlib modules imported as private aliases ('import x as _x')
- Modules that log use a module-level '_logger = _logging.getLogger(__name__)'
"""

import pathlib as _pathlib
import re as _re

import pytest as _pytest

SRC_DIR = _pathlib.Path(__file__).parent.parent / "src" / "dotprops"
TESTS_DIR = _pathlib.Path(__file__).parent

_PLAIN_IMPORT = _re.compile(r"^import (?P<module>[\w.]+)(?: as (?P<alias>\w+))?\s*(?:#.*)?$")


def _python_files(directory: _pathlib.Path) -> list[_pathlib.Path]:
    """All Python files in a directory, recursively, except this one."""
    return [p for p in directory.rglob("*.py") if p.name != "test_coding_standards.py"]


def _from_imports(content: str) -> list[tuple[int, str]]:
    """
    Extract 'from X import Y' statements, skipping __future__ and TYPE_CHECKING blocks.

    Returns list of (line_number, line_content) tuples.
    """
    found: list[tuple[int, str]] = []
    in_type_checking = False

    for i, line in enumerate(content.split("\n"), start=1):
        stripped = line.strip()

        if "if _typing.TYPE_CHECKING:" in line or "if TYPE_CHECKING:" in line:
            in_type_checking = True
            continue
        if in_type_checking and stripped and not line.startswith((" ", "\t", "#")):
            in_type_checking = False
        if in_type_checking:
            continue

        if stripped.startswith("from ") and " import " in stripped:
            if stripped.startswith("from __future__ import"):
                continue
            found.append((i, stripped))

    return found


def _unaliased_imports(content: str) -> list[tuple[int, str]]:
    """Top-level 'import x' lines for non-dotprops modules without a private alias."""
    found: list[tuple[int, str]] = []
    for i, line in enumerate(content.split("\n"), start=1):
        match = _PLAIN_IMPORT.match(line)
        if match is None:
            continue
        module, alias = match.group("module"), match.group("alias")
        if module == "dotprops" or module.startswith("dotprops."):
            continue
        if alias is None or not alias.startswith("_"):
            found.append((i, line.strip()))
    return found


class TestImportStyle:
    """Tests for import style compliance."""

    @_pytest.mark.parametrize("directory", [SRC_DIR, TESTS_DIR], ids=["src", "tests"])
    def test_no_from_imports(self, directory: _pathlib.Path) -> None:
        """Only __init__.py files may use 'from X import Y' (for re-exports)."""
        violations = [
            f"{path}:{line_num}: {line}"
            for path in _python_files(directory)
            if path.name != "__init__.py"
            for line_num, line in _from_imports(path.read_text())
        ]

        if violations:
            _pytest.fail(
                "Found forbidden 'from X import Y' imports:\n"
                + "\n".join(f"  {v}" for v in violations)
                + "\n\nUse 'import X as _x' (external) or 'import X as x' (internal) instead."
            )

    def test_src_external_imports_are_private(self) -> None:
        """External modules are imported under a leading-underscore alias."""
        violations = [
            f"{path}:{line_num}: {line}"
            for path in _python_files(SRC_DIR)
            for line_num, line in _unaliased_imports(path.read_text())
        ]

        if violations:
            _pytest.fail("Found unaliased external imports:\n" + "\n".join(violations))


class TestLoggingStyle:
    """Tests for logger setup."""

    def test_logging_modules_use_module_logger(self) -> None:
        """A module importing logging defines _logger from its own __name__."""
        missing = [
            str(path)
            for path in _python_files(SRC_DIR)
            if "import logging as _logging" in (content := path.read_text())
            and "_logger = _logging.getLogger(__name__)" not in content
        ]

        assert missing == []


class TestExtractionHelpers:
    """Tests for the extraction logic itself."""

    def test_detects_from_import(self) -> None:
        assert _from_imports("from pathlib import Path") == [(1, "from pathlib import Path")]

    def test_allows_future_imports(self) -> None:
        assert _from_imports("from __future__ import annotations") == []

    def test_ignores_type_checking_block(self) -> None:
        content = """
import typing as _typing

if _typing.TYPE_CHECKING:
    from some_module import SomeType

from forbidden import Other
"""
        imports = _from_imports(content)

        assert len(imports) == 1
        assert "from forbidden import Other" in imports[0][1]

    def test_unaliased_import_detected(self) -> None:
        content = "import yaml\nimport json as _json\nimport dotprops.errors as errors\n"

        assert _unaliased_imports(content) == [(1, "import yaml")]
