"""
Settings store for dotprops.

A thin layer over PathMap adding defaults, generated directory paths,
per-key locks and a whole-store freeze.
"""

from dotprops.settings.defaults import DEFAULTS, GENERATED_PATHS
from dotprops.settings.project import find_git_root, find_project_root
from dotprops.settings.store import Settings
from dotprops.settings.types import SettingsOptions

__all__ = [
    "DEFAULTS",
    "GENERATED_PATHS",
    "Settings",
    "SettingsOptions",
    "find_git_root",
    "find_project_root",
]
