"""
CLI module for dotprops.

Provides the command-line interface using Click.
"""

from dotprops.cli.main import cli, main

__all__ = ["main", "cli"]
