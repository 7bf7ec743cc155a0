"""
Shared constants for dotprops.

This module provides a single source of truth for the reserved keys and
path syntax used by PathMap and the settings store.
"""

VALUE_KEY = "[=]"
"""Reserved key holding a node's own value once the node also has children.

Setting ``a`` to ``5`` and then ``a.b`` to ``6`` leaves
``{"a": {"[=]": 5, "b": 6}}`` in the tree.
"""

DEFAULT_DELIMITER = "."
"""Default path segment delimiter."""

ARRAY_SUFFIX = "."
"""Trailing character selecting the subtree with value markers stripped."""

ALL_SUFFIX = ":"
"""Trailing character selecting the subtree verbatim, markers included."""

TRIM_CHARS = ARRAY_SUFFIX + ALL_SUFFIX
"""Characters trimmed from both ends of a path before lookup."""
