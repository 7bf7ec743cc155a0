"""
Shared fixtures for PathMap tests.
"""

import pytest as _pytest

import dotprops.path_map as path_map


@_pytest.fixture
def empty_map() -> path_map.PathMap:
    """PathMap with nothing in it."""
    return path_map.PathMap()


@_pytest.fixture
def dirs_map() -> path_map.PathMap:
    """PathMap holding a small directory tree, built through paths."""
    return path_map.PathMap(
        {
            "dir.root": "/srv/app",
            "dir.cache": "/srv/app/var/cache",
            "dir.public.assets": "/srv/app/public/assets",
        },
        parse=True,
    )


@_pytest.fixture
def collision_map() -> path_map.PathMap:
    """PathMap where 'a' holds both a value and a child."""
    return path_map.PathMap().set("a", 1).set("a.b", 2)
