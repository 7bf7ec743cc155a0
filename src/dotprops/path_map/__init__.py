"""
PathMap: dot-path addressed access into nested dicts.

Example:
    >>> from dotprops.path_map import PathMap
    >>> pm = PathMap({"dir.public.assets": "/srv/public/assets"}, parse=True)
    >>> pm.get("dir.public")
    {'assets': '/srv/public/assets'}
    >>> pm.flatten()
    {'dir.public.assets': '/srv/public/assets'}
"""

from dotprops.path_map._core import PathMap, unflatten
from dotprops.path_map._paths import GetMode, parse_get_path
from dotprops.path_map._yaml import dump_yaml, load_yaml

__all__ = ["GetMode", "PathMap", "dump_yaml", "load_yaml", "parse_get_path", "unflatten"]
