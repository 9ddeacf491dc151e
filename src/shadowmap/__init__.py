"""
shadowmap - copy-on-write mappings without the copy.

A ShadowedMap wraps a mapping it never modifies. Writes land in a
lazily created overlay dict; reads check the overlay first and fall
back to the wrapped mapping.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("shadowmap")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)
__author__ = "shadowmap Contributors"

from shadowmap.config import Settings, ShadowedMapConfig  # noqa: E402
from shadowmap.shadowed_map import EntrySet, MapEntry, ShadowedMap  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "EntrySet",
    "MapEntry",
    "Settings",
    "ShadowedMap",
    "ShadowedMapConfig",
]
