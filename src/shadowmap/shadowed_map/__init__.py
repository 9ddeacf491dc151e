"""
ShadowedMap — a mutable view over a mapping that is never modified.

Writes go to a lazily created overlay; reads check the overlay first and
fall back to the shadowed mapping.

Example:
    >>> from shadowmap.shadowed_map import ShadowedMap
    >>> base = {"a": 1, "b": 2}
    >>> shadow = ShadowedMap(base)
    >>> shadow["a"] = 99
    >>> str(shadow)
    '{a=99, b=2}'
    >>> base
    {'a': 1, 'b': 2}
"""

from shadowmap.shadowed_map._core import ShadowedMap
from shadowmap.shadowed_map._entries import EntrySet, MapEntry
from shadowmap.shadowed_map._frozen import FrozenMapping
from shadowmap.shadowed_map._yaml import ShadowedMapDumper, dump, load

__all__ = [
    "EntrySet",
    "FrozenMapping",
    "MapEntry",
    "ShadowedMap",
    "ShadowedMapDumper",
    "dump",
    "load",
]
