"""
YAML helpers for ShadowedMap.

Provides:
- ShadowedMapDumper: SafeDumper that represents a ShadowedMap as the
  plain mapping of its effective entries
- load(): shadow the mapping parsed from a YAML document
- dump(): serialize the effective entries of a ShadowedMap

Example:
    >>> from shadowmap.shadowed_map import _yaml
    >>> shadow = _yaml.load("a: 1\\nb: 2\\n")
    >>> shadow["a"] = 99
    >>> _yaml.dump(shadow)
    'a: 99\\nb: 2\\n'
"""

from __future__ import annotations

import logging as _logging
import typing as _typing

import yaml as _yaml

import shadowmap.config.types as config_types
import shadowmap.shadowed_map._core as _core

_logger = _logging.getLogger(__name__)


class ShadowedMapDumper(_yaml.SafeDumper):
    """
    YAML dumper that understands ShadowedMap.

    A ShadowedMap (or subclass) is written as a regular YAML mapping of
    its effective entries. Removed keys and shadowed values never appear.
    """

    pass


def _represent_shadowed_map(
    dumper: ShadowedMapDumper,
    data: _core.ShadowedMap[_typing.Any, _typing.Any],
) -> _yaml.Node:
    """Represent a ShadowedMap as a plain mapping node."""
    return dumper.represent_dict(data.to_dict())


ShadowedMapDumper.add_multi_representer(_core.ShadowedMap, _represent_shadowed_map)


def load(
    stream: _typing.Any,
    initial_capacity: int | None = None,
    *,
    semantics: config_types.Semantics | None = None,
    config: config_types.ShadowedMapConfig | None = None,
) -> _core.ShadowedMap[_typing.Any, _typing.Any]:
    """
    Parse a YAML mapping and return a ShadowedMap over it.

    The parsed mapping is owned by nobody else, so it can only change
    through the returned map's overlay.

    Args:
        stream: YAML content (string, bytes, or file-like object).
        initial_capacity: Overlay size hint, as for ShadowedMap.
        semantics: Behavior profile, as for ShadowedMap.
        config: Full configuration, as for ShadowedMap.

    Returns:
        ShadowedMap over the parsed mapping. An empty document gives an
        empty mapping.

    Raises:
        TypeError: If the document is not a mapping.
        yaml.YAMLError: If the document is not valid YAML.
    """
    data = _yaml.safe_load(stream)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise TypeError(f"YAML document must be a mapping, got {type(data).__name__}")
    _logger.debug("Loaded %d top-level keys from YAML", len(data))
    return _core.ShadowedMap(
        data,
        initial_capacity,
        semantics=semantics,
        config=config,
    )


def dump(
    shadowed: _core.ShadowedMap[_typing.Any, _typing.Any],
    stream: _typing.Any = None,
    **kwargs: _typing.Any,
) -> str | None:
    """
    Serialize the effective entries of a ShadowedMap as YAML.

    Key order follows entry_set() unless sort_keys=True is passed.

    Args:
        shadowed: The map to serialize.
        stream: Optional file-like object. If None, the YAML is returned.
        **kwargs: Extra options for yaml.dump().

    Returns:
        The YAML text if stream is None, else None.
    """
    kwargs.setdefault("sort_keys", False)
    kwargs.setdefault("default_flow_style", False)
    return _typing.cast(
        "str | None",
        _yaml.dump(shadowed, stream, Dumper=ShadowedMapDumper, **kwargs),
    )
