"""
Read-only wrapper for the underlying mapping.

ShadowedMap never writes to the mapping it shadows. FrozenMapping is how
that mapping is handed back to callers: reads pass straight through, and
there is no way to write through the wrapper.
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

K = _typing.TypeVar("K")
V = _typing.TypeVar("V")


class FrozenMapping(_typing.Mapping[K, V]):
    """
    Read-only view of a mapping.

    The wrapped mapping is held by reference, not copied, so changes made
    by its owner are visible through the view.

    Example:
        >>> data = {"a": 1}
        >>> frozen = FrozenMapping(data)
        >>> frozen["a"]
        1
        >>> frozen["a"] = 99  # TypeError: immutable
    """

    __slots__ = ("_data",)

    def __init__(self, data: _abc.Mapping[K, V]) -> None:
        self._data = data

    def __getitem__(self, key: K) -> V:
        return self._data[key]

    def __iter__(self) -> _typing.Iterator[K]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __repr__(self) -> str:
        return f"FrozenMapping({self._data!r})"

    def __eq__(self, other: object) -> bool:
        """Compare equal to any Mapping with same content."""
        if isinstance(other, _abc.Mapping):
            return dict(self.items()) == dict(other.items())
        return NotImplemented

    def __hash__(self) -> int:
        """FrozenMapping is not hashable (the wrapped mapping may change)."""
        raise TypeError(f"unhashable type: '{type(self).__name__}'")
