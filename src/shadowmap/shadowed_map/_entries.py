"""
Entry types returned by ShadowedMap.entry_set().

MapEntry is a (key, value) pair. EntrySet is a set of entries that does
not require values to be hashable: every key appears at most once, so a
list is enough to back it and membership is tested by equality.
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing


class MapEntry(_typing.NamedTuple):
    """A single key/value pair. Compares equal to the tuple (key, value)."""

    key: _typing.Any
    value: _typing.Any


class EntrySet(_abc.Set[MapEntry]):
    """
    Snapshot of a mapping's effective entries.

    Supports the full read-only set interface (len, iteration, membership,
    comparison, &, |, -, ^) against any other set of pairs.

    Cost: the entries are kept in a list, so membership is O(n), and
    comparisons and set operators between two EntrySets are O(n*m).
    Convert to a built-in set first when comparing large entry sets with
    hashable values.

    Example:
        >>> entries = EntrySet([MapEntry("a", [1]), MapEntry("b", 2)])
        >>> ("a", [1]) in entries
        True
        >>> ("a", 1) in entries
        False
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: _typing.Iterable[tuple[_typing.Any, _typing.Any]] = ()) -> None:
        self._entries: list[MapEntry] = [MapEntry(*entry) for entry in entries]

    @classmethod
    def _from_iterable(cls, it: _typing.Iterable[_typing.Any]) -> EntrySet:
        """Build results of set operators (&, |, ...), dropping duplicates."""
        unique: list[MapEntry] = []
        for item in it:
            entry = MapEntry(*item)
            if entry not in unique:
                unique.append(entry)
        return cls(unique)

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, tuple) or len(item) != 2:
            return False
        return any(entry == item for entry in self._entries)

    def __iter__(self) -> _typing.Iterator[MapEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"EntrySet({self._entries!r})"

    __hash__ = None  # type: ignore[assignment]
