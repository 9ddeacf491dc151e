"""
ShadowedMap: a mutable mapping layered over a mapping it never modifies.

Architecture:
- Underlying: stored by reference, never modified, never copied
- Overlay: a dict created on the first write; all writes land here
- Config: initial capacity hint and semantics, fixed at construction

Read semantics:
- The overlay is consulted first, per key, then the underlying mapping
- Derived views (len, keys, values, entries, str) are computed on every
  call; nothing is cached, so changes made by the owner of the underlying
  mapping are visible immediately

Semantics:
- "compatible" (default): remove() on a key that only the underlying
  mapping holds removes nothing, put() returns the underlying value on
  the first write but the overlay value afterwards, and value_collection()
  concatenates both layers without honoring shadowing.
- "corrected": remove() masks keys with a tombstone, put() always returns
  the prior effective value, and every view honors shadowing.

Thread safety: NOT thread-safe. Concurrent first writes may race on the
overlay allocation. Use external synchronization if needed.
"""

from __future__ import annotations

import collections.abc as _abc
import logging as _logging
import typing as _typing

import shadowmap.config.settings as config_settings
import shadowmap.config.types as config_types
import shadowmap.shadowed_map._entries as _entries
import shadowmap.shadowed_map._frozen as _frozen

_logger = _logging.getLogger(__name__)

K = _typing.TypeVar("K")
V = _typing.TypeVar("V")


# Helper function to reconstruct _REMOVED singleton during unpickle
def _get_removed_singleton() -> _RemovedType:
    """Return the _REMOVED singleton. Called by pickle to reconstruct."""
    return _REMOVED


class _RemovedType:
    """Sentinel type marking a key as removed in the overlay."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<REMOVED>"

    def __reduce__(self) -> tuple[_typing.Callable[[], _RemovedType], tuple[()]]:
        """Pickle support: ensure singleton is preserved."""
        return (_get_removed_singleton, ())


_REMOVED = _RemovedType()

# Lookup miss marker; never stored
_MISSING: _typing.Any = object()


class ShadowedMap(_typing.MutableMapping[K, V]):
    """
    A mapping that shadows another mapping without modifying it.

    Behaves like copy-on-write with two differences: nothing is copied on
    creation, and the overlay holding the writes is not even created until
    the first write.

    Example:
        >>> base = {"a": 1, "b": 2}
        >>> shadow = ShadowedMap(base)
        >>> shadow.has_overlay
        False
        >>> shadow["a"] = 99
        >>> shadow["a"], base["a"]
        (99, 1)
        >>> str(shadow)
        '{a=99, b=2}'

    Args:
        underlying: The mapping to shadow. Held by reference.
        initial_capacity: Size hint for the overlay. Defaults to 4.
        semantics: "compatible" (default) or "corrected".
        config: A full ShadowedMapConfig. Explicit arguments override it.

    Raises:
        TypeError: If underlying is not a Mapping.
        pydantic.ValidationError: If the configuration is invalid.
    """

    def __init__(
        self,
        underlying: _abc.Mapping[K, V],
        initial_capacity: int | None = None,
        *,
        semantics: config_types.Semantics | None = None,
        config: config_types.ShadowedMapConfig | None = None,
    ) -> None:
        if not isinstance(underlying, _abc.Mapping):
            raise TypeError(
                f"underlying must be a Mapping, got {type(underlying).__name__}"
            )
        base = config if config is not None else config_types.ShadowedMapConfig()
        self._config = base.with_overrides(
            initial_capacity=initial_capacity,
            semantics=semantics,
        )
        self._underlying = underlying
        self._overlay: dict[K, _typing.Any] | None = None

    @classmethod
    def from_settings(
        cls,
        underlying: _abc.Mapping[K, V],
        settings: config_settings.Settings | None = None,
    ) -> ShadowedMap[K, V]:
        """
        Create a ShadowedMap configured from environment settings.

        Args:
            underlying: The mapping to shadow.
            settings: Settings to use. Defaults to a fresh Settings(), which
                reads SHADOWMAP_* environment variables.
        """
        if settings is None:
            settings = config_settings.Settings()
        return cls(underlying, config=settings.to_config())

    # =========================================================================
    # Introspection
    # =========================================================================

    @property
    def config(self) -> config_types.ShadowedMapConfig:
        """The immutable configuration of this map."""
        return self._config

    @property
    def initial_capacity(self) -> int:
        """Size hint used when the overlay is created."""
        return self._config.initial_capacity

    @property
    def semantics(self) -> config_types.Semantics:
        """The behavior profile of this map."""
        return self._config.semantics

    @property
    def has_overlay(self) -> bool:
        """Whether the first write has happened and the overlay exists."""
        return self._overlay is not None

    @property
    def underlying(self) -> _frozen.FrozenMapping[K, V]:
        """Read-only view of the shadowed mapping."""
        return _frozen.FrozenMapping(self._underlying)

    @property
    def overlay(self) -> _frozen.FrozenMapping[K, _typing.Any] | None:
        """Read-only view of the overlay, or None before the first write.

        Under corrected semantics, removed keys appear with a <REMOVED>
        marker as their value.
        """
        if self._overlay is None:
            return None
        return _frozen.FrozenMapping(self._overlay)

    # =========================================================================
    # Internal helpers
    # =========================================================================

    def _ensure_overlay(self) -> dict[K, _typing.Any]:
        """Return the overlay, creating it on first use."""
        if self._overlay is None:
            self._overlay = {}
            _logger.debug(
                "Materialized overlay (initial_capacity=%d, semantics=%s)",
                self._config.initial_capacity,
                self._config.semantics,
            )
        return self._overlay

    def _lookup(self, key: object) -> _typing.Any:
        """Return the effective value for key, or _MISSING."""
        overlay = self._overlay
        if overlay is not None and key in overlay:
            value = overlay[key]  # type: ignore[index]
            return _MISSING if value is _REMOVED else value
        # Membership first so mappings with __missing__ are never written to
        if key in self._underlying:
            return self._underlying[key]  # type: ignore[index]
        return _MISSING

    def _iter_effective(self) -> _typing.Iterator[tuple[K, V]]:
        """
        Yield effective (key, value) pairs.

        Order: keys of the underlying mapping in its own order (with the
        overlay's value where shadowed), then overlay-only keys in
        insertion order.
        """
        overlay = self._overlay
        if overlay is None:
            yield from self._underlying.items()
            return
        for key, value in self._underlying.items():
            if key in overlay:
                value = overlay[key]
                if value is _REMOVED:
                    continue
            yield key, value
        for key, value in overlay.items():
            if value is _REMOVED or key in self._underlying:
                continue
            yield key, value

    def _iter_values(self) -> _typing.Iterator[V]:
        """Yield values as reported by value_collection()."""
        if self._overlay is None:
            yield from self._underlying.values()
        elif self._config.corrected:
            for _key, value in self._iter_effective():
                yield value
        else:
            yield from self._overlay.values()
            yield from self._underlying.values()

    # =========================================================================
    # Writes (overlay only)
    # =========================================================================

    def put(self, key: K, value: V) -> V | None:
        """
        Set key to value in the overlay.

        Returns:
            Compatible semantics: on the first write, the underlying
            mapping's value for key; afterwards, the overlay's previous
            value for key (the underlying mapping is not consulted).
            Corrected semantics: the prior effective value.
            None when there was no such value.
        """
        if self._config.corrected:
            previous = self.get(key)
            self._ensure_overlay()[key] = value
            return previous

        if self._overlay is None:
            self._ensure_overlay()[key] = value
            return self._underlying.get(key)

        previous = self._overlay.get(key)
        self._overlay[key] = value
        return previous

    def put_all(
        self,
        entries: _abc.Mapping[K, V] | _typing.Iterable[tuple[K, V]],
    ) -> None:
        """
        Copy every pair from entries into the overlay, overwriting.

        The overlay is created even if entries is empty.
        """
        self._ensure_overlay().update(entries)

    def update(  # type: ignore[override]
        self,
        other: _abc.Mapping[K, V] | _typing.Iterable[tuple[K, V]] = (),
        /,
        **kwargs: V,
    ) -> None:
        """dict.update() equivalent, routed through put_all()."""
        self.put_all(other)
        if kwargs:
            self.put_all(kwargs)  # type: ignore[arg-type]

    def remove(self, key: K) -> V | None:
        """
        Remove key from the overlay.

        Compatible semantics: if the overlay exists, pop key from it and
        return the popped value (None if it was not there). The underlying
        mapping is never touched, so a key it holds stays visible. If the
        overlay does not exist nothing is removed and the underlying value
        (or None) is returned. The inherited pop() and del share this
        behavior: pop("a") on a key only the underlying mapping holds
        returns its value and "a" is still in the map afterwards.

        Corrected semantics: the key stops being visible. Keys held by the
        underlying mapping are masked with a tombstone. Returns the prior
        effective value, or None.
        """
        if self._config.corrected:
            previous = self._lookup(key)
            if previous is _MISSING:
                return None
            overlay = self._ensure_overlay()
            if key in self._underlying:
                overlay[key] = _REMOVED
                _logger.debug("Masked key %r with a tombstone", key)
            else:
                del overlay[key]
            return _typing.cast(V, previous)

        if self._overlay is not None:
            return self._overlay.pop(key, None)
        return self._underlying.get(key)

    def clear(self) -> None:
        """
        Clear the overlay.

        Compatible semantics: empties the overlay if it exists; the
        underlying entries stay visible. Does not create the overlay.

        Corrected semantics: every key becomes invisible. Keys of the
        underlying mapping are masked with tombstones.
        """
        if self._config.corrected:
            if self._overlay is None and not self._underlying:
                return
            overlay = self._ensure_overlay()
            overlay.clear()
            overlay.update(dict.fromkeys(self._underlying, _REMOVED))
            _logger.debug("Masked %d underlying keys on clear", len(overlay))
            return

        if self._overlay is not None:
            self._overlay.clear()

    def __setitem__(self, key: K, value: V) -> None:
        self.put(key, value)

    def __delitem__(self, key: K) -> None:
        """
        Remove key via remove().

        Raises:
            KeyError: If key is not effectively present.
        """
        if not self.contains_key(key):
            raise KeyError(key)
        self.remove(key)

    def popitem(self) -> tuple[K, V]:
        """
        Remove and return a (key, value) pair.

        Compatible semantics: pairs come from the overlay only, last
        inserted first. Underlying entries cannot be removed, so KeyError
        is raised once the overlay is empty even if the map is not.

        Corrected semantics: removes the first effective key.

        Raises:
            KeyError: If there is nothing left to remove.
        """
        if self._config.corrected:
            for key, value in self._iter_effective():
                self.remove(key)
                return key, value
            raise KeyError("popitem(): shadowed map is empty")

        if not self._overlay:
            raise KeyError("popitem(): overlay is empty")
        return self._overlay.popitem()

    # =========================================================================
    # Reads
    # =========================================================================

    def get(self, key: K, default: _typing.Any = None) -> _typing.Any:  # type: ignore[override]
        """Return the effective value for key, or default."""
        value = self._lookup(key)
        return default if value is _MISSING else value

    def __getitem__(self, key: K) -> V:
        value = self._lookup(key)
        if value is _MISSING:
            raise KeyError(key)
        return _typing.cast(V, value)

    def contains_key(self, key: object) -> bool:
        """Whether key is in the overlay or the underlying mapping."""
        return self._lookup(key) is not _MISSING

    def __contains__(self, key: object) -> bool:
        return self.contains_key(key)

    def contains_value(self, value: object) -> bool:
        """
        Whether value is among value_collection().

        Compatible semantics test the raw union of both layers, so a value
        hidden behind an overlay entry still counts.
        """
        return value in self._iter_values()

    def is_empty(self) -> bool:
        """
        Whether there is nothing to see.

        Compatible semantics: the overlay (if any) and the underlying
        mapping are both empty.
        """
        if self._config.corrected:
            return next(self._iter_effective(), _MISSING) is _MISSING
        return not self._overlay and not self._underlying

    def size(self) -> int:
        """Number of effective keys: the union of both layers' keys."""
        if self._config.corrected:
            return sum(1 for _ in self._iter_effective())
        count = len(self._underlying)
        if self._overlay is not None:
            count += sum(1 for key in self._overlay if key not in self._underlying)
        return count

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> _typing.Iterator[K]:
        """Iterate over effective keys in entry_set() order."""
        for key, _value in self._iter_effective():
            yield key

    def key_set(self) -> set[K]:
        """Return a new set of the effective keys."""
        return set(self)

    def value_collection(self) -> list[V]:
        """
        Return a new list of values.

        Compatible semantics: the overlay's values followed by all of the
        underlying values, without removing values of shadowed keys.
        Corrected semantics: one value per effective key.

        values() is the standard mapping view and always honors shadowing.
        """
        return list(self._iter_values())

    def entry_set(self) -> _entries.EntrySet:
        """Return the effective entries, one per key, honoring shadowing."""
        return _entries.EntrySet(self._iter_effective())

    def to_dict(self) -> dict[K, V]:
        """Return a plain dict snapshot of the effective entries."""
        return dict(self._iter_effective())

    def copy(self) -> ShadowedMap[K, V]:
        """
        Return a shallow copy.

        The copy shares the underlying mapping reference and configuration
        but has an independent overlay. A copy of a map without an overlay
        has no overlay either.
        """
        new = type(self)(self._underlying, config=self._config)
        if self._overlay is not None:
            new._overlay = dict(self._overlay)
        return new

    __copy__ = copy

    def render_to_string(self) -> str:
        """
        Render as {key=value, ...} in entry_set() order.

        Example: underlying {a: 1, b: 2} with overlay {a: 99} renders as
        "{a=99, b=2}".
        """
        body = ", ".join(f"{key}={value}" for key, value in self._iter_effective())
        return f"{{{body}}}"

    def __str__(self) -> str:
        return self.render_to_string()

    def __repr__(self) -> str:
        parts = [repr(self._underlying), f"overlay={self._overlay!r}"]
        if self._config.corrected:
            parts.append(f"semantics={self._config.semantics!r}")
        return f"ShadowedMap({', '.join(parts)})"
