"""Tests for the Python mapping protocol, copying and pickling."""

import copy as _copy
import pickle as _pickle

import pytest as _pytest

import shadowmap.shadowed_map as shadowed_map

ShadowedMap = shadowed_map.ShadowedMap


class TestMappingProtocol:
    """Standard MutableMapping behavior."""

    def test_getitem_missing_raises(self, shadow: ShadowedMap[str, int]) -> None:
        """Absent keys raise KeyError."""
        with _pytest.raises(KeyError):
            _ = shadow["zzz"]

    def test_get_default(self, shadow: ShadowedMap[str, int]) -> None:
        """get() returns the default for absent keys."""
        assert shadow.get("zzz") is None
        assert shadow.get("zzz", 0) == 0

    def test_iteration_order(self, shadow: ShadowedMap[str, int]) -> None:
        """Underlying keys first, then overlay-only keys."""
        shadow["c"] = 3
        shadow["a"] = 99

        assert list(shadow) == ["a", "b", "c"]
        assert list(shadow.keys()) == ["a", "b", "c"]
        assert list(shadow.items()) == [("a", 99), ("b", 2), ("c", 3)]

    def test_equality(self, shadow: ShadowedMap[str, int]) -> None:
        """Compares by effective content with any mapping."""
        shadow["a"] = 99

        assert shadow == {"a": 99, "b": 2}
        assert shadow != {"a": 1, "b": 2}
        assert shadow == ShadowedMap({"a": 99, "b": 2})

    def test_setdefault(self, shadow: ShadowedMap[str, int]) -> None:
        """setdefault() only writes absent keys."""
        assert shadow.setdefault("a", 50) == 1
        assert shadow.setdefault("c", 3) == 3
        assert shadow.overlay == {"c": 3}

    def test_not_hashable(self, shadow: ShadowedMap[str, int]) -> None:
        """Mutable mappings are unhashable."""
        with _pytest.raises(TypeError):
            hash(shadow)

    def test_generic_subscript(self) -> None:
        """The class can be parameterized for type hints."""
        alias = ShadowedMap[str, int]

        assert alias({"a": 1})["a"] == 1


class TestCopy:
    """copy() shares the underlying mapping but not the overlay."""

    def test_copy_independent_overlay(
        self, shadow: ShadowedMap[str, int], base: dict[str, int]
    ) -> None:
        """Writes to the copy do not leak into the original."""
        shadow["a"] = 99
        clone = shadow.copy()
        clone["a"] = 100
        clone["c"] = 3

        assert shadow.to_dict() == {"a": 99, "b": 2}
        assert clone.to_dict() == {"a": 100, "b": 2, "c": 3}
        assert base == {"a": 1, "b": 2}

    def test_copy_shares_underlying(self, shadow: ShadowedMap[str, int], base: dict[str, int]) -> None:
        """The copy sees later changes to the shared underlying mapping."""
        clone = _copy.copy(shadow)
        base["z"] = 26

        assert clone["z"] == 26

    def test_copy_keeps_lazy_state(self, shadow: ShadowedMap[str, int]) -> None:
        """Copying a map without an overlay does not create one."""
        clone = shadow.copy()

        assert not clone.has_overlay

    def test_copy_keeps_config(self, base: dict[str, int]) -> None:
        """Capacity and semantics carry over."""
        shadow = ShadowedMap(base, 16, semantics="corrected")

        clone = shadow.copy()

        assert clone.config == shadow.config


class TestPickle:
    """Pickling preserves both layers and the configuration."""

    def test_round_trip(self, shadow: ShadowedMap[str, int]) -> None:
        """Effective content survives pickling."""
        shadow["a"] = 99
        shadow["c"] = 3

        restored = _pickle.loads(_pickle.dumps(shadow))

        assert restored.to_dict() == {"a": 99, "b": 2, "c": 3}
        assert restored.underlying == {"a": 1, "b": 2}

    def test_tombstones_survive(self, corrected: ShadowedMap[str, int]) -> None:
        """Removed keys stay removed after unpickling."""
        corrected.remove("a")

        restored = _pickle.loads(_pickle.dumps(corrected))

        assert "a" not in restored
        assert restored.to_dict() == {"b": 2}
        assert restored.semantics == "corrected"


class TestPopAndPopItem:
    """pop() and popitem() follow the semantics of remove()."""

    def test_pop_underlying_only_key_stays_visible(self) -> None:
        """Compatible pop() returns the value but cannot remove the key."""
        shadow = ShadowedMap({"a": 1})

        assert shadow.pop("a") == 1
        assert "a" in shadow
        assert shadow["a"] == 1

    def test_pop_overlay_key(self, shadow: ShadowedMap[str, int]) -> None:
        """Overlay-only keys are really popped."""
        shadow["c"] = 3

        assert shadow.pop("c") == 3
        assert "c" not in shadow

    def test_pop_corrected_removes(self) -> None:
        """Corrected pop() hides the key."""
        shadow = ShadowedMap({"a": 1}, semantics="corrected")

        assert shadow.pop("a") == 1
        assert "a" not in shadow

    def test_popitem_compatible_pops_overlay_only(self, shadow: ShadowedMap[str, int]) -> None:
        """Overlay entries come back last-in first-out, then KeyError."""
        shadow["a"] = 99
        shadow["c"] = 3

        assert shadow.popitem() == ("c", 3)
        assert shadow.popitem() == ("a", 99)
        with _pytest.raises(KeyError):
            shadow.popitem()
        assert shadow.to_dict() == {"a": 1, "b": 2}

    def test_popitem_compatible_without_overlay(self, shadow: ShadowedMap[str, int]) -> None:
        """Nothing to pop without an overlay, and none is created."""
        with _pytest.raises(KeyError):
            shadow.popitem()
        assert not shadow.has_overlay

    def test_drain_loop_terminates(self, any_semantics: str) -> None:
        """'while m: m.popitem()' ends under both semantics."""
        base = {"a": 1, "b": 2}
        shadow = ShadowedMap(base, semantics=any_semantics)
        shadow["c"] = 3
        popped = []

        for _ in range(10):
            if not shadow:
                break
            try:
                popped.append(shadow.popitem())
            except KeyError:
                break
        else:
            _pytest.fail("popitem() kept returning entries")

        assert len(set(popped)) == len(popped)
        assert base == {"a": 1, "b": 2}
        if any_semantics == "corrected":
            assert popped == [("a", 1), ("b", 2), ("c", 3)]
            assert shadow.is_empty()
        else:
            assert popped == [("c", 3)]
            assert shadow.to_dict() == {"a": 1, "b": 2}

    def test_popitem_corrected_empty_raises(self) -> None:
        """An empty corrected map raises KeyError."""
        shadow: ShadowedMap[str, int] = ShadowedMap({}, semantics="corrected")

        with _pytest.raises(KeyError):
            shadow.popitem()
