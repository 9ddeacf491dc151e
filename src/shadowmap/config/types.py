"""Configuration type definitions for shadowmap.

ShadowedMapConfig is the validated, immutable bundle of options a
ShadowedMap is built with. It is normally created implicitly from the
ShadowedMap constructor arguments, or from environment variables via
shadowmap.config.Settings.

Semantics:
- "compatible": remove/put/values keep their long-standing behavior,
  quirks included.
- "corrected": remove masks keys with a tombstone, put returns the prior
  effective value, and every derived view respects shadowing.
"""

import typing as _typing

import pydantic as _pydantic

import shadowmap.constants as constants

Semantics = _typing.Literal["compatible", "corrected"]
"""Behavior profile for remove/put/clear and the derived views."""


class ShadowedMapConfig(_pydantic.BaseModel):
    """
    Options for a single ShadowedMap.

    Unknown fields are rejected so that a misspelled option fails at
    construction instead of being silently ignored.
    """

    model_config = _pydantic.ConfigDict(extra="forbid", frozen=True)

    initial_capacity: int = _pydantic.Field(
        default=constants.DEFAULT_INITIAL_CAPACITY,
        ge=0,
        strict=True,
    )
    """Size hint used once, when the overlay is first created."""

    semantics: Semantics = constants.DEFAULT_SEMANTICS
    """Which remove/put/values behavior to use."""

    @property
    def corrected(self) -> bool:
        """True when the corrected semantics are selected."""
        return self.semantics == constants.SEMANTICS_CORRECTED

    def with_overrides(self, **overrides: _typing.Any) -> "ShadowedMapConfig":
        """
        Return a validated copy with the given fields replaced.

        Overrides whose value is None are ignored, so callers can pass
        optional constructor arguments straight through.

        Raises:
            pydantic.ValidationError: If an override is invalid.
        """
        changes = {key: value for key, value in overrides.items() if value is not None}
        if not changes:
            return self
        return ShadowedMapConfig(**{**self.model_dump(), **changes})
