"""
Shared constants for shadowmap.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

DEFAULT_INITIAL_CAPACITY = 4
"""Default size hint for the overlay created on the first write."""

SEMANTICS_COMPATIBLE = "compatible"
"""Reproduce the historical remove/put/values behavior exactly."""

SEMANTICS_CORRECTED = "corrected"
"""Tombstone removals and report effective values everywhere."""

DEFAULT_SEMANTICS = SEMANTICS_COMPATIBLE
"""Semantics used when nothing else is configured."""

ENV_PREFIX = "SHADOWMAP_"
"""Prefix for environment variables read by shadowmap.config.Settings."""
