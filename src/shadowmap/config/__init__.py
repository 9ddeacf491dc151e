"""
Configuration module for shadowmap.

Uses pydantic for per-map options and pydantic-settings for
environment variable loading.
"""

from shadowmap.config.settings import Settings
from shadowmap.config.types import Semantics, ShadowedMapConfig

__all__ = ["Semantics", "Settings", "ShadowedMapConfig"]
