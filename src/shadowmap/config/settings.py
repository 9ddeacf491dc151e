"""
Settings configuration using pydantic-settings.

Loads ShadowedMap defaults from:
1. Constructor arguments (highest precedence)
2. Environment variables with SHADOWMAP_ prefix
3. .env file named by SHADOWMAP_ENV_FILE (if set and present)
4. Built-in defaults from shadowmap.constants

Example:
    SHADOWMAP_INITIAL_CAPACITY=16
    SHADOWMAP_SEMANTICS=corrected
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import shadowmap.config.types as types
import shadowmap.constants as constants

ENV_FILE_VAR = f"{constants.ENV_PREFIX}ENV_FILE"


def _get_env_file() -> str | None:
    """Determine which .env file to load.

    Only an explicit SHADOWMAP_ENV_FILE is honored. If it is set but the
    file does not exist, nothing is loaded rather than falling back
    silently to another file.
    """
    if env_file := _os.environ.get(ENV_FILE_VAR):
        if _pathlib.Path(env_file).exists():
            return env_file
    return None


class Settings(_pydantic_settings.BaseSettings):
    """
    Environment-driven defaults for ShadowedMap.

    All settings can be overridden via environment variables with the
    SHADOWMAP_ prefix, e.g. SHADOWMAP_INITIAL_CAPACITY=32.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix=constants.ENV_PREFIX,
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    initial_capacity: int = _pydantic.Field(
        default=constants.DEFAULT_INITIAL_CAPACITY,
        ge=0,
    )
    """Default overlay size hint."""

    semantics: types.Semantics = constants.DEFAULT_SEMANTICS
    """Default behavior profile."""

    @classmethod
    def construct_without_dotenv(cls, **kwargs: _typing.Any) -> "Settings":
        """Create Settings from environment variables only, without loading .env file.

        Useful for test isolation and for reproducing issues without .env
        interference.
        """
        return cls(_env_file=None, **kwargs)  # type: ignore[call-arg]

    def to_config(self) -> types.ShadowedMapConfig:
        """Build the immutable per-map config from these settings."""
        return types.ShadowedMapConfig(
            initial_capacity=self.initial_capacity,
            semantics=self.semantics,
        )
