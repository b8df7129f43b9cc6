"""Library configuration using Pydantic settings.

Configuration is loaded from:
1. Environment variables (ORDMAP_* prefix)
2. .env file in current directory
3. Default values
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ordmap._internal.storage import DUPLICATE_POLICIES, DuplicatePolicy


class OrdmapSettings(BaseSettings):
    """Configuration for ordered maps and the ordmap CLI.

    Environment variables are prefixed with ORDMAP_.
    """

    model_config = SettingsConfigDict(
        env_prefix="ORDMAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Default for OrderedMap.from_pairs when no policy is passed
    duplicate_policy: DuplicatePolicy = "raise"

    # Run the O(n) consistency check after every mutation
    check_invariants: bool = False

    log_level: str = "INFO"

    @field_validator("duplicate_policy", mode="before")
    @classmethod
    def validate_duplicate_policy(cls, v: str) -> str:
        """Accept policy names case-insensitively."""
        lower = str(v).lower()
        if lower not in DUPLICATE_POLICIES:
            msg = f"Invalid duplicate policy: {v}. Must be one of {DUPLICATE_POLICIES}"
            raise ValueError(msg)
        return lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            msg = f"Invalid log level: {v}. Must be one of {valid_levels}"
            raise ValueError(msg)
        return upper


@lru_cache
def get_settings() -> OrdmapSettings:
    """Get the global settings.

    Settings are cached after first load.

    Returns:
        OrdmapSettings instance.
    """
    return OrdmapSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (for testing)."""
    get_settings.cache_clear()
