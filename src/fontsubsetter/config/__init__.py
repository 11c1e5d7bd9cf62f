"""Configuration management for fontsubsetter.

This module provides configuration management using Pydantic models.
Settings are built once at startup, from CLI arguments or defaults, and
are immutable afterwards.

Key classes:
- PathsConfig: Source, target and character file locations
- SubsetConfig: Engine and batch execution settings
- LoggingConfig: Logging settings
- SubsetterSettings: Main application settings
"""

from fontsubsetter.config.settings import (
    LoggingConfig,
    PathsConfig,
    SubsetConfig,
    SubsetterSettings,
    get_default_settings,
)

__all__ = [
    "LoggingConfig",
    "PathsConfig",
    "SubsetConfig",
    "SubsetterSettings",
    "get_default_settings",
]
