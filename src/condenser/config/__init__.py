"""Application configuration helpers."""

from __future__ import annotations

from .condensation import (
    DEFAULT_CHANNEL_CAPACITY,
    DEFAULT_LANGUAGE,
    CachingConfig,
    CondensationConfig,
    get_caching_config,
    get_condensation_config,
)
from .env import require_env_vars
from .errors import ConfigCheckError, ConfigurationError, MissingConfigurationError
from .logging import configure_logging

__all__ = [
    "DEFAULT_CHANNEL_CAPACITY",
    "DEFAULT_LANGUAGE",
    "CachingConfig",
    "CondensationConfig",
    "ConfigCheckError",
    "ConfigurationError",
    "MissingConfigurationError",
    "configure_logging",
    "get_caching_config",
    "get_condensation_config",
    "require_env_vars",
]
