"""Configuration error definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class ConfigurationError(RuntimeError):
    """Raised when configuration values are invalid."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required configuration values are absent or blank."""


class ConfigCheckError(ConfigurationError):
    """Raised when a configured path does not satisfy the run's expectations."""

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(f"{message}: '{path}'")
        self.path = path
