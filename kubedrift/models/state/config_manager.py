"""Configuration file loading for drift detection settings."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from kubedrift.models.state.app_settings import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
    DriftSettings,
)

logger = logging.getLogger(__name__)

__all__ = [
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "ConfigValidationError",
    "DriftSettings",
]


class ConfigManager:
    """Loads and validates the YAML settings file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def load(self) -> DriftSettings:
        """Load settings from disk.

        Raises:
            ConfigLoadError: If the file is missing or is not valid YAML.
            ConfigValidationError: If the content does not match the schema.
        """
        if not self.path.is_file():
            raise ConfigLoadError(f"Configuration file not found at path: {self.path}")

        try:
            with self.path.open(encoding="utf-8") as handle:
                raw = yaml.safe_load(handle)
        except OSError as exc:
            raise ConfigLoadError(f"Cannot read configuration file {self.path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigLoadError(f"Invalid YAML format: {exc}") from exc

        settings = self.parse(raw)
        logger.debug("Loaded configuration from %s", self.path)
        return settings

    @staticmethod
    def parse(raw: object) -> DriftSettings:
        """Validate an already-decoded YAML document."""
        if not isinstance(raw, dict):
            raise ConfigValidationError("Configuration root must be a mapping")
        try:
            return DriftSettings.model_validate(raw)
        except ValidationError as exc:
            raise ConfigValidationError(f"Error parsing configuration: {exc}") from exc
