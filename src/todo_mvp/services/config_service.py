"""Configuration service for todo-mvp.

Loads and saves ``config.json`` in the user config directory and exposes
dot-separated key access (``remote.endpoint``, ``local.db_path``...).
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir
from pydantic import BaseModel, ValidationError

from todo_mvp.models import AppConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self, config_dir: str | Path | None = None):
        """Initialize the config service.

        Args:
            config_dir: Directory holding config.json (default: user config dir)
        """
        self.config_dir = Path(config_dir or user_config_dir("todo_mvp"))
        self.config_path = self.config_dir / "config.json"
        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from file, falling back to defaults."""
        if not self.config_path.exists():
            return AppConfig()
        try:
            return AppConfig.model_validate_json(
                self.config_path.read_text(encoding="utf-8")
            )
        except (ValidationError, ValueError) as e:
            logger.warning("ignoring invalid config %s: %s", self.config_path, e)
            return AppConfig()

    def save_config(self) -> None:
        """Save the current configuration to file."""
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            self.config_path.write_text(
                self.config.model_dump_json(indent=4), encoding="utf-8"
            )
            self.config_path.chmod(0o600)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self.get_from_config(self.config, key)

    @staticmethod
    def get_from_config(config: AppConfig, key: str) -> Any:
        value: Any = config
        for k in key.split("."):
            if isinstance(value, BaseModel) and k in type(value).model_fields:
                value = getattr(value, k)
            else:
                return None
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not exist
            pydantic.ValidationError: If the value is invalid for the key
        """
        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                raise KeyError(key)
            current = current[k]
        if keys[-1] not in current:
            raise KeyError(key)

        current[keys[-1]] = value
        self._config = AppConfig(**config_dict)
        self.save_config()

    def reset(self, key: str | None = None) -> None:
        """Reset configuration, or a single key, to defaults."""
        if key is None:
            self._config = AppConfig()
            self.save_config()
            return
        self.set(key, self.get_from_config(AppConfig(), key))


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get the process-wide ConfigService instance."""
    return ConfigService()
