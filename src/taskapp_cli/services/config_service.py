"""Configuration service for managing taskapp configuration.

The ConfigService is the single source of truth for configuration:

- Loading and saving config.json
- Dot-separated key access (get/set/reset)
- Building the storage strategy for the configured backend
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, ValidationError

from taskapp_cli.models.config_models import AppConfig
from taskapp_cli.models.storage_strategy import (
    MemoryStorageStrategy,
    SqliteStorageStrategy,
    StorageStrategyContext,
)


class ConfigService:
    """Service for loading, saving and querying the application configuration."""

    def __init__(self):
        self.config_dir = Path(user_config_dir("taskapp_cli"))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir("taskapp_cli"))

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None
        self._storage_strategy_context: StorageStrategyContext | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def storage_strategy_context(self) -> StorageStrategyContext:
        """Storage collaborators for the configured backend, built on first use."""
        if self._storage_strategy_context is None:
            storage = self.config.storage
            if storage.backend == "memory":
                strategy = MemoryStorageStrategy()
            else:
                strategy = SqliteStorageStrategy(db_path=self.db_path)
            self._storage_strategy_context = StorageStrategyContext(strategy)
        return self._storage_strategy_context

    @property
    def db_path(self) -> str:
        return self.config.storage.db_path or str(self.data_dir / "taskapp.db")

    def load_config(self) -> AppConfig:
        """Load configuration from disk, creating the default file on first run.

        Raises:
            RuntimeError: If the config file exists but is not valid
        """
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # Expected on first run
            self._config = AppConfig()
            self.save_config()
        except (ValidationError, OSError) as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to disk."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))
            self.config_path.chmod(0o600)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key (None if unknown)."""
        return self.get_from_config(self.config, key)

    @staticmethod
    def get_from_config(config: AppConfig, key: str) -> Any:
        value: Any = config
        for k in key.split("."):
            if not isinstance(value, BaseModel) or k not in type(value).model_fields:
                return None
            value = getattr(value, k)
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not name a configuration setting
            ValueError: If the value does not validate
        """
        if not self.has_key(key):
            raise KeyError(key)

        config_dict = self.config.model_dump()
        keys = key.split(".")
        current = config_dict
        for k in keys[:-1]:
            current = current[k]
        current[keys[-1]] = value

        try:
            self._config = AppConfig(**config_dict)
        except ValidationError as e:
            raise ValueError(f"Invalid value for '{key}': {e}") from e
        self._storage_strategy_context = None
        self.save_config()

    def has_key(self, key: str) -> bool:
        parent_key, _, leaf = key.rpartition(".")
        parent = self.get(parent_key) if parent_key else self.config
        return isinstance(parent, BaseModel) and leaf in type(parent).model_fields

    def reset(self, key: str | None = None) -> None:
        """Reset the whole configuration, or a single key, to defaults."""
        if key is None:
            self._config = AppConfig()
            self._storage_strategy_context = None
            self.save_config()
            return

        if not self.has_key(key):
            raise KeyError(key)
        self.set(key, self.get_from_config(AppConfig(), key))


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service


def get_storage_strategy_context() -> StorageStrategyContext:
    """Get the StorageStrategyContext for the current configuration."""
    return get_config_service().storage_strategy_context
