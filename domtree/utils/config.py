"""
Configuration utility for the DOM tree builder.
"""

import copy
import logging
import os
import json
from typing import Dict, Any, Optional
import threading

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "document": {
        "doctype": "html",
        "encoding": "utf-8",
        "version": "1.0"
    },
    "logging": {
        "console_level": "WARNING",
        "file_level": "DEBUG",
        "log_file": None
    }
}


class Config:
    """Configuration manager backed by an optional JSON file."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the config file; defaults are used when
                omitted or when the file does not exist
        """
        self.config_path = config_path
        self.config: Dict[str, Any] = {}
        self._lock = threading.Lock()

        self.load()

        logger.debug(f"Configuration initialized (config_path: {config_path})")

    def load(self) -> None:
        """Load configuration from file."""
        if self.config_path and os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    loaded = json.load(f)
            except (OSError, ValueError) as e:
                logger.error(f"Error loading configuration: {e}")
                self._set_defaults()
                return

            self._set_defaults()
            with self._lock:
                self._merge(self.config, loaded)
            logger.debug(f"Configuration loaded from {self.config_path}")
        else:
            logger.debug(f"Configuration file not found at {self.config_path}, using defaults")
            self._set_defaults()

    def save(self) -> None:
        """
        Save configuration to file.

        Raises:
            ValueError: If the configuration has no file path
        """
        if not self.config_path:
            raise ValueError("No configuration path set")

        with self._lock:
            config_copy = copy.deepcopy(self.config)

        config_dir = os.path.dirname(self.config_path)
        if config_dir:
            os.makedirs(config_dir, exist_ok=True)

        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(config_copy, f, indent=4)

        logger.debug(f"Configuration saved to {self.config_path}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Configuration key (can be nested using dots, e.g. 'document.doctype')
            default: Default value if key doesn't exist

        Returns:
            Any: Configuration value or default
        """
        with self._lock:
            config = self.config
            parts = key.split('.')

            for part in parts[:-1]:
                if part not in config or not isinstance(config[part], dict):
                    return default
                config = config[part]

            return config.get(parts[-1], default)

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            key: Configuration key (can be nested using dots, e.g. 'document.doctype')
            value: Configuration value
        """
        with self._lock:
            config = self.config
            parts = key.split('.')

            for part in parts[:-1]:
                if not isinstance(config.get(part), dict):
                    config[part] = {}
                config = config[part]

            config[parts[-1]] = value

    def remove(self, key: str) -> bool:
        """
        Remove a configuration value.

        Args:
            key: Configuration key

        Returns:
            bool: True if key was removed
        """
        with self._lock:
            config = self.config
            parts = key.split('.')

            for part in parts[:-1]:
                if part not in config or not isinstance(config[part], dict):
                    return False
                config = config[part]

            if parts[-1] in config:
                del config[parts[-1]]
                return True
            return False

    def get_all(self) -> Dict[str, Any]:
        """
        Get all configuration values.

        Returns:
            Dict[str, Any]: Copy of all configuration values
        """
        with self._lock:
            return copy.deepcopy(self.config)

    def _merge(self, target: Dict[str, Any], source: Dict[str, Any]) -> None:
        for key, value in source.items():
            if isinstance(value, dict) and isinstance(target.get(key), dict):
                self._merge(target[key], value)
            else:
                target[key] = value

    def _set_defaults(self) -> None:
        """Set default configuration values."""
        with self._lock:
            self.config = copy.deepcopy(DEFAULT_CONFIG)

        logger.debug("Default configuration set")
