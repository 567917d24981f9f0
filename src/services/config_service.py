"""
Configuration Service Module

Manages application configuration read/write.
"""

from typing import Any, Dict, Optional
from pathlib import Path
import copy
import os
import sys
import yaml
import threading
import logging

logger = logging.getLogger(__name__)


APP_DIR_NAME = "equalizer-enhancer"


class ConfigService:
    """
    Configuration Service - Singleton Pattern

    Manages application configuration, supporting reading and saving from YAML files.

    Usage Example:
        config = ConfigService("isolated.yaml")

        # Get configuration
        bands = config.get("equalizer.default_bands")

        # Set configuration
        config.set("equalizer.plist_format", "xml")
        config.save()
    """

    _instance: Optional['ConfigService'] = None
    _lock = threading.Lock()

    def __new__(cls, config_path: str = None) -> 'ConfigService':
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: str = None):
        if self._initialized:
            return

        # Custom path (tests/isolation) or the per-user config file
        self._config_path = Path(config_path) if config_path else self._get_user_config_path()

        self._config: Dict[str, Any] = {}
        self._lock = threading.Lock()
        self._initialized = True

        self._load()

    @staticmethod
    def _get_user_config_path() -> Path:
        """Get user configuration file path (platform-specific)"""
        if sys.platform == "win32":
            base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        elif sys.platform == "darwin":
            base = Path.home() / "Library" / "Application Support"
        else:
            base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
        return base / APP_DIR_NAME / "config.yaml"

    @staticmethod
    def get_data_dir() -> Path:
        """Get user data directory holding presets and settings (platform-specific)"""
        if sys.platform == "win32":
            base = Path(os.environ.get("LOCALAPPDATA", Path.home() / "AppData" / "Local"))
        elif sys.platform == "darwin":
            base = Path.home() / "Library" / "Application Support"
        else:
            base = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))
        return base / APP_DIR_NAME

    @property
    def config_path(self) -> Path:
        return self._config_path

    def _load(self) -> None:
        """Load built-in defaults, then merge the configuration file over them"""
        self._config = self._get_default_config()

        if self._config_path.exists():
            try:
                with open(self._config_path, 'r', encoding='utf-8') as f:
                    user_config = yaml.safe_load(f) or {}
                    self._deep_merge(self._config, user_config)
            except (OSError, yaml.YAMLError) as e:
                logger.warning("Failed to load configuration: %s", e)

    def _deep_merge(self, base: Dict, override: Dict) -> None:
        """Deep merge dictionaries, override overwrites base"""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration"""
        return {
            'app': {
                'name': 'Equalizer Enhancer',
                'version': '1.0.0',
            },
            'equalizer': {
                'presets_file': '',          # Empty: <data dir>/equalizer-presets.plist
                'settings_file': '',         # Empty: <data dir>/settings.yaml
                'bundled_presets_file': '',  # Empty: packaged default presets
                'plist_format': 'binary',    # binary | xml
                'default_bands': [60, 150, 400, 1000, 2400, 15000],
                'default_gain': 0.0,
            },
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Supports dot-separated nested keys, e.g., "equalizer.plist_format".

        Args:
            key: Configuration key
            default: Default value

        Returns:
            Configuration value or the default value.
        """
        with self._lock:
            keys = key.split('.')
            value = self._config

            try:
                for k in keys:
                    value = value[k]
                return value
            except (KeyError, TypeError):
                return default

    def get_path(self, key: str, default: Path) -> Path:
        """
        Get a path-valued setting; empty values fall back to the default.

        Args:
            key: Configuration key
            default: Path used when the setting is empty
        """
        value = self.get(key)
        if not value:
            return default
        return Path(str(value)).expanduser()

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            key: Configuration key (dot-separated)
            value: Configuration value
        """
        with self._lock:
            keys = key.split('.')
            config = self._config

            # Navigate to the parent node
            for k in keys[:-1]:
                if k not in config:
                    config[k] = {}
                config = config[k]

            # Set the value
            config[keys[-1]] = value

    def get_all(self) -> Dict[str, Any]:
        """Get all configurations."""
        with self._lock:
            return copy.deepcopy(self._config)

    def save(self) -> bool:
        """
        Save configuration to the configuration file.

        Returns:
            bool: True if saving was successful.
        """
        try:
            self._config_path.parent.mkdir(parents=True, exist_ok=True)

            with self._lock:
                with open(self._config_path, 'w', encoding='utf-8') as f:
                    yaml.safe_dump(self._config, f, allow_unicode=True, default_flow_style=False)
            logger.debug("Configuration saved to: %s", self._config_path)
            return True
        except (OSError, yaml.YAMLError) as e:
            logger.error("Failed to save configuration: %s", e)
            return False

    def reload(self) -> None:
        """Reload configuration from disk"""
        self._load()

    def reset(self) -> None:
        """Reset to default configuration."""
        with self._lock:
            self._config = self._get_default_config()

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance (for testing only)."""
        with cls._lock:
            cls._instance = None
