"""
Configuration management for ParkBridge.

This module handles loading and managing application settings from
YAML configuration files with defaults for every key.
"""
import copy
import logging
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

from core.base_provider import DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)


class Config:
    """
    Configuration manager for ParkBridge.

    Settings are read from YAML and merged over built-in defaults, so a
    partial file only needs the keys it changes. A missing or unreadable
    file falls back to the defaults.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to configuration file. If None, uses default locations.
        """
        self.config_path = self._find_config_file(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _find_config_file(self, config_path: Optional[str] = None) -> Path:
        """Find the configuration file to load."""
        if config_path:
            path = Path(config_path)
            if path.exists():
                return path
            else:
                logger.warning(f"Config file not found: {path}")

        search_paths = [
            Path.cwd() / 'config' / 'settings.yaml',
            Path.cwd() / 'settings.yaml',
            Path.home() / '.parkbridge' / 'settings.yaml',
        ]

        for path in search_paths:
            if path.exists():
                logger.info(f"Found config file: {path}")
                return path

        # An explicit path is kept so save() writes where the caller asked
        if config_path:
            return Path(config_path)

        default_path = Path.cwd() / 'config' / 'settings.yaml'
        logger.debug(f"Using default config path: {default_path}")
        return default_path

    def _load_config(self):
        """Load configuration from file."""
        if not self.config_path.exists():
            logger.debug(f"Config file not found: {self.config_path}. Using defaults.")
            self._config = self._get_default_config()
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                file_config = yaml.safe_load(f) or {}

            if not isinstance(file_config, dict):
                raise ValueError(f"expected a mapping at top level, got {type(file_config).__name__}")

            self._config = self._merge_configs(self._get_default_config(), file_config)
            logger.info(f"Loaded configuration from {self.config_path}")

        except (OSError, yaml.YAMLError, ValueError) as e:
            logger.error(f"Failed to load config file: {e}. Using defaults.")
            self._config = self._get_default_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values."""
        return {
            'network': {
                'timeout': 30,
                'user_agent': DEFAULT_USER_AGENT,
            },
            'output': {
                'results_limit': 24,
            },
            'logging': {
                'level': 'INFO',
                'file': str(Path.cwd() / 'logs' / 'parkbridge.log'),
            }
        }

    def _merge_configs(self, defaults: Dict[str, Any], user_config: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge user config with defaults."""
        result = copy.deepcopy(defaults)

        for key, value in user_config.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Configuration key (dot notation: 'network.timeout')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key.split('.')
        value = self._config

        try:
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any):
        """
        Set a configuration value.

        Args:
            key: Configuration key (dot notation: 'network.timeout')
            value: Value to set
        """
        keys = key.split('.')
        config = self._config

        for k in keys[:-1]:
            if k not in config or not isinstance(config[k], dict):
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def save(self):
        """Save current configuration to file."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self.config_path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(self._config, f, default_flow_style=False, indent=2)

            logger.info(f"Saved configuration to {self.config_path}")

        except Exception as e:
            logger.error(f"Failed to save configuration: {e}")
            raise

    # Convenience properties for commonly used settings
    @property
    def network_timeout(self) -> float:
        """Get network timeout in seconds."""
        return float(self.get('network.timeout', 30))

    @property
    def user_agent(self) -> str:
        """Get the User-Agent sent to MangaPark."""
        return self.get('network.user_agent', DEFAULT_USER_AGENT)

    @property
    def results_limit(self) -> int:
        """Get the maximum number of rows shown in CLI tables."""
        return int(self.get('output.results_limit', 24))

    @property
    def log_level(self) -> str:
        return str(self.get('logging.level', 'INFO')).upper()

    @property
    def log_file(self) -> Optional[Path]:
        """Get the log file path, or None when file logging is disabled."""
        value = self.get('logging.file')
        return Path(value) if value else None

    def __str__(self) -> str:
        """String representation of configuration."""
        return f"Config(path={self.config_path})"

    def __repr__(self) -> str:
        """Detailed string representation."""
        return f"Config(config_path='{self.config_path}', keys={list(self._config.keys())})"
