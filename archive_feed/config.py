"""
Configuration handling for the archive feed server
"""
import copy
import os
import yaml
from typing import Dict, Any, Optional


class Config:
    """Application configuration: defaults, YAML file, then CLI arguments"""

    DEFAULT_CONFIG = {
        'listen': ':8080',
        'metadata_url': 'https://archive.org/metadata/',
        'item_url': 'https://archive.org/details/',
        'request_timeout': 30,
        'user_agent': 'archive-podcast-feed/0.1.0',
        'verify_tls': True,
        'log_level': 'INFO',
        'cache': {
            'enabled': True,
            'ttl_hours': 32,
        },
    }

    # Sections merged key by key instead of being replaced wholesale
    NESTED_SECTIONS = ('cache',)

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize the configuration

        Args:
            config_file: Path to a YAML configuration file (optional)
        """
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)

        if config_file and os.path.exists(config_file):
            self.load_from_file(config_file)

    def load_from_file(self, config_file: str) -> None:
        """
        Load configuration values from a YAML file

        Args:
            config_file: Path to the configuration file
        """
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                file_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise Exception(f"Error loading configuration file {config_file}: {e}") from e

        if not file_config:
            return
        if not isinstance(file_config, dict):
            raise Exception(f"Error loading configuration file {config_file}: top level is not a mapping")

        for key, value in file_config.items():
            if key in self.NESTED_SECTIONS and isinstance(value, dict):
                if not isinstance(self.config.get(key), dict):
                    self.config[key] = {}
                self._deep_merge(self.config[key], value)
            else:
                self.config[key] = value

    def _deep_merge(self, base: dict, update: dict) -> None:
        """
        Recursively merge nested dictionaries

        Args:
            base: Dictionary updated in place
            update: Dictionary with the new values
        """
        for key, value in update.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def update_from_args(self, args: Dict[str, Any]) -> None:
        """
        Update the configuration with CLI arguments
        CLI arguments take precedence over the configuration file

        Args:
            args: Dictionary of CLI arguments
        """
        for key, value in args.items():
            if value is not None:
                self.config[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value

        Args:
            key: Configuration key
            default: Value returned when the key is missing

        Returns:
            The configuration value
        """
        return self.config.get(key, default)

    def get_all(self) -> Dict[str, Any]:
        """
        Get the whole configuration

        Returns:
            Dictionary with every configuration value
        """
        return self.config.copy()

    @property
    def cache_ttl_seconds(self) -> float:
        """Page cache lifetime in seconds"""
        section = self.get('cache') or {}
        return float(section.get('ttl_hours', 32)) * 3600

    @property
    def cache_enabled(self) -> bool:
        """Whether rendered feeds are cached"""
        section = self.get('cache') or {}
        return bool(section.get('enabled', True))
