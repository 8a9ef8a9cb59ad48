"""
Configuration module for specmeta.
"""
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv

DEFAULT_CONFIG_FILE = '.specmeta.yml'
DEPRECATION_MODES = ('warn', 'log', 'silent')

_DEFAULTS: Dict[str, Any] = {
    'deprecations': 'warn',
    'log_level': 'WARNING',
    'log_file': None,
    'framework_patterns': [],
}

_ENV_KEYS = {
    'deprecations': 'SPECMETA_DEPRECATIONS',
    'log_level': 'SPECMETA_LOG_LEVEL',
    'log_file': 'SPECMETA_LOG_FILE',
}


class Config:
    """Configuration manager for specmeta.

    Values are layered: built-in defaults, then the YAML config file, then
    environment variables (a `.env` file is loaded first when present).
    """
    _instance = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, env_file: Optional[str] = None):
        if not hasattr(self, 'initialized'):
            self.env_file = env_file or '.env'
            self._config = dict(_DEFAULTS)
            self._load_env()
            self._load_file()
            self._apply_env()
            self.initialized = True

    def _load_env(self) -> None:
        """Load environment variables from the nearest .env file."""
        if os.path.exists(self.env_file):
            load_dotenv(self.env_file)
            return

        current_dir = Path.cwd()
        while current_dir != current_dir.parent:
            potential_path = current_dir / self.env_file
            if potential_path.exists():
                load_dotenv(potential_path)
                return
            current_dir = current_dir.parent

    def _load_file(self) -> None:
        """Merge settings from the YAML config file, if one exists."""
        path = Path(os.getenv('SPECMETA_CONFIG', DEFAULT_CONFIG_FILE))
        if not path.is_file():
            return

        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Invalid config file {path}: expected a mapping")

        for key in _DEFAULTS:
            if key in data:
                self._config[key] = data[key]

    def _apply_env(self) -> None:
        for key, env_var in _ENV_KEYS.items():
            value = os.getenv(env_var)
            if value:
                self._config[key] = value

        mode = str(self._config['deprecations']).lower()
        if mode not in DEPRECATION_MODES:
            raise ValueError(
                f"Invalid deprecation mode: {mode}. "
                f"Must be one of {list(DEPRECATION_MODES)}"
            )
        self._config['deprecations'] = mode

    @property
    def framework_patterns(self) -> List[str]:
        """Extra regexes identifying stack frames that belong to the framework."""
        return list(self._config.get('framework_patterns') or [])

    @property
    def deprecations(self) -> str:
        return self._config['deprecations']

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: The configuration key to get
            default: Default value if key is not found

        Returns:
            The configuration value or default
        """
        return self._config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            key: The configuration key to set
            value: The value to set
        """
        self._config[key] = value

    def update(self, config_dict: Dict[str, Any]) -> None:
        """
        Update configuration with a dictionary of values.

        Args:
            config_dict: Dictionary of configuration values
        """
        self._config.update(config_dict)


def get_config(env_file: Optional[str] = None) -> Config:
    """
    Get the singleton Config instance.

    Args:
        env_file: Optional path to .env file

    Returns:
        Config: The singleton configuration instance
    """
    return Config(env_file)


def reset_config() -> None:
    """Drop the singleton so the next get_config() reloads settings."""
    Config._instance = None
