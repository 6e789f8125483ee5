"""
Configuration management for the Rumble flavour matcher.

Loads YAML configuration files with environment variable interpolation.
A `.env` file at the project root is read first so its values are
available to `${VAR}` references.
"""

import copy
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from rumble.utils.errors import ConfigurationError


PROJECT_ROOT = Path(__file__).parent.parent.parent


class ConfigManager:
    """
    Manages application configuration loaded from YAML files.

    Supports ${VAR_NAME} interpolation, dot-notation access and a
    simple type schema for validation.
    """

    def __init__(self, config_dict: Optional[Dict[str, Any]] = None):
        self._config: Dict[str, Any] = config_dict or {}
        self._env_pattern = re.compile(r'\$\{([^}]+)\}')

    @classmethod
    def from_file(cls, file_path: Path) -> "ConfigManager":
        """
        Create ConfigManager from YAML file.

        Args:
            file_path: Path to YAML configuration file

        Returns:
            ConfigManager: Initialized with file contents

        Raises:
            ConfigurationError: If file cannot be loaded or parsed
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {file_path}",
                config_key=str(file_path)
            )

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                config_dict = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Failed to parse YAML configuration: {e}",
                config_key=str(file_path)
            ) from e

        if not isinstance(config_dict, dict):
            raise ConfigurationError(
                f"Configuration root must be a mapping: {file_path}",
                config_key=str(file_path)
            )

        manager = cls(config_dict)
        manager._config = manager._interpolate(manager._config)
        return manager

    def _interpolate(self, value: Any) -> Any:
        """Recursively replace ${ENV_VAR} in every string value."""
        if isinstance(value, dict):
            return {key: self._interpolate(item) for key, item in value.items()}
        if isinstance(value, list):
            return [self._interpolate(item) for item in value]
        if isinstance(value, str):
            return self._interpolate_string(value)
        return value

    def _interpolate_string(self, s: str) -> str:
        def replace(match: re.Match) -> str:
            value = os.environ.get(match.group(1))
            if value is None:
                return match.group(0)  # Keep original if not found
            return value

        return self._env_pattern.sub(replace, s)

    def get(self, key: str, default: Any = None, required: bool = False) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Configuration key, e.g. "upload.max_file_size"
            default: Value returned when the key is missing
            required: Raise instead of returning the default

        Raises:
            ConfigurationError: If a required key is not found
        """
        value: Any = self._config

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                if required:
                    raise ConfigurationError(
                        f"Required configuration key not found: {key}",
                        config_key=key
                    )
                return default

        return value

    def get_section(self, key: str) -> Dict[str, Any]:
        """Return a configuration section, or an empty dict."""
        value = self.get(key, default={})
        if not isinstance(value, dict):
            return {}
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value using dot notation."""
        keys = key.split('.')
        current = self._config

        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                current[k] = {}
            current = current[k]

        current[keys[-1]] = value

    def to_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary."""
        return copy.deepcopy(self._config)

    def validate(self, schema: Dict[str, Dict[str, Any]]) -> None:
        """
        Validate configuration against a schema.

        Schema format:
            {
                "upload.max_file_size": {"type": int, "required": True, "min": 1},
                "waveform.points": {"type": int, "min": 1},
            }

        Raises:
            ConfigurationError: If validation fails
        """
        for key, rules in schema.items():
            value = self.get(key)
            expected_type = rules.get("type")

            if value is None:
                if rules.get("required", False):
                    raise ConfigurationError(
                        f"Required configuration missing: {key}",
                        config_key=key
                    )
                continue

            if expected_type and not isinstance(value, expected_type):
                expected_name = getattr(expected_type, "__name__", str(expected_type))
                raise ConfigurationError(
                    f"Invalid type for {key}: expected {expected_name}, "
                    f"got {type(value).__name__}",
                    config_key=key
                )

            minimum = rules.get("min")
            if minimum is not None and value < minimum:
                raise ConfigurationError(
                    f"Invalid value for {key}: must be >= {minimum}, got {value}",
                    config_key=key
                )


CONFIG_SCHEMA: Dict[str, Dict[str, Any]] = {
    "upload.max_file_size": {"type": int, "required": True, "min": 1},
    "upload.target_sample_rate": {"type": int, "min": 1},
    "waveform.points": {"type": int, "required": True, "min": 1},
    "performance.max_workers": {"type": int, "min": 1},
    "logging.level": {"type": str},
    "flavours": {"type": list},
}


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from file, falling back to defaults.

    Values from the file are merged over `get_default_config()` so a
    partial file only needs the keys it changes.

    Args:
        config_path: Optional path to config file. If None, tries
                     "config/config.yaml" then "config.yaml".

    Returns:
        Dict[str, Any]: Configuration dictionary

    Raises:
        ConfigurationError: If an explicit path is missing or invalid
    """
    env_path = PROJECT_ROOT / '.env'
    if env_path.exists():
        load_dotenv(env_path)

    if config_path is None:
        for path in (Path("config/config.yaml"), Path("config.yaml")):
            if path.exists():
                config_path = str(path)
                break

    config = get_default_config()
    if config_path is None:
        return config

    manager = ConfigManager.from_file(Path(config_path))
    merged = ConfigManager(_merge(config, manager.to_dict()))
    merged.validate(CONFIG_SCHEMA)
    return merged.to_dict()


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge(result[key], value)
        else:
            result[key] = value
    return result


def get_default_config() -> Dict[str, Any]:
    """Return default configuration values."""
    return {
        "upload": {
            "max_file_size": 52428800,  # 50MB
            "target_sample_rate": None,  # keep the decoded rate
        },
        "waveform": {
            "points": 100,
        },
        "performance": {
            "max_workers": 4,
        },
        "logging": {
            "level": "INFO",
            "format": "text",
        },
        "flavours": None,
    }
