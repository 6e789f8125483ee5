"""
Utility modules for configuration, logging, and error handling.
"""

from rumble.utils.errors import (
    RumbleError,
    InvalidInputError,
    EmptyCatalogError,
    AudioLoadError,
    UnsupportedFormatError,
    FileTooLargeError,
    ConfigurationError,
    InvalidTransitionError,
)
from rumble.utils.logging import get_logger, setup_logging, JSONFormatter
from rumble.utils.config import ConfigManager, load_config

__all__ = [
    "RumbleError",
    "InvalidInputError",
    "EmptyCatalogError",
    "AudioLoadError",
    "UnsupportedFormatError",
    "FileTooLargeError",
    "ConfigurationError",
    "InvalidTransitionError",
    "get_logger",
    "setup_logging",
    "JSONFormatter",
    "ConfigManager",
    "load_config",
]
