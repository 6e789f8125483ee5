"""
Custom exceptions for the Rumble flavour matcher.

This module defines a hierarchy of exceptions for handling the
error conditions raised by the analysis core, the audio loader and
the session state machine.
"""

from typing import Optional, Any


class RumbleError(Exception):
    """Base exception for all rumble analysis errors."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class InvalidInputError(RumbleError):
    """Raised when samples, sample rate or coordinates are out of contract."""

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        value: Optional[Any] = None,
    ):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        if field_name is not None:
            self.details = {"field": field_name, "value": value}


class EmptyCatalogError(RumbleError):
    """Raised when the classifier is given no flavour zones."""

    def __init__(self, message: str = "Flavour catalog is empty"):
        super().__init__(message)


class AudioLoadError(RumbleError):
    """Raised when an uploaded audio file cannot be decoded."""

    def __init__(self, message: str, file_path: Optional[str] = None):
        super().__init__(message, details={"file_path": file_path})
        self.file_path = file_path


class UnsupportedFormatError(AudioLoadError):
    """Raised when the upload does not declare an audio media type."""

    def __init__(self, message: str, media_type: Optional[str] = None):
        super().__init__(message)
        self.media_type = media_type
        self.details = {"media_type": media_type}


class FileTooLargeError(AudioLoadError):
    """Raised when the upload exceeds the size limit."""

    def __init__(
        self,
        message: str,
        file_size: Optional[int] = None,
        max_size: Optional[int] = None,
    ):
        super().__init__(message)
        self.file_size = file_size
        self.max_size = max_size
        self.details = {"file_size": file_size, "max_size": max_size}


class ConfigurationError(RumbleError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message)
        self.config_key = config_key
        self.details = {"config_key": config_key}


class InvalidTransitionError(RumbleError):
    """Raised when the session is asked to move between unconnected states."""

    def __init__(self, current: str, target: str):
        super().__init__(
            f"Cannot move from '{current}' to '{target}'.",
            details={"current": current, "target": target},
        )
        self.current = current
        self.target = target
