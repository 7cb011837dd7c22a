"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when tunnel or notification settings cannot be used as given."""


class MissingConfigurationError(ConfigurationError):
    """Raised when a required environment variable is unset or blank."""
