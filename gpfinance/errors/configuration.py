"""
Configuration error classifications.

Raised before a run starts. None of these are recovered from: a run is
never started with a partially parsed configuration.
"""

from typing import Optional, Dict, Any


class ConfigurationError(Exception):
    """Base class for run configuration problems."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class OptionParseError(ConfigurationError):
    """An option value could not be parsed into the expected type."""

    def __init__(self, message: str, option: Optional[str] = None,
                 raw_value: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.option = option
        self.raw_value = raw_value


class InvalidConfigurationError(ConfigurationError):
    """Parsed configuration failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
