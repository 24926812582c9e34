"""
Error classification for the genetic programming engine.

This module provides the exception hierarchy for configuration problems
and for failures raised while a run is in progress.
"""

from .configuration import (
    ConfigurationError,
    OptionParseError,
    InvalidConfigurationError,
)
from .system_failures import (
    SystemFailureError,
    StrategyContractError,
    StateTransitionError,
    MeasurementError,
)

__all__ = [
    # Configuration Errors
    "ConfigurationError",
    "OptionParseError",
    "InvalidConfigurationError",
    # System Failures
    "SystemFailureError",
    "StrategyContractError",
    "StateTransitionError",
    "MeasurementError",
]
