"""
System failure error classifications for unrecoverable errors.

These exceptions abort a run. They signal either a broken strategy
contract or misuse of the orchestrator lifecycle.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for unrecoverable run failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class StrategyContractError(SystemFailureError):
    """A strategy returned a population that breaks its contract."""

    def __init__(self, message: str, strategy_name: Optional[str] = None,
                 expected_size: Optional[int] = None,
                 actual_size: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.strategy_name = strategy_name
        self.expected_size = expected_size
        self.actual_size = actual_size


class StateTransitionError(SystemFailureError):
    """Invalid run lifecycle transition."""

    def __init__(self, message: str, current_state: Optional[str] = None,
                 attempted_transition: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.current_state = current_state
        self.attempted_transition = attempted_transition


class MeasurementError(SystemFailureError):
    """Fitness measurement of an individual failed."""

    def __init__(self, message: str, generation: Optional[int] = None,
                 security: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.generation = generation
        self.security = security
