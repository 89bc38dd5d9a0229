"""
Configuration error classifications for state table validation.

These exceptions are raised only while a machine is being constructed. A
machine that builds successfully never raises them afterwards.
"""

from typing import Any, Dict, List, Optional


class StateMachineConfigError(Exception):
    """Base class for fatal construction-time errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class InvalidDurationError(StateMachineConfigError):
    """A timed state is missing a strictly positive duration."""

    def __init__(self, message: str, state_name: Optional[str] = None,
                 duration: Optional[float] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.state_name = state_name
        self.duration = duration


class NoFirstStateError(StateMachineConfigError):
    """No state in the table is marked as the first state."""


class MultipleFirstStatesError(StateMachineConfigError):
    """More than one state is marked as the first state."""

    def __init__(self, message: str, states: Optional[List[str]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.states = states or []


class MultipleDefaultStatesError(StateMachineConfigError):
    """More than one state is declared as the default state."""

    def __init__(self, message: str, states: Optional[List[str]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.states = states or []


class DuplicateStateError(StateMachineConfigError):
    """Two states share the same name."""

    def __init__(self, message: str, state_name: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.state_name = state_name


class InvalidStateSpecError(StateMachineConfigError):
    """A state carries a field that does not apply to its kind."""

    def __init__(self, message: str, state_name: Optional[str] = None,
                 field: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.state_name = state_name
        self.field = field


class InvalidTransitionError(StateMachineConfigError):
    """A timed state chains to a state that is not in the table."""

    def __init__(self, message: str, state_name: Optional[str] = None,
                 next_state: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.state_name = state_name
        self.next_state = next_state


class MissingStateBodyError(StateMachineConfigError):
    """No callable could be bound to a declared state."""

    def __init__(self, message: str, state_name: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.state_name = state_name


class DuplicateModeError(StateMachineConfigError):
    """An autonomous mode name was registered twice."""

    def __init__(self, message: str, mode_name: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.mode_name = mode_name
