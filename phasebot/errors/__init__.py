"""
Error classification for state machine construction and execution.

Configuration errors are raised while a state table is validated and are
fatal to construction. Runtime errors are raised by explicit transitions that
reference states the machine does not know about.
"""

from .configuration import (
    StateMachineConfigError,
    InvalidDurationError,
    NoFirstStateError,
    MultipleFirstStatesError,
    MultipleDefaultStatesError,
    DuplicateStateError,
    InvalidStateSpecError,
    InvalidTransitionError,
    MissingStateBodyError,
    DuplicateModeError,
)
from .runtime import (
    StateMachineRuntimeError,
    UnknownStateError,
)

__all__ = [
    # Configuration Errors
    "StateMachineConfigError",
    "InvalidDurationError",
    "NoFirstStateError",
    "MultipleFirstStatesError",
    "MultipleDefaultStatesError",
    "DuplicateStateError",
    "InvalidStateSpecError",
    "InvalidTransitionError",
    "MissingStateBodyError",
    "DuplicateModeError",
    # Runtime Errors
    "StateMachineRuntimeError",
    "UnknownStateError",
]
