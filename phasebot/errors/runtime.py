"""
Runtime error classifications for state machine execution.

A bad transition target is a programming defect, so these errors propagate to
whoever requested the transition and are never retried.
"""

from typing import Any, Dict, Optional


class StateMachineRuntimeError(Exception):
    """Base class for errors raised while a machine is running."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class UnknownStateError(StateMachineRuntimeError):
    """A transition referenced a state name absent from the registry."""

    def __init__(self, message: str, state_name: Optional[str] = None,
                 current_state: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.state_name = state_name
        self.current_state = current_state
