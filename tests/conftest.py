"""Pytest configuration and shared fixtures."""

import pytest
from typing import List

from phasebot.state.machine import StateMachine
from phasebot.state.models import default_state, state, timed_state
from phasebot.utils.time import ManualClock


@pytest.fixture
def clock() -> ManualClock:
    """Manual clock starting at zero."""
    return ManualClock()


class RecordingMachine(StateMachine):
    """Machine that records every dispatch as (state, state_tm, initial_call)."""

    def __init__(self, states, clock, **kwargs):
        self.calls: List[tuple] = []
        bodies = {spec.name: self._recorder(spec.name) for spec in states}
        super().__init__(states=states, bodies=bodies, clock=clock, **kwargs)

    def _recorder(self, name):
        def body(state_tm, initial_call):
            self.calls.append((name, state_tm, initial_call))
        return body

    @property
    def visited(self) -> List[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def make_machine(clock):
    """Factory for recording machines sharing the manual clock."""
    def factory(states, **kwargs):
        return RecordingMachine(states, clock, **kwargs)
    return factory


@pytest.fixture
def chain_states():
    """A timed state chaining into a plain state."""
    return [
        timed_state("a", duration=1.0, next_state="b", first=True),
        state("b"),
    ]


@pytest.fixture
def default_states():
    """A first state plus a default fallback."""
    return [
        state("work", first=True),
        default_state("idle"),
    ]
