"""
Error handling tests for state machine construction and execution.

Configuration errors must be fatal at construction time; runtime errors must
propagate to whoever requested the transition.
"""

import pytest

from phasebot.errors import (
    DuplicateModeError,
    DuplicateStateError,
    InvalidDurationError,
    InvalidStateSpecError,
    InvalidTransitionError,
    MissingStateBodyError,
    MultipleDefaultStatesError,
    MultipleFirstStatesError,
    NoFirstStateError,
    StateMachineConfigError,
    StateMachineRuntimeError,
    UnknownStateError,
)
from phasebot.state.machine import StateMachine
from phasebot.state.models import default_state, state, timed_state


class TestErrorClassification:
    """Test error classification system."""

    @pytest.mark.parametrize("error_type", [
        InvalidDurationError,
        NoFirstStateError,
        MultipleFirstStatesError,
        MultipleDefaultStatesError,
        DuplicateStateError,
        InvalidStateSpecError,
        InvalidTransitionError,
        MissingStateBodyError,
        DuplicateModeError,
    ])
    def test_configuration_error_hierarchy(self, error_type):
        error = error_type("bad table")
        assert isinstance(error, StateMachineConfigError)
        assert not isinstance(error, StateMachineRuntimeError)
        assert error.recoverable is False
        assert error.context == {}

    def test_runtime_error_hierarchy(self):
        error = UnknownStateError("no such state", state_name="x", current_state="a")
        assert isinstance(error, StateMachineRuntimeError)
        assert not isinstance(error, StateMachineConfigError)
        assert error.recoverable is False
        assert error.state_name == "x"
        assert error.current_state == "a"

    def test_error_details(self):
        duration_error = InvalidDurationError("bad", state_name="t", duration=-1.0)
        assert duration_error.state_name == "t"
        assert duration_error.duration == -1.0

        first_error = MultipleFirstStatesError("bad", states=["a", "b"])
        assert first_error.states == ["a", "b"]

        transition_error = InvalidTransitionError("bad", state_name="a", next_state="z")
        assert transition_error.next_state == "z"

        context_error = DuplicateModeError("bad", mode_name="auto", context={"source": "test"})
        assert context_error.mode_name == "auto"
        assert context_error.context == {"source": "test"}


class TestConstructionFailures:
    """Test that invalid tables never produce a machine."""

    @pytest.mark.parametrize("states, error_type", [
        ([state("a")], NoFirstStateError),
        ([state("a", first=True), state("b", first=True)], MultipleFirstStatesError),
        ([state("a", first=True), default_state("b"), default_state("c")], MultipleDefaultStatesError),
        ([timed_state("a", duration=0, first=True)], InvalidDurationError),
        ([timed_state("a", duration=1, next_state="z", first=True)], InvalidTransitionError),
    ])
    def test_machine_construction_fails(self, clock, states, error_type):
        bodies = {spec.name: lambda tm, init: None for spec in states}
        with pytest.raises(error_type):
            StateMachine(states=states, bodies=bodies, clock=clock)


class TestRuntimeFailures:
    """Test that runtime errors propagate without side effects being retried."""

    def test_next_state_unknown(self, make_machine):
        sm = make_machine([state("a", first=True)])
        with pytest.raises(UnknownStateError) as exc_info:
            sm.next_state("missing")
        assert exc_info.value.state_name == "missing"
        assert sm.current_state == ""

    def test_next_state_now_unknown_does_not_execute(self, make_machine):
        sm = make_machine([state("a", first=True)])
        sm.engage()
        with pytest.raises(UnknownStateError):
            sm.next_state_now("missing")
        assert sm.calls == []
        assert sm.current_state == "a"

    def test_state_runtime_unknown(self, make_machine):
        sm = make_machine([state("a", first=True)])
        with pytest.raises(UnknownStateError):
            sm.state_runtime("missing")

    def test_body_exception_propagates(self, clock):
        def explode(state_tm, initial_call):
            raise RuntimeError("actuator fault")

        sm = StateMachine(states=[state("a", first=True)], bodies={"a": explode}, clock=clock)
        sm.engage()
        with pytest.raises(RuntimeError, match="actuator fault"):
            sm.execute()
