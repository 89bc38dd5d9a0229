"""
Core timed state machine engine.

A ``StateMachine`` executes at most one state per tick. States are declared
in an explicit table (see :mod:`phasebot.state.models`) and their bodies are
plain callables taking ``(state_tm, initial_call)``:

- ``state_tm`` is the number of seconds the state has been active. It may not
  start at zero, because chained timed states are anchored to the moment the
  previous state expired rather than to the tick that noticed it.
- ``initial_call`` is True on the first dispatch after the state is entered,
  and again every time it is re-entered.

To keep a machine running, call :meth:`StateMachine.engage` on every
iteration of the control loop. If engagement stops, execution ceases on the
next tick unless the active state is marked ``must_finish``.

This object is not thread safe. Exactly one caller may drive it.
"""

from typing import ClassVar, Mapping, Optional, Sequence

from ..errors import MissingStateBodyError, UnknownStateError
from ..logging.config import get_state_logger, log_run_stopped, log_state_entry
from ..loop.components import Component
from ..utils.time import Clock, MonotonicClock, elapsed_since
from .models import StateBody, StateDescriptor, StateRuntime, StateSpec
from .registry import StateRegistry, build_registry


class StateMachine(Component):
    """
    Component that runs a table of timed states.

    Subclasses usually declare their table as the ``states`` class attribute
    and implement one method per state, named after it::

        class Intake(StateMachine):
            states = [
                state("idle", first=True),
                timed_state("spin_up", duration=0.5, next_state="feed"),
                state("feed"),
            ]

            def idle(self, state_tm, initial_call):
                ...

    The registry for a class-level table is validated once per class. Tables
    passed to the constructor are validated per instance.
    """

    states: ClassVar[Sequence[StateSpec]] = ()

    def __init__(
        self,
        states: Optional[Sequence[StateSpec]] = None,
        bodies: Optional[Mapping[str, StateBody]] = None,
        clock: Optional[Clock] = None,
        verbose: bool = False,
        name: Optional[str] = None
    ) -> None:
        """
        Build the registry and bind a body to every state.

        Args:
            states: State table; defaults to the class ``states`` attribute
            bodies: Explicit state bodies by name, taking precedence over methods
            clock: Time source sampled once per tick
            verbose: Log state entry and run stop events
            name: Machine name bound to log events; defaults to the class name

        Raises:
            StateMachineConfigError: If the table is invalid or a body is missing
        """
        if states is None:
            self._registry = self._class_registry()
        else:
            self._registry = build_registry(states)

        self.name = name or type(self).__name__
        self.clock: Clock = clock or MonotonicClock()
        self.verbose = verbose
        self.logger = get_state_logger(__name__, machine=self.name)

        self._bodies = self._bind_bodies(bodies or {})
        self._runtime = {descriptor.name: StateRuntime() for descriptor in self._registry}

        # the currently executing state, or None if not executing
        self._state: Optional[StateDescriptor] = None
        # an external party wants the machine to execute this tick
        self._should_engage = False
        # the machine is in the middle of a run
        self._engaged = False
        self._run_start = 0.0

    @classmethod
    def _class_registry(cls) -> StateRegistry:
        registry = cls.__dict__.get("_registry_cache")
        if registry is None:
            registry = build_registry(cls.states)
            cls._registry_cache = registry
        return registry

    def _bind_bodies(self, bodies: Mapping[str, StateBody]) -> dict[str, StateBody]:
        bound = {}
        for descriptor in self._registry:
            body = bodies.get(descriptor.name)
            # engine methods such as execute() or done() are never state bodies
            if body is None and not hasattr(StateMachine, descriptor.name):
                body = getattr(self, descriptor.name, None)
            if not callable(body):
                raise MissingStateBodyError(
                    f"No body found for state '{descriptor.name}'",
                    state_name=descriptor.name
                )
            bound[descriptor.name] = body
        return bound

    @property
    def registry(self) -> StateRegistry:
        return self._registry

    @property
    def is_executing(self) -> bool:
        """True while the machine is in the middle of a run."""
        return self._engaged

    @property
    def current_state(self) -> str:
        """Name of the active state, or an empty string when idle."""
        return "" if self._state is None else self._state.name

    def state_runtime(self, name: str) -> StateRuntime:
        """Per-run bookkeeping for a state; read it, do not modify it."""
        self._registry.get(name)
        return self._runtime[name]

    def on_disabled(self) -> None:
        """Stop execution when the robot leaves an enabled mode."""
        self.done()

    def engage(self, initial_state: Optional[str] = None, force: bool = False) -> None:
        """
        Request that the machine execute its states on the next tick.

        When nothing is active, the default state is active, or ``force`` is
        set, the machine is pointed at ``initial_state`` (or the first state)
        and that state restarts cleanly. Otherwise the active state keeps
        running.

        Raises:
            UnknownStateError: If ``initial_state`` is not a registered state
        """
        self._should_engage = True

        if force or self._state is None or self._state is self._registry.default:
            if initial_state is not None:
                self.next_state(initial_state)
            else:
                self.next_state(self._registry.first_state)

    def next_state(self, name: str) -> None:
        """
        Transition to another state; it runs on the next dispatch.

        Raises:
            UnknownStateError: If ``name`` is not a registered state
        """
        if name not in self._registry:
            raise UnknownStateError(
                f"Invalid state '{name}' specified",
                state_name=name,
                current_state=self.current_state
            )

        descriptor = self._registry.get(name)
        self._runtime[name].reset()
        self._state = descriptor

    def next_state_now(self, name: str) -> None:
        """
        Transition to another state and dispatch it immediately.

        Prefer :meth:`next_state`. Each call recurses into :meth:`execute`,
        so the caller is responsible for bounding chains within one tick.
        """
        self.next_state(name)
        self.execute()

    def done(self) -> None:
        """End execution of the current run."""
        if self.verbose and self._state is not None:
            log_run_stopped(self.logger, elapsed_since(self.clock, self._run_start))

        self._state = None
        self._engaged = False

    def execute(self) -> None:
        """Run one tick of the machine."""
        now = self.clock.now()
        default = self._registry.default

        if not self._engaged:
            if self._should_engage:
                self._run_start = now
                self._engaged = True
            elif default is None:
                return

        # seconds since the current run started
        tm = now - self._run_start
        state = self._state

        # chained timed states start when the previous one expired, not when
        # the tick noticed it, so a chain does not drift
        new_state_start = tm

        # expiry intentionally comes first
        if state is not None:
            runtime = self._runtime[state.name]
            if runtime.has_run and runtime.expires_at < tm:
                new_state_start = runtime.expires_at

                if state.next_state is not None:
                    self.next_state(state.next_state)
                    state = self._state
                elif self._should_engage:
                    # last state of the chain loops while still engaged
                    self.next_state(self._registry.first_state)
                    state = self._state
                else:
                    state = None

        # deactivate unless engage was called or the state must finish
        if state is not None and not self._should_engage and not state.must_finish:
            state = None

        if state is None and default is not None:
            state = default
            if self._state is not default:
                self._state = default
                self._runtime[default.name].reset()

        if state is not None:
            runtime = self._runtime[state.name]
            initial_call = not runtime.has_run
            if initial_call:
                runtime.enter(new_state_start, state.duration)
                if self.verbose:
                    log_state_entry(self.logger, tm, state.name)

            self._bodies[state.name](tm - runtime.start_time, initial_call)
        else:
            self.done()

        # engagement is one-shot per tick
        self._should_engage = False
