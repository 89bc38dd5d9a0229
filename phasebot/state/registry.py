"""
State registry construction and validation.

A registry is built once from an ordered state table and never changes
afterwards. Every table problem is reported here, before the first tick.
"""

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional

from ..errors import (
    DuplicateStateError,
    InvalidDurationError,
    InvalidStateSpecError,
    InvalidTransitionError,
    MultipleDefaultStatesError,
    MultipleFirstStatesError,
    NoFirstStateError,
    UnknownStateError,
)
from ..logging.config import get_state_logger
from .models import StateDescriptor, StateKind, StateSpec

logger = get_state_logger(__name__)


@dataclass(frozen=True)
class StateRegistry:
    """Immutable lookup of validated state descriptors."""

    states: Mapping[str, StateDescriptor]
    first_state: str
    default_state: Optional[str] = None
    _order: tuple = field(default=(), repr=False, compare=False)

    def get(self, name: str) -> StateDescriptor:
        """
        Look up a descriptor by name.

        Raises:
            UnknownStateError: If no state has that name
        """
        try:
            return self.states[name]
        except KeyError:
            raise UnknownStateError(
                f"Invalid state '{name}' specified",
                state_name=name
            ) from None

    @property
    def first(self) -> StateDescriptor:
        return self.states[self.first_state]

    @property
    def default(self) -> Optional[StateDescriptor]:
        if self.default_state is None:
            return None
        return self.states[self.default_state]

    def names(self) -> list[str]:
        """State names in declaration order."""
        return list(self._order)

    def __contains__(self, name: object) -> bool:
        return name in self.states

    def __len__(self) -> int:
        return len(self.states)

    def __iter__(self) -> Iterator[StateDescriptor]:
        return (self.states[name] for name in self._order)


def _build_descriptor(spec: StateSpec) -> StateDescriptor:
    """Validate a single spec against the rules for its kind."""
    if spec.kind == StateKind.TIMED:
        duration = spec.duration
        if duration is None or math.isnan(duration) or duration <= 0:
            raise InvalidDurationError(
                f"Must specify positive duration for timed state '{spec.name}'",
                state_name=spec.name,
                duration=duration
            )
        return StateDescriptor(
            name=spec.name,
            kind=spec.kind,
            is_first=spec.first,
            must_finish=spec.must_finish,
            duration=float(duration),
            next_state=spec.next_state,
        )

    if spec.duration is not None:
        raise InvalidStateSpecError(
            f"Only timed states accept a duration (state '{spec.name}')",
            state_name=spec.name,
            field="duration"
        )
    if spec.next_state is not None:
        raise InvalidStateSpecError(
            f"Only timed states accept a next state (state '{spec.name}')",
            state_name=spec.name,
            field="next_state"
        )

    if spec.kind == StateKind.DEFAULT:
        if spec.first:
            raise InvalidStateSpecError(
                f"Default state '{spec.name}' cannot also be the first state",
                state_name=spec.name,
                field="first"
            )
        # default states never expire and are never dropped for lack of engagement
        return StateDescriptor(name=spec.name, kind=spec.kind, must_finish=True)

    if spec.kind != StateKind.PLAIN:
        raise InvalidStateSpecError(
            f"Unknown state kind '{spec.kind}' for state '{spec.name}'",
            state_name=spec.name,
            field="kind"
        )

    return StateDescriptor(
        name=spec.name,
        kind=spec.kind,
        is_first=spec.first,
        must_finish=spec.must_finish,
    )


def build_registry(specs: Iterable[StateSpec]) -> StateRegistry:
    """
    Validate an ordered state table and build its registry.

    Args:
        specs: State table rows in declaration order

    Returns:
        Immutable registry with the first and optional default state resolved

    Raises:
        InvalidDurationError: A timed state has no strictly positive duration
        MultipleFirstStatesError: More than one state is marked first
        MultipleDefaultStatesError: More than one default state is declared
        NoFirstStateError: No state is marked first
        DuplicateStateError: A state name is repeated
        InvalidStateSpecError: A field does not apply to the state's kind
        InvalidTransitionError: A timed state chains to an unknown state
    """
    states: dict[str, StateDescriptor] = {}
    first_state: Optional[str] = None
    default_state: Optional[str] = None

    for spec in specs:
        if spec.name in states:
            raise DuplicateStateError(
                f"State '{spec.name}' is declared more than once",
                state_name=spec.name
            )

        descriptor = _build_descriptor(spec)

        if descriptor.is_first:
            if first_state is not None:
                raise MultipleFirstStatesError(
                    "Multiple states were specified as the first state!",
                    states=[first_state, descriptor.name]
                )
            first_state = descriptor.name

        if descriptor.is_default:
            if default_state is not None:
                raise MultipleDefaultStatesError(
                    "Multiple states were specified as the default state!",
                    states=[default_state, descriptor.name]
                )
            default_state = descriptor.name

        states[descriptor.name] = descriptor

    if first_state is None:
        raise NoFirstStateError("Starting state not defined!")

    for descriptor in states.values():
        if descriptor.next_state is not None and descriptor.next_state not in states:
            raise InvalidTransitionError(
                f"State '{descriptor.name}' chains to unknown state '{descriptor.next_state}'",
                state_name=descriptor.name,
                next_state=descriptor.next_state
            )

    registry = StateRegistry(
        states=MappingProxyType(states),
        first_state=first_state,
        default_state=default_state,
        _order=tuple(states),
    )

    logger.debug(
        "Built state registry",
        states=registry.names(),
        first_state=first_state,
        default_state=default_state
    )

    return registry
