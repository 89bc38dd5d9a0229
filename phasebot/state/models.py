"""
State machine data models.

This module defines the declarative registration table entries, the
immutable descriptors produced from them, and the per-run bookkeeping the
engine keeps for each descriptor.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from ..errors import InvalidStateSpecError

StateBody = Callable[[float, bool], None]


class StateKind(str, Enum):
    """How a state decides when it is over."""
    PLAIN = "plain"          # Runs until something transitions away
    TIMED = "timed"          # Expires after a fixed duration
    DEFAULT = "default"      # Fallback when nothing else is active


@dataclass(frozen=True)
class StateSpec:
    """One row of a state registration table."""

    name: str
    kind: StateKind = StateKind.PLAIN
    duration: Optional[float] = None
    next_state: Optional[str] = None
    first: bool = False
    must_finish: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StateSpec":
        """
        Build a spec from a mapping such as a parsed YAML row.

        Raises:
            InvalidStateSpecError: If the name is missing, the kind is unknown,
                or a field has the wrong type
        """
        name = data.get("name")
        if not name:
            raise InvalidStateSpecError(
                "State table row is missing a name",
                field="name",
                context={"row": dict(data)}
            )

        raw_kind = data.get("kind", StateKind.PLAIN.value)
        try:
            kind = StateKind(raw_kind)
        except ValueError:
            raise InvalidStateSpecError(
                f"Unknown state kind '{raw_kind}' for state '{name}'",
                state_name=name,
                field="kind"
            ) from None

        duration = data.get("duration")
        if duration is not None:
            # bool is an int subclass
            if isinstance(duration, bool) or not isinstance(duration, (int, float)):
                raise InvalidStateSpecError(
                    f"Duration of state '{name}' must be a number, got {duration!r}",
                    state_name=name,
                    field="duration"
                )
            duration = float(duration)

        flags = {}
        for flag in ("first", "must_finish"):
            value = data.get(flag, False)
            if not isinstance(value, bool):
                raise InvalidStateSpecError(
                    f"Field '{flag}' of state '{name}' must be true or false, got {value!r}",
                    state_name=name,
                    field=flag
                )
            flags[flag] = value

        return cls(
            name=name,
            kind=kind,
            duration=duration,
            next_state=data.get("next_state"),
            **flags,
        )


def state(name: str, first: bool = False, must_finish: bool = False) -> StateSpec:
    """Declare a state that runs until something transitions away from it."""
    return StateSpec(name=name, kind=StateKind.PLAIN, first=first, must_finish=must_finish)


def timed_state(
    name: str,
    duration: float,
    next_state: Optional[str] = None,
    first: bool = False,
    must_finish: bool = False
) -> StateSpec:
    """
    Declare a state that runs for a fixed amount of time.

    A timed state is guaranteed to run at least once, even if it has already
    expired by the time it is reached. When it expires it moves on to
    ``next_state``; without one it is the last state of its chain.
    """
    return StateSpec(
        name=name,
        kind=StateKind.TIMED,
        duration=duration,
        next_state=next_state,
        first=first,
        must_finish=must_finish,
    )


def default_state(name: str) -> StateSpec:
    """Declare the state that runs whenever no other state is active."""
    return StateSpec(name=name, kind=StateKind.DEFAULT)


@dataclass(frozen=True)
class StateDescriptor:
    """Validated, immutable metadata for a single state."""

    name: str
    kind: StateKind
    is_first: bool = False
    must_finish: bool = False
    duration: float = math.inf
    next_state: Optional[str] = None

    @property
    def is_timed(self) -> bool:
        return self.kind == StateKind.TIMED

    @property
    def is_default(self) -> bool:
        return self.kind == StateKind.DEFAULT


@dataclass
class StateRuntime:
    """Per-run bookkeeping for one state, owned by a single engine."""

    has_run: bool = False
    start_time: float = 0.0
    expires_at: float = math.inf

    def reset(self) -> None:
        """Mark the state unrun so its next dispatch is an initial call."""
        self.has_run = False

    def enter(self, start_time: float, duration: float) -> None:
        """Record the first dispatch of the state."""
        self.has_run = True
        self.start_time = start_time
        self.expires_at = start_time + duration
