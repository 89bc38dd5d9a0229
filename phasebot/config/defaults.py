"""Default configuration parameters for phasebot."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class LoopParams:
    """Control loop timing parameters."""
    period: float = 0.020                            # Seconds between ticks
    yield_time: float = 0.0002                       # Minimum sleep every tick
    min_delay: float = 0.0001                        # Shorter waits are skipped


@dataclass(frozen=True)
class StateMachineParams:
    """State machine component parameters."""
    verbose: bool = False                            # Log state entry and stop events


@dataclass(frozen=True)
class AutonomousParams:
    """Autonomous mode parameters."""
    verbose: bool = True                             # Autonomous routines always log transitions
    default_mode: Optional[str] = None               # Mode used when none is selected


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False
    include_timestamp: bool = True


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    loop: LoopParams
    state_machine: StateMachineParams
    autonomous: AutonomousParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        loop=LoopParams(),
        state_machine=StateMachineParams(),
        autonomous=AutonomousParams(),
        logging=LoggingParams(),
    )
