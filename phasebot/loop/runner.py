"""
Fixed-period control loop.

Coordinates the enable/execute/disable lifecycle of components and the
selected autonomous mode:

    enable components → mode enabled → [mode periodic → execute components → delay]* →
    mode disabled → disable components
"""

import time
from typing import Callable, Optional

from ..config.defaults import AutonomousParams, LoopParams
from ..errors import DuplicateModeError
from ..logging.config import get_loop_logger
from ..utils.time import Clock, MonotonicClock
from .components import AutonomousMode, Component
from .delay import PreciseDelay

logger = get_loop_logger(__name__)


class _IdleAutonomous(AutonomousMode):
    """Stand-in used when no autonomous mode is selected."""

    def autonomous_periodic(self) -> None:
        pass


class ControlLoop:
    """
    Drives components at a fixed period.

    Components are executed in the order they were added, after the mode's
    own periodic function. A state machine that commands other components
    should therefore be added before them.
    """

    def __init__(
        self,
        params: Optional[LoopParams] = None,
        clock: Optional[Clock] = None,
        sleep: Callable[[float], None] = time.sleep,
        autonomous: Optional[AutonomousParams] = None
    ) -> None:
        self.params = params or LoopParams()
        self.clock = clock or MonotonicClock()
        self.sleep = sleep

        self._components: list[Component] = []
        self._autonomous: dict[str, AutonomousMode] = {}
        self._default_mode: Optional[str] = (autonomous or AutonomousParams()).default_mode
        self._selected_mode: Optional[str] = None

    @property
    def components(self) -> list[Component]:
        return list(self._components)

    @property
    def autonomous_modes(self) -> list[str]:
        """Registered autonomous mode names, sorted."""
        return sorted(self._autonomous)

    def add_component(self, component: Component) -> None:
        """Add a component to be executed every tick."""
        self._components.append(component)

    def add_autonomous(self, name: str, mode: AutonomousMode, default: bool = False) -> None:
        """
        Register an autonomous mode.

        Args:
            name: Name shown to the operator
            mode: Autonomous mode object
            default: Use this mode when none is selected

        Raises:
            DuplicateModeError: If a mode with this name already exists
        """
        if name in self._autonomous:
            raise DuplicateModeError(
                f"Duplicate autonomous mode '{name}'",
                mode_name=name
            )

        self._autonomous[name] = mode
        if default:
            self._default_mode = name

    def select_autonomous(self, name: Optional[str]) -> None:
        """Choose the mode run by the next :meth:`run_autonomous` call."""
        self._selected_mode = name

    def _resolve_mode(self, mode_name: Optional[str]) -> AutonomousMode:
        for candidate in (mode_name, self._selected_mode, self._default_mode):
            if candidate is not None and candidate in self._autonomous:
                logger.info("Enabling autonomous mode", mode=candidate)
                return self._autonomous[candidate]

        logger.warning(
            "No autonomous mode selected",
            requested=mode_name or self._selected_mode,
            available=self.autonomous_modes
        )
        return _IdleAutonomous()

    def enable_components(self) -> None:
        for component in self._components:
            component.on_enabled()

    def disable_components(self) -> None:
        for component in self._components:
            component.on_disabled()

    def execute_components(self) -> None:
        for component in self._components:
            component.execute()

    def _new_delay(self) -> PreciseDelay:
        return PreciseDelay(
            self.params.period,
            clock=self.clock,
            sleep=self.sleep,
            yield_time=self.params.yield_time,
            min_delay=self.params.min_delay,
        )

    def run_autonomous(
        self,
        keep_running: Callable[[], bool],
        mode_name: Optional[str] = None
    ) -> int:
        """
        Run autonomous mode until ``keep_running`` returns False.

        Args:
            keep_running: Checked before every tick
            mode_name: Mode to run; falls back to the selected, then default mode

        Returns:
            Number of ticks executed
        """
        mode = self._resolve_mode(mode_name)

        ticks = 0
        try:
            self.enable_components()
            mode.on_enabled()
            with self._new_delay() as delay:
                while keep_running():
                    mode.autonomous_periodic()
                    self.execute_components()
                    ticks += 1
                    delay.delay()
        finally:
            mode.on_disabled()
            self.disable_components()

        logger.info("Autonomous mode ended", ticks=ticks)
        return ticks

    def run_teleop(
        self,
        keep_running: Callable[[], bool],
        periodic: Optional[Callable[[], None]] = None
    ) -> int:
        """
        Run teleoperated mode until ``keep_running`` returns False.

        Args:
            keep_running: Checked before every tick
            periodic: Operator code run before components execute each tick

        Returns:
            Number of ticks executed
        """
        ticks = 0
        try:
            self.enable_components()
            with self._new_delay() as delay:
                while keep_running():
                    if periodic is not None:
                        periodic()
                    self.execute_components()
                    ticks += 1
                    delay.delay()
        finally:
            self.disable_components()

        logger.info("Teleop mode ended", ticks=ticks)
        return ticks
