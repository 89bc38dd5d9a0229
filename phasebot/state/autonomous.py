"""
Autonomous mode adapter for state machines.

Binds a :class:`StateMachine` to the autonomous enable/periodic/disable
protocol so that a whole routine is expressed as one state table. Unlike a
component, the routine runs to completion exactly once per enable instead of
looping back to its first state.
"""

from typing import Callable, Optional

from ..logging.config import get_state_logger
from ..loop.components import AutonomousMode
from .machine import StateMachine

logger = get_state_logger(__name__)


class AutonomousAdapter(AutonomousMode):
    """
    Runs a state machine as a one-shot autonomous routine.

    The machine is engaged on every tick until it stops executing on its own,
    either because its last state finished or because a state called
    ``done()``. After that the adapter leaves the machine alone until it is
    enabled again.
    """

    def __init__(
        self,
        machine: StateMachine,
        periodic_hook: Optional[Callable[[], None]] = None,
        verbose: bool = True
    ) -> None:
        """
        Args:
            machine: The state machine holding the routine
            periodic_hook: Owner callback run after each tick of the machine
            verbose: Turn on state entry logging when enabled
        """
        self.machine = machine
        self.periodic_hook = periodic_hook
        self.verbose = verbose
        self._engaged = False

    @property
    def is_running(self) -> bool:
        """True until the routine finishes for the current enable cycle."""
        return self._engaged

    def on_enabled(self) -> None:
        self.machine.on_enabled()
        self._engaged = True
        if self.verbose:
            self.machine.verbose = True

        logger.info("Autonomous routine enabled", machine=self.machine.name)

    def autonomous_periodic(self) -> None:
        # Engaging on every tick keeps non-must-finish states alive, but the
        # machine would loop forever if we kept engaging after it finished.
        if not self._engaged:
            return

        self.machine.engage()
        self.machine.execute()

        if self.periodic_hook is not None:
            self.periodic_hook()

        self._engaged = self.machine.is_executing
        if not self._engaged:
            logger.info("Autonomous routine finished", machine=self.machine.name)

    def on_disabled(self) -> None:
        self._engaged = False
        self.machine.on_disabled()
