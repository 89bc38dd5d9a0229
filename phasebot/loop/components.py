"""Base classes for objects driven by the control loop."""

from abc import ABC, abstractmethod


class Component(ABC):
    """Something the control loop executes once per tick."""

    def on_enabled(self) -> None:
        """
        Called when the robot enters autonomous or teleoperated mode.

        Components should put themselves in a safe state here so nothing
        unexpected happens when the robot is enabled.
        """

    def on_disabled(self) -> None:
        """Called when the robot leaves autonomous or teleoperated mode."""

    @abstractmethod
    def execute(self) -> None:
        """Called at the end of every control loop iteration."""
        pass


class AutonomousMode(ABC):
    """A selectable routine run during autonomous mode."""

    def on_enabled(self) -> None:
        """Called when autonomous mode is initially enabled."""

    def on_disabled(self) -> None:
        """Called when autonomous mode is no longer active."""

    @abstractmethod
    def autonomous_periodic(self) -> None:
        """Called once per tick while autonomous mode is enabled."""
        pass
