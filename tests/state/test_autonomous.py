"""Tests for the autonomous mode adapter."""

from unittest.mock import Mock

from phasebot.state.autonomous import AutonomousAdapter
from phasebot.state.machine import StateMachine
from phasebot.state.models import state, timed_state


class Routine(StateMachine):
    """Start, drive for a second, then stop and finish."""

    states = [
        state("start", first=True),
        timed_state("drive", duration=1.0, next_state="stop"),
        timed_state("stop", duration=0.5),
    ]

    def __init__(self, clock):
        super().__init__(clock=clock)
        self.visited = []
        self.ticks = 0

    def start(self, state_tm, initial_call):
        self.ticks += 1
        self.visited.append("start")
        self.next_state("drive")

    def drive(self, state_tm, initial_call):
        self.ticks += 1
        if initial_call:
            self.visited.append("drive")

    def stop(self, state_tm, initial_call):
        self.ticks += 1
        if initial_call:
            self.visited.append("stop")
        elif state_tm > 0.25:
            self.done()


class TestAutonomousAdapter:
    """Test the enable/periodic/disable protocol."""

    def test_runs_routine_once_per_enable(self, clock):
        machine = Routine(clock)
        adapter = AutonomousAdapter(machine)

        adapter.on_enabled()
        assert adapter.is_running

        for _ in range(200):
            adapter.autonomous_periodic()
            clock.advance(0.02)

        assert machine.visited == ["start", "drive", "stop"]
        assert not adapter.is_running
        assert not machine.is_executing

        # further ticks leave the machine alone
        ticks_at_finish = machine.ticks
        for _ in range(10):
            adapter.autonomous_periodic()
            clock.advance(0.02)
        assert machine.ticks == ticks_at_finish

    def test_expiring_last_state_loops_without_done(self, make_machine, clock):
        machine = make_machine([timed_state("only", duration=0.1, first=True)])
        adapter = AutonomousAdapter(machine)
        adapter.on_enabled()

        for _ in range(20):
            adapter.autonomous_periodic()
            clock.advance(0.02)

        assert adapter.is_running
        assert sum(1 for call in machine.calls if call[2]) > 1

    def test_periodic_hook_runs_after_execute(self, make_machine):
        order = []
        machine = make_machine([state("hold", first=True)])
        machine.execute = Mock(side_effect=lambda: order.append("execute"))
        adapter = AutonomousAdapter(machine, periodic_hook=lambda: order.append("hook"))

        adapter.on_enabled()
        adapter.autonomous_periodic()

        assert order == ["execute", "hook"]

    def test_hook_not_called_before_enable(self, make_machine):
        hook = Mock()
        adapter = AutonomousAdapter(make_machine([state("hold", first=True)]), periodic_hook=hook)

        adapter.autonomous_periodic()
        hook.assert_not_called()

    def test_enable_turns_on_verbose(self, make_machine):
        machine = make_machine([state("hold", first=True)])
        assert machine.verbose is False

        AutonomousAdapter(machine).on_enabled()
        assert machine.verbose is True

    def test_quiet_adapter_leaves_verbose_alone(self, make_machine):
        machine = make_machine([state("hold", first=True)])
        AutonomousAdapter(machine, verbose=False).on_enabled()
        assert machine.verbose is False

    def test_disable_calls_done(self, make_machine):
        machine = make_machine([state("hold", first=True)])
        adapter = AutonomousAdapter(machine)

        adapter.on_enabled()
        adapter.autonomous_periodic()
        assert machine.is_executing

        adapter.on_disabled()
        assert not machine.is_executing
        assert not adapter.is_running

    def test_reenable_runs_again(self, make_machine):
        machine = make_machine([state("hold", first=True)])
        adapter = AutonomousAdapter(machine)

        adapter.on_enabled()
        adapter.autonomous_periodic()
        adapter.on_disabled()

        adapter.on_enabled()
        adapter.autonomous_periodic()
        assert machine.calls[-1] == ("hold", 0.0, True)
