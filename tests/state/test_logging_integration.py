"""Tests for verbose logging in the state machine engine."""

from unittest.mock import Mock

from structlog.testing import capture_logs

from phasebot.logging.config import (
    configure_logging, get_loop_logger, get_state_logger, log_run_stopped, log_state_entry
)
from phasebot.state.models import state, timed_state


class TestVerboseLogging:
    """Test that entry and stop events fire at the right points."""

    def setup_method(self):
        configure_logging(level="DEBUG", format_json=True)
        self.mock_logger = Mock()

    def test_entry_logged_on_initial_call_only(self, make_machine):
        sm = make_machine([state("a", first=True)], verbose=True)
        sm.logger = self.mock_logger

        sm.engage()
        sm.execute()
        sm.engage()
        sm.execute()

        self.mock_logger.info.assert_called_once_with("Entering state", elapsed_s=0.0, state="a")

    def test_entry_reports_run_elapsed_time(self, make_machine, clock, chain_states):
        sm = make_machine(chain_states, verbose=True)
        sm.logger = self.mock_logger

        sm.engage()
        sm.execute()
        clock.set(1.25)
        sm.engage()
        sm.execute()

        self.mock_logger.info.assert_called_with("Entering state", elapsed_s=1.25, state="b")

    def test_stop_logged_by_done(self, make_machine, clock):
        sm = make_machine([state("a", first=True)], verbose=True)
        sm.logger = self.mock_logger

        sm.engage()
        sm.execute()
        clock.set(2.5)
        sm.done()

        self.mock_logger.info.assert_called_with("Stopped state machine execution", elapsed_s=2.5)

    def test_stop_not_logged_when_idle(self, make_machine):
        sm = make_machine([state("a", first=True)], verbose=True)
        sm.logger = self.mock_logger

        sm.done()
        self.mock_logger.info.assert_not_called()

    def test_stop_logged_when_engagement_lapses(self, make_machine):
        sm = make_machine([state("a", first=True)], verbose=True)
        sm.logger = self.mock_logger

        sm.engage()
        sm.execute()
        sm.execute()

        messages = [call.args[0] for call in self.mock_logger.info.call_args_list]
        assert messages == ["Entering state", "Stopped state machine execution"]

    def test_quiet_machine_logs_nothing(self, make_machine, clock):
        sm = make_machine([timed_state("a", 1.0, first=True)])
        sm.logger = self.mock_logger

        sm.engage()
        sm.execute()
        sm.done()

        self.mock_logger.info.assert_not_called()


class TestLogHelpers:
    """Test logger factories and event helpers."""

    def test_log_state_entry_rounds_elapsed(self):
        logger = Mock()
        log_state_entry(logger, 1.23456, "drive")
        logger.info.assert_called_once_with("Entering state", elapsed_s=1.235, state="drive")

    def test_log_run_stopped(self):
        logger = Mock()
        log_run_stopped(logger, 3.0)
        logger.info.assert_called_once_with("Stopped state machine execution", elapsed_s=3.0)

    def test_subsystem_bindings(self):
        with capture_logs() as captured:
            get_state_logger("test", machine="intake").info("hello")
            get_loop_logger("test").info("tick")

        assert captured[0]["subsystem"] == "state_machine"
        assert captured[0]["machine"] == "intake"
        assert captured[1]["subsystem"] == "control_loop"
