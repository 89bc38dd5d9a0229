#!/usr/bin/env python3
"""
Autonomous Routine Demo - phasebot

Runs the ``drive_forward`` routine from config/states.yaml through the
control loop for a few seconds of real time, printing each state entry:
- start → drive (2.0s) → stop (0.5s)
- the routine runs exactly once, then the loop idles until time runs out

Run: python examples/autonomous_demo.py
"""

import time

from phasebot.config.loader import ConfigLoader
from phasebot.loop.runner import ControlLoop
from phasebot.logging.config import configure_from_config
from phasebot.state.autonomous import AutonomousAdapter
from phasebot.state.machine import StateMachine


class DriveForward(StateMachine):
    """Drive straight for two seconds, then stop."""

    def __init__(self, states, verbose=False):
        super().__init__(states=states, verbose=verbose, name="drive_forward")
        self.speed = 0.0

    def start(self, state_tm, initial_call):
        self.next_state("drive")

    def drive(self, state_tm, initial_call):
        if initial_call:
            print("  driving forward")
        self.speed = 0.5

    def stop(self, state_tm, initial_call):
        self.speed = 0.0
        if state_tm >= 0.4:
            self.done()


def main():
    loader = ConfigLoader.create()
    config = loader.merge_config()
    configure_from_config(loader.logging_params(config))

    machine_params = loader.state_machine_params(config)
    autonomous_params = loader.autonomous_params(config)

    routine = DriveForward(loader.load_state_specs("drive_forward"), verbose=machine_params.verbose)

    loop = ControlLoop(loader.loop_params(config), autonomous=autonomous_params)
    loop.add_autonomous(
        "drive_forward",
        AutonomousAdapter(routine, verbose=autonomous_params.verbose)
    )

    deadline = time.monotonic() + 3.5
    ticks = loop.run_autonomous(lambda: time.monotonic() < deadline)

    print(f"Ran {ticks} ticks, final speed {routine.speed}")


if __name__ == "__main__":
    main()
