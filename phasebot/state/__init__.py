"""
Timed state machine module.

Declares state tables, validates them into immutable registries, and runs
them one tick at a time inside a fixed-period control loop.
"""
