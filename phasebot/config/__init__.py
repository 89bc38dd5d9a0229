"""
Configuration module.

Frozen dataclass defaults, YAML overrides and validation for the control
loop, state machines and logging.
"""
