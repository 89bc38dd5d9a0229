"""
Logging configuration and utilities for phasebot.

Provides centralized structlog setup and standardized helpers for state
machine and control loop events.
"""
