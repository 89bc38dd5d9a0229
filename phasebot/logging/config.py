"""
Centralized logging configuration for phasebot.

This module provides standardized logging configuration using structlog
for all components. State machines only emit their entry and stop events
when verbose logging is turned on; everything else goes through the
subsystem loggers returned here.
"""
import logging
import sys
from typing import TYPE_CHECKING, Optional

import structlog
from structlog.types import FilteringBoundLogger

if TYPE_CHECKING:
    from ..config.defaults import LoggingParams


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_from_config(params: "LoggingParams") -> None:
    """Apply a ``LoggingParams`` section from the loaded configuration."""
    configure_logging(
        level=params.level,
        format_json=params.format_json,
        include_timestamp=params.include_timestamp,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_state_logger(name: str, machine: Optional[str] = None) -> FilteringBoundLogger:
    """
    Get a logger specifically configured for state machine events.

    Args:
        name: Logger name (typically __name__)
        machine: Name of the machine instance, bound to every event

    Returns:
        Configured structlog logger for state machine events
    """
    logger = get_logger(name).bind(subsystem="state_machine")

    if machine is not None:
        logger = logger.bind(machine=machine)

    return logger


def get_loop_logger(name: str) -> FilteringBoundLogger:
    """Get a logger bound to the control loop subsystem."""
    return get_logger(name).bind(subsystem="control_loop")


def log_state_entry(logger: FilteringBoundLogger, elapsed: float, state: str) -> None:
    """
    Log that a state was entered.

    Args:
        logger: Structlog logger instance
        elapsed: Seconds since the current run started
        state: Name of the state being entered
    """
    logger.info("Entering state", elapsed_s=round(elapsed, 3), state=state)


def log_run_stopped(logger: FilteringBoundLogger, elapsed: float) -> None:
    """
    Log that a run stopped.

    Args:
        logger: Structlog logger instance
        elapsed: Seconds since the current run started
    """
    logger.info("Stopped state machine execution", elapsed_s=round(elapsed, 3))
