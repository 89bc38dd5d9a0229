"""Configuration validation utilities."""

from dataclasses import dataclass, fields
from typing import Any

from ..state.models import StateKind
from .defaults import AutonomousParams, LoggingParams, LoopParams, StateMachineParams

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _unknown_keys(params: dict[str, Any], params_type: type) -> list[ValidationError]:
    known = {f.name for f in fields(params_type)}
    return [
        ValidationError(field=key, message="Unknown setting", value=params[key])
        for key in params if key not in known
    ]


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_loop_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate control loop parameters."""
        errors = _unknown_keys(params, LoopParams)

        for name in ("period", "yield_time", "min_delay"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive number of seconds",
                        value=value
                    ))

        # yield_time must fit inside one period
        period = params.get("period")
        yield_time = params.get("yield_time")
        if _is_number(period) and _is_number(yield_time) and yield_time >= period > 0:
            errors.append(ValidationError(
                field="yield_time",
                message="Must be shorter than the loop period",
                value=yield_time
            ))

        return errors

    @staticmethod
    def validate_state_machine_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate state machine component parameters."""
        errors = _unknown_keys(params, StateMachineParams)

        if "verbose" in params:
            value = params["verbose"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="verbose",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_autonomous_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate autonomous mode parameters."""
        errors = _unknown_keys(params, AutonomousParams)

        if "verbose" in params:
            value = params["verbose"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="verbose",
                    message="Must be a boolean",
                    value=value
                ))

        if "default_mode" in params:
            value = params["default_mode"]
            if value is not None and not isinstance(value, str):
                errors.append(ValidationError(
                    field="default_mode",
                    message="Must be a mode name or null",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = _unknown_keys(params, LoggingParams)

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in _LOG_LEVELS:
                errors.append(ValidationError(
                    field="level",
                    message=f"Must be one of {sorted(_LOG_LEVELS)}",
                    value=value
                ))

        for name in ("format_json", "include_timestamp"):
            if name in params and not isinstance(params[name], bool):
                errors.append(ValidationError(
                    field=name,
                    message="Must be a boolean",
                    value=params[name]
                ))

        return errors

    @staticmethod
    def validate_state_row(row: dict[str, Any]) -> list[ValidationError]:
        """Validate one row of a YAML state table before it is built."""
        errors = []

        name = row.get("name")
        if not isinstance(name, str) or not name:
            errors.append(ValidationError(
                field="name",
                message="Must be a non-empty string",
                value=name
            ))

        kind = row.get("kind", StateKind.PLAIN.value)
        if kind not in {k.value for k in StateKind}:
            errors.append(ValidationError(
                field="kind",
                message=f"Must be one of {[k.value for k in StateKind]}",
                value=kind
            ))

        if "duration" in row:
            value = row["duration"]
            if kind != StateKind.TIMED.value:
                errors.append(ValidationError(
                    field="duration",
                    message="Only timed states accept a duration",
                    value=value
                ))
            elif not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="duration",
                    message="Must be a positive number of seconds",
                    value=value
                ))
        elif kind == StateKind.TIMED.value:
            errors.append(ValidationError(
                field="duration",
                message="Timed states require a duration",
                value=None
            ))

        for flag in ("first", "must_finish"):
            if flag in row and not isinstance(row[flag], bool):
                errors.append(ValidationError(
                    field=flag,
                    message="Must be a boolean",
                    value=row[flag]
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "loop" in config:
            errors.extend(ConfigValidator.validate_loop_params(config["loop"]))

        if "state_machine" in config:
            errors.extend(ConfigValidator.validate_state_machine_params(config["state_machine"]))

        if "autonomous" in config:
            errors.extend(ConfigValidator.validate_autonomous_params(config["autonomous"]))

        if "logging" in config:
            errors.extend(ConfigValidator.validate_logging_params(config["logging"]))

        return errors
