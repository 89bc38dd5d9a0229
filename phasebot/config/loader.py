"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from ..state.models import StateSpec
from .defaults import (
    AutonomousParams, DefaultConfig, LoggingParams, LoopParams, StateMachineParams,
    get_default_config
)


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def _load_yaml(self, filename: str) -> dict[str, Any]:
        path = self.config_dir / filename

        if not path.exists():
            return {}

        with open(path) as f:
            data = yaml.safe_load(f)

        return data or {}

    def load_robot_config(self) -> dict[str, Any]:
        """Load robot-wide configuration overrides from ``robot.yaml``."""
        return self._load_yaml("robot.yaml")

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Runtime overrides (highest priority)
        2. Robot configuration file
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)
        config = self._deep_merge(config, self.load_robot_config())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load_state_specs(self, machine: str) -> list[StateSpec]:
        """
        Load a declarative state table from ``states.yaml``.

        The file maps machine names to ordered lists of rows::

            machines:
              drive_forward:
                - {name: start, first: true}
                - {name: drive, kind: timed, duration: 2.0}

        Returns:
            State specs in file order, or an empty list if the machine is absent
        """
        return [StateSpec.from_dict(row) for row in self.load_state_rows(machine)]

    def load_state_rows(self, machine: str) -> list[dict[str, Any]]:
        """Raw state table rows for a machine, before validation."""
        return self._load_yaml("states.yaml").get("machines", {}).get(machine, [])  # type: ignore[no-any-return]

    def machine_names(self) -> list[str]:
        """Names of all machines declared in ``states.yaml``."""
        return list(self._load_yaml("states.yaml").get("machines", {}))

    @staticmethod
    def loop_params(config: dict[str, Any]) -> LoopParams:
        """Build loop parameters from a merged configuration."""
        return LoopParams(**config.get("loop", {}))

    @staticmethod
    def logging_params(config: dict[str, Any]) -> LoggingParams:
        """Build logging parameters from a merged configuration."""
        return LoggingParams(**config.get("logging", {}))

    @staticmethod
    def state_machine_params(config: dict[str, Any]) -> StateMachineParams:
        return StateMachineParams(**config.get("state_machine", {}))

    @staticmethod
    def autonomous_params(config: dict[str, Any]) -> AutonomousParams:
        return AutonomousParams(**config.get("autonomous", {}))

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
