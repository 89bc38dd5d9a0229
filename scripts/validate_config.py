#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from phasebot.config.loader import ConfigLoader
from phasebot.config.validation import ConfigValidator, ValidationError
from phasebot.errors import StateMachineConfigError
from phasebot.state.registry import build_registry


def validate_machine_table(loader: ConfigLoader, machine: str) -> List[str]:
    """Validate the rows of one state table and build its registry."""
    problems = []
    rows = loader.load_state_rows(machine)

    for index, row in enumerate(rows):
        for error in ConfigValidator.validate_state_row(row):
            problems.append(f"row {index}: {error.field}: {error.message} (value: {error.value})")

    if problems:
        return problems

    try:
        build_registry(loader.load_state_specs(machine))
    except StateMachineConfigError as e:
        problems.append(f"{type(e).__name__}: {e}")

    return problems


def main():
    """Main validation function."""
    print("🔍 Validating phasebot configuration...")

    loader = ConfigLoader.create()
    all_valid = True

    print("\n⚙️  Validating robot configuration...")
    errors: List[ValidationError] = ConfigValidator.validate_config(loader.merge_config())
    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        all_valid = False
    else:
        print("✅ Robot configuration is valid")

    for machine in loader.machine_names():
        print(f"\n📋 Validating state table '{machine}'...")
        problems = validate_machine_table(loader, machine)
        if problems:
            print(f"❌ Found {len(problems)} problems:")
            for problem in problems:
                print(f"  • {problem}")
            all_valid = False
        else:
            print(f"✅ {machine} state table is valid")

    if all_valid:
        print("\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print("\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
