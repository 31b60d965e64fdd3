#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from quantsim_app.config.loader import ConfigLoader
from quantsim_app.config.validation import ConfigValidator


def main():
    """Validate the merged configuration and a few override sets."""
    print("🔍 Validating quantsim configuration...")

    loader = ConfigLoader.create()
    scenarios = {
        "config file": None,
        "frictionless": {"pricing": {"model": "nocost"}},
        "consensus": {"resolver": {"policy": "average"}},
    }

    all_valid = True

    for name, overrides in scenarios.items():
        config = loader.merge_config(overrides)
        errors = ConfigValidator.validate_config(config)

        if errors:
            print(f"❌ {name}: {len(errors)} validation errors")
            for error in errors:
                print(f"  • {error.field}: {error.message} (value: {error.value})")
            all_valid = False
        else:
            print(f"✅ {name} configuration is valid")

    sys.exit(0 if all_valid else 1)


if __name__ == "__main__":
    main()
