#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

import yaml

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from fvg_app.config.loader import ConfigLoader
from fvg_app.config.validation import ConfigValidator, ValidationError


def validate_instrument_config(loader: ConfigLoader, instrument_id: str) -> List[ValidationError]:
    """Validate configuration for a specific instrument."""
    config = loader.merge_config(instrument_id)
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    print("🔍 Validating FVG highlighter configuration...")

    loader = ConfigLoader.create()

    # Unknown instruments fall back to the defaults
    instruments = loader.list_instruments() + ["UNKNOWN-INSTRUMENT"]

    all_valid = True

    for instrument_id in instruments:
        print(f"\n📊 Validating {instrument_id}...")

        try:
            errors = validate_instrument_config(loader, instrument_id)

            if errors:
                print(f"❌ Found {len(errors)} validation errors:")
                for error in errors:
                    print(f"  • {error.field}: {error.message} (value: {error.value})")
                all_valid = False
            else:
                print(f"✅ {instrument_id} configuration is valid")

        except (OSError, ValueError, yaml.YAMLError) as e:
            print(f"❌ Error validating {instrument_id}: {e}")
            all_valid = False

    print(f"\n📋 Testing session overrides...")
    test_overrides = {
        "fvg": {
            "color": "#FF00FF",
            "minimum_gap_pips": 1,
            "rectangle_opacity": 120,
        }
    }

    try:
        config = loader.merge_config("EURUSD", test_overrides)
        errors = ConfigValidator.validate_config(config)

        if errors:
            print(f"❌ Session override validation failed:")
            for error in errors:
                print(f"  • {error.field}: {error.message}")
            all_valid = False
        else:
            print(f"✅ Session override validation passed")

    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"❌ Error testing session overrides: {e}")
        all_valid = False

    if all_valid:
        print(f"\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print(f"\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
