#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from storefront_app.config.loader import ConfigLoader
from storefront_app.config.validation import ConfigValidator, ValidationError


def validate_storefront_config(overrides: Optional[Dict[str, Any]] = None) -> List[ValidationError]:
    """Validate the merged defaults + file configuration, plus optional overrides."""
    loader = ConfigLoader.create()
    config = loader.merge_config(overrides)
    return ConfigValidator.validate_config(config)


def report(label: str, errors: List[ValidationError]) -> bool:
    if errors:
        print(f"❌ {label}: found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value!r})")
        return False

    print(f"✅ {label} is valid")
    return True


def main():
    """Main validation function."""
    print("🔍 Validating storefront configuration...")

    all_valid = True

    print("\n📄 Validating config/storefront.yaml...")
    try:
        all_valid &= report("File configuration", validate_storefront_config())
    except Exception as e:
        print(f"❌ Error loading configuration: {e}")
        all_valid = False

    # Overrides a deployment might pass in at startup
    print("\n📋 Testing runtime overrides...")
    test_overrides = {
        "payment": {"price": 299, "currency": "USD"},
        "notification": {"visible_seconds": 5},
    }
    try:
        all_valid &= report("Override configuration", validate_storefront_config(test_overrides))
    except Exception as e:
        print(f"❌ Error testing overrides: {e}")
        all_valid = False

    if all_valid:
        print("\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print("\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
