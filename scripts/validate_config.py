#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List, Optional

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from edgar_app.config.loader import ConfigLoader
from edgar_app.config.validation import ConfigValidator, ValidationError


def validate_config_dir(config_dir: Optional[Path] = None) -> List[ValidationError]:
    """Validate the merged configuration for a config directory."""
    loader = ConfigLoader.create(config_dir)
    config = loader.merge_config()
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_dir)
    print(f"🔍 Validating EDGAR App configuration in {loader.config_dir}...")

    try:
        errors = validate_config_dir(config_dir)
    except Exception as e:
        print(f"❌ Error loading configuration: {e}")
        sys.exit(1)

    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        sys.exit(1)

    config = loader.load()
    source = config.catalog.url or config.catalog.path
    print(f"✅ Configuration is valid (catalog: {source}, lookback: {config.dates.lookback_years}y)")
    sys.exit(0)


if __name__ == "__main__":
    main()
