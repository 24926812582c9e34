#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import Optional

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from gpfinance.config.loader import ConfigLoader
from gpfinance.errors import ConfigurationError, InvalidConfigurationError
from gpfinance.strategies.registry import SELECTION_STRATEGIES


def validate(config_dir: Optional[str] = None) -> bool:
    """Validate run.yaml in ``config_dir`` and report the result."""
    loader = ConfigLoader.create(config_dir)
    print(f"📁 Config directory: {loader.config_dir}")

    try:
        options = loader.merge_options()
        config = loader.load()
    except InvalidConfigurationError as e:
        print(f"❌ Found {len(e.errors)} validation errors:")
        for error in e.errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        return False
    except ConfigurationError as e:
        print(f"❌ {e}")
        return False

    for key in ("populationSelection", "reproductionSelection"):
        name = options.get(key)
        if name is not None and name not in SELECTION_STRATEGIES:
            print(f"⚠️  {key}='{name}' is not registered, random selection will be used")

    print("✅ Configuration is valid")
    print(f"  • generations: {config.generations}")
    print(f"  • population: {config.population_size}")
    print(f"  • analysis type: {config.analysis_type.value}")
    print(f"  • crossover: {config.crossover.initial} → {config.crossover.final}")
    print(f"  • mutation start: {config.mutation.initial}")
    print(f"  • mutation end: {config.mutation.final}")
    print(f"  • selection: {config.population_selection} / {config.reproduction_selection}")
    return True


def main():
    """Main validation function."""
    print("🔍 Validating GPFinance configuration...")
    config_dir = sys.argv[1] if len(sys.argv) > 1 else None
    sys.exit(0 if validate(config_dir) else 1)


if __name__ == "__main__":
    main()
