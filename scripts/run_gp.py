#!/usr/bin/env python3
"""Run a GP search on synthetic securities.

Options are given as ``key=value`` pairs and use the same names as the
run configuration, e.g.:

    python scripts/run_gp.py generations=200 population=40 type=technical seed=7

The options ``securities`` and ``periods`` control the synthetic data and
are not passed to the engine. Options in config/run.yaml apply unless
overridden on the command line.
"""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from gpfinance.config.loader import ConfigLoader
from gpfinance.data.synthetic import generate_securities
from gpfinance.engine import GeneticProgram
from gpfinance.errors import ConfigurationError, OptionParseError
from gpfinance.logging.config import configure_logging


def parse_args(argv: list[str]) -> dict[str, str]:
    """Turn ``key=value`` arguments into an option mapping."""
    options = {}
    for arg in argv:
        key, sep, value = arg.partition("=")
        if not sep:
            raise SystemExit(f"Expected key=value, got '{arg}'")
        options[key] = value
    return options


def pop_data_options(options: dict[str, str]) -> tuple[int, int]:
    """Remove ``securities`` and ``periods`` from ``options`` and parse them."""
    counts = []
    for key, default in (("securities", "5"), ("periods", "250")):
        raw = options.pop(key, default)
        try:
            value = int(raw)
        except ValueError:
            value = 0
        if value < 1:
            raise OptionParseError(
                f"{key} must be a positive integer, got '{raw}'", option=key, raw_value=raw
            )
        counts.append(value)
    return counts[0], counts[1]


def main() -> None:
    configure_logging(level="INFO")
    options = parse_args(sys.argv[1:])

    try:
        security_count, periods = pop_data_options(options)
        config = ConfigLoader.create().load(options)
    except ConfigurationError as e:
        print(f"❌ Invalid configuration: {e}")
        sys.exit(1)

    securities = generate_securities(security_count, periods, seed=config.seed)
    gp = GeneticProgram(config, securities)
    gp.run()

    print(f"\n🏁 Best fitness: {gp.best_fitness}")
    print(f"   Rule: {gp.best}")


if __name__ == "__main__":
    main()
