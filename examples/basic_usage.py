#!/usr/bin/env python3
"""
Basic Usage Example - GPFinance Genetic Programming Engine

This script demonstrates the basic usage of the GP engine with synthetic
security data. It shows how to:
- Build a run from an option mapping
- Run the generational loop
- Inspect the best rule and the per-generation history

Run: python examples/basic_usage.py
"""

from gpfinance.data.synthetic import generate_securities
from gpfinance.engine import GeneticProgram
from gpfinance.logging.config import configure_logging


def main():
    """Run a short technical-analysis search."""
    configure_logging(level="INFO")

    securities = generate_securities(count=3, periods=200, seed=11)
    options = {
        "type": "technical",
        "generations": "100",
        "population": "30",
        "crossoverRate": "0.7:0.3",
        "seed": "11",
    }

    gp = GeneticProgram.from_options(options, securities)
    population = gp.run()

    print(f"\n📊 Final population size: {len(population)}")
    print(f"🏆 Best fitness: {gp.best_fitness:.4f}")
    print(f"   Rule: {gp.best.tree}")

    print("\n📈 Best fitness every 20 generations:")
    for summary in gp.history[::20]:
        print(f"  gen {summary.generation:4d}: best={summary.best_fitness:.4f} mean={summary.mean_fitness:.4f}")


if __name__ == "__main__":
    main()
