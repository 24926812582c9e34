"""Default configuration parameters for a GP run."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RunParams:
    """Generational loop parameters."""
    generations: int = 2000
    population: int = 100
    analysis_type: str = "fundamental"           # "fundamental" or anything else for technical
    survivor_pool: str = "mutated"               # "mutated" or "all"
    seed: Optional[int] = None                   # None draws a fresh seed


@dataclass(frozen=True)
class CrossoverParams:
    """Crossover probability schedule."""
    initial: float = 0.6
    final: float = 0.4


@dataclass(frozen=True)
class MutationParams:
    """Mutation rate schedules: grow, truncate, indicator, leaf, inequality, gauss."""
    initial: tuple[float, ...] = (0.5, 0.0, 0.75, 0.85, 0.75, 0.95)
    final: tuple[float, ...] = (0.1, 0.3, 0.3, 0.5, 0.3, 0.4)


@dataclass(frozen=True)
class RestartParams:
    """Stochastic restart schedule for survivor selection."""
    initial: float = 0.4                         # Early-generation restart probability
    final: float = 0.02                          # Late-generation restart probability
    fraction: float = 0.5                        # Share of non-elite survivors replaced


@dataclass(frozen=True)
class StrategyParams:
    """Strategy names per role."""
    population_selection: str = "stochasticmulambda"
    reproduction_selection: str = "rankbased"


@dataclass(frozen=True)
class TreeParams:
    """Trading-rule tree shape limits."""
    min_init_depth: int = 2
    max_init_depth: int = 5
    max_depth: int = 8
    grow_depth: int = 2


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    run: RunParams
    crossover: CrossoverParams
    mutation: MutationParams
    restart: RestartParams
    strategies: StrategyParams
    tree: TreeParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        run=RunParams(),
        crossover=CrossoverParams(),
        mutation=MutationParams(),
        restart=RestartParams(),
        strategies=StrategyParams(),
        tree=TreeParams(),
    )
