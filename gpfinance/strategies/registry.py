"""
Strategy registry.

Maps strategy names to constructors. Selection names that are not
registered fall back to random selection with a warning instead of an
error, so a typo in a job description degrades search quality but never
aborts a run.
"""

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from ..logging.config import get_logger, log_strategy_fallback
from .base import (
    CrossoverStrategy,
    InitializationStrategy,
    MutationStrategy,
    SelectionStrategy,
)
from .crossover import SexualCrossoverStrategy
from .initialization import RampedInitializationStrategy
from .mutation import TreeMutationStrategy
from .selection import (
    MuLambdaSelectionStrategy,
    RandomSelectionStrategy,
    RankBasedSelectionStrategy,
    StochasticMuLambdaSelectionStrategy,
)

if TYPE_CHECKING:
    from ..config.options import RunConfig

logger = get_logger(__name__)

DEFAULT_SELECTION = "random"

SelectionFactory = Callable[
    ["RunConfig", random.Random, InitializationStrategy], SelectionStrategy
]

SELECTION_STRATEGIES: dict[str, SelectionFactory] = {
    "random": lambda config, rng, init: RandomSelectionStrategy(rng),
    "rankbased": lambda config, rng, init: RankBasedSelectionStrategy(rng),
    "mulambda": lambda config, rng, init: MuLambdaSelectionStrategy(rng),
    "stochasticmulambda": lambda config, rng, init: StochasticMuLambdaSelectionStrategy(
        config.restart, init, config.analysis_type, config.restart_fraction, rng
    ),
}


@dataclass(frozen=True)
class StrategySet:
    """The strategies driving one run."""
    initialization: InitializationStrategy
    population_selection: SelectionStrategy
    reproduction_selection: SelectionStrategy
    crossover: CrossoverStrategy
    mutation: MutationStrategy


def build_initialization_strategy(config: "RunConfig", rng: random.Random) -> InitializationStrategy:
    return RampedInitializationStrategy(
        min_depth=config.tree.min_init_depth,
        max_depth=config.tree.max_init_depth,
        max_tree_depth=config.tree.max_depth,
        rng=rng,
    )


def build_selection_strategy(
    name: str,
    role: str,
    config: "RunConfig",
    rng: random.Random,
    initializer: InitializationStrategy
) -> SelectionStrategy:
    """
    Build the selection strategy registered under ``name``.

    Unknown names build the random strategy and log a fallback warning.
    """
    factory = SELECTION_STRATEGIES.get(name)
    if factory is None:
        log_strategy_fallback(logger, role=role, requested=name, fallback=DEFAULT_SELECTION)
        factory = SELECTION_STRATEGIES[DEFAULT_SELECTION]
    return factory(config, rng, initializer)


def build_strategies(config: "RunConfig", rng: random.Random) -> StrategySet:
    """Build every strategy for ``config``, all sharing ``rng``."""
    initialization = build_initialization_strategy(config, rng)
    return StrategySet(
        initialization=initialization,
        population_selection=build_selection_strategy(
            config.population_selection, "population_selection", config, rng, initialization
        ),
        reproduction_selection=build_selection_strategy(
            config.reproduction_selection, "reproduction_selection", config, rng, initialization
        ),
        crossover=SexualCrossoverStrategy(config.crossover, rng),
        mutation=TreeMutationStrategy(config.mutation, config.tree.grow_depth, rng),
    )
