"""
Selection strategies for reproduction and survival.

All strategies return clones, never the objects they were given.
"""

import random
from typing import Optional, Sequence

from ..errors import StrategyContractError
from ..logging.config import get_logger
from ..models.individual import Individual, sort_by_descending_fitness
from ..models.run import AnalysisType
from ..models.schedule import RateSchedule
from .base import InitializationStrategy, SelectionStrategy

logger = get_logger(__name__)


def _clones(individuals: Sequence[Individual]) -> list[Individual]:
    return [individual.clone() for individual in individuals]


def _require_pool(strategy: SelectionStrategy, population: Sequence[Individual], n: int) -> None:
    """Survivor selection must be able to return exactly ``n`` individuals."""
    if n < 0 or len(population) < n:
        raise StrategyContractError(
            f"{strategy.name} selection cannot choose {n} survivors from {len(population)}",
            strategy_name=strategy.name,
            expected_size=n,
            actual_size=len(population),
        )


class RandomSelectionStrategy(SelectionStrategy):
    """Uniform selection without replacement; ignores fitness."""

    name = "random"

    def select(self, population: Sequence[Individual], n: int) -> list[Individual]:
        return _clones(self.rng.sample(list(population), min(n, len(population))))

    def select_dynamic(
        self,
        population: Sequence[Individual],
        n: int,
        progress: float
    ) -> list[Individual]:
        _require_pool(self, population, n)
        return self.select(population, n)


class RankBasedSelectionStrategy(SelectionStrategy):
    """
    Fitness-rank proportional selection without replacement.

    After sorting best first, the individual at rank ``r`` (0 = best) is
    drawn with weight ``1 / (r + 1)``. Weights are renormalized over the
    individuals not yet chosen.
    """

    name = "rankbased"

    @staticmethod
    def rank_weight(rank: int) -> float:
        return 1.0 / (rank + 1)

    def select(self, population: Sequence[Individual], n: int) -> list[Individual]:
        ranked = sort_by_descending_fitness(population)
        weights = [self.rank_weight(rank) for rank in range(len(ranked))]
        chosen = []

        for _ in range(min(n, len(ranked))):
            index = self._weighted_index(weights)
            chosen.append(ranked.pop(index))
            weights.pop(index)

        return _clones(chosen)

    def select_dynamic(
        self,
        population: Sequence[Individual],
        n: int,
        progress: float
    ) -> list[Individual]:
        _require_pool(self, population, n)
        return self.select(population, n)

    def _weighted_index(self, weights: list[float]) -> int:
        target = self.rng.random() * sum(weights)
        cumulative = 0.0
        for index, weight in enumerate(weights):
            cumulative += weight
            if target < cumulative:
                return index
        return len(weights) - 1


class MuLambdaSelectionStrategy(SelectionStrategy):
    """Truncation selection: the best ``n`` of the pool."""

    name = "mulambda"

    def select(self, population: Sequence[Individual], n: int) -> list[Individual]:
        return _clones(sort_by_descending_fitness(population)[:n])

    def select_dynamic(
        self,
        population: Sequence[Individual],
        n: int,
        progress: float
    ) -> list[Individual]:
        _require_pool(self, population, n)
        return self.select(population, n)


class StochasticMuLambdaSelectionStrategy(MuLambdaSelectionStrategy):
    """
    Truncation selection with elitism and stochastic restarts.

    Survivors are the best ``n`` of the pool. Then, with probability
    ``restart_schedule.rate(progress)``, the worst
    ``floor(restart_fraction * (n - 1))`` survivors are replaced by fresh
    individuals from ``initializer``. The best survivor is never replaced.
    """

    name = "stochasticmulambda"

    def __init__(
        self,
        restart_schedule: RateSchedule,
        initializer: InitializationStrategy,
        analysis_type: AnalysisType,
        restart_fraction: float = 0.5,
        rng: Optional[random.Random] = None
    ):
        super().__init__(rng)
        self.restart_schedule = restart_schedule
        self.initializer = initializer
        self.analysis_type = analysis_type
        self.restart_fraction = restart_fraction
        self.restart_count = 0

    def select_dynamic(
        self,
        population: Sequence[Individual],
        n: int,
        progress: float
    ) -> list[Individual]:
        survivors = super().select_dynamic(population, n, progress)

        if self.rng.random() >= self.restart_schedule.rate(progress):
            return survivors

        replaced = int(self.restart_fraction * (n - 1))
        if replaced <= 0:
            return survivors

        fresh = self.initializer.init(replaced, self.analysis_type)
        self.restart_count += 1
        logger.debug(
            "Restarted part of the population",
            replaced=replaced,
            progress=progress,
            restart_count=self.restart_count,
        )
        return survivors[:n - replaced] + fresh
