"""Base classes for the pluggable search operators."""

import random
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..models.individual import Individual
from ..models.run import AnalysisType


class SearchStrategy(ABC):
    """Common state for strategies: a name and a random source."""

    name: str = "strategy"

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()


class InitializationStrategy(SearchStrategy):
    """Produces the starting population."""

    @abstractmethod
    def init(self, population_size: int, analysis_type: AnalysisType) -> list[Individual]:
        """
        Create ``population_size`` fresh, unmeasured individuals.

        Args:
            population_size: Number of individuals to create
            analysis_type: Indicator family the rules are built from

        Returns:
            New list of individuals
        """
        pass


class SelectionStrategy(SearchStrategy):
    """Reduces or reshapes a population by fitness."""

    @abstractmethod
    def select(self, population: Sequence[Individual], n: int) -> list[Individual]:
        """
        Choose ``n`` reproduction candidates.

        Args:
            population: Measured individuals to choose from
            n: Number of candidates

        Returns:
            Clones of the chosen individuals
        """
        pass

    def select_dynamic(
        self,
        population: Sequence[Individual],
        n: int,
        progress: float
    ) -> list[Individual]:
        """
        Choose exactly ``n`` survivors for the next generation.

        Args:
            population: Measured survivor pool
            n: Size of the next generation
            progress: Fraction of the run completed, in [0, 1)

        Returns:
            Clones of the surviving individuals
        """
        return self.select(population, n)


class CrossoverStrategy(SearchStrategy):
    """Recombines pairs of candidates into offspring."""

    @abstractmethod
    def crossover(self, candidates: Sequence[Individual], progress: float) -> list[Individual]:
        """
        Produce offspring from ``candidates``.

        Args:
            candidates: Parents in pairing order
            progress: Fraction of the run completed, in [0, 1)

        Returns:
            Offspring, one per candidate
        """
        pass


class MutationStrategy(SearchStrategy):
    """Applies mutation operators to offspring."""

    @abstractmethod
    def mutate(self, individuals: Sequence[Individual], progress: float) -> list[Individual]:
        """
        Produce mutated clones of ``individuals``.

        Args:
            individuals: Offspring to mutate; never modified
            progress: Fraction of the run completed, in [0, 1)

        Returns:
            Mutated clones, one per input individual
        """
        pass
