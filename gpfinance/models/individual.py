"""
Individual contract consumed by the generational loop.

The loop only relies on three things from an evolved candidate: it can be
measured against the securities, it exposes the resulting fitness, and it
can be deep-copied. Concrete program representations live elsewhere
(see ``gpfinance.rules``).
"""

import copy
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

if TYPE_CHECKING:
    from ..data.security import Security


class Individual(ABC):
    """An evolved candidate with a cached fitness."""

    def __init__(self) -> None:
        self.fitness: Optional[float] = None
        self.generation: Optional[int] = None

    @property
    def is_measured(self) -> bool:
        """True when fitness reflects the current structure."""
        return self.fitness is not None

    def measure(self, generation: int, securities: Sequence["Security"]) -> float:
        """
        Compute fitness against ``securities`` and stamp ``generation``.

        Fitness is only recomputed when the structure changed since the
        last measurement; otherwise the cached value is re-stamped.
        """
        if self.fitness is None:
            self.fitness = self.evaluate(securities)
        self.generation = generation
        return self.fitness

    def invalidate(self) -> None:
        """Discard fitness after a structural change."""
        self.fitness = None
        self.generation = None

    def clone(self) -> "Individual":
        """Independent deep copy, fitness included."""
        return copy.deepcopy(self)

    @abstractmethod
    def evaluate(self, securities: Sequence["Security"]) -> float:
        """Compute raw fitness for the current structure."""
        pass


def fitness_key(individual: Individual) -> float:
    """Sort key placing higher fitness first and unmeasured individuals last."""
    if individual.fitness is None:
        return float("inf")
    return -individual.fitness


def sort_by_descending_fitness(population: Iterable[Individual]) -> list[Individual]:
    """
    Return a new list ordered best first.

    Ties keep their relative order from ``population`` (stable sort).
    """
    return sorted(population, key=fitness_key)


def best_individual(population: Sequence[Individual]) -> Optional[Individual]:
    """Best individual of ``population``, or None when it is empty."""
    if not population:
        return None
    return min(population, key=fitness_key)
