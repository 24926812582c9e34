"""
Annealed parameter schedules.

Every rate used by the search operators moves linearly from an initial
value to a final value as the run progresses from generation 0 towards
the last generation.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Sequence


def anneal(initial: float, final: float, progress: float) -> float:
    """Linearly interpolate between ``initial`` and ``final``.

    ``progress`` is the fraction of the run completed, in [0, 1]. The
    endpoints are returned exactly.
    """
    if progress == 0:
        return initial
    if progress == 1:
        return final
    return initial + (final - initial) * progress


@dataclass(frozen=True)
class RateSchedule:
    """A rate annealed from ``initial`` to ``final``."""
    initial: float
    final: float

    def rate(self, progress: float) -> float:
        return anneal(self.initial, self.final, progress)


class MutationOperator(int, Enum):
    """Tree mutation operators, in their fixed order of application."""
    GROW = 0
    TRUNCATE = 1
    INDICATOR = 2
    LEAF = 3
    INEQUALITY = 4
    GAUSS = 5


NUM_MUTATIONS = len(MutationOperator)


@dataclass(frozen=True)
class MutationSchedule:
    """One rate schedule per mutation operator."""
    schedules: tuple[RateSchedule, ...]

    def __post_init__(self) -> None:
        if len(self.schedules) != NUM_MUTATIONS:
            raise ValueError(
                f"Expected {NUM_MUTATIONS} mutation schedules, got {len(self.schedules)}"
            )

    @classmethod
    def from_rates(cls, initial: Sequence[float], final: Sequence[float]) -> "MutationSchedule":
        """Pair initial and final rates operator by operator."""
        return cls(tuple(RateSchedule(i, f) for i, f in zip(initial, final, strict=True)))

    def rate(self, operator: MutationOperator, progress: float) -> float:
        return self.schedules[operator].rate(progress)

    def rates(self, progress: float) -> dict[MutationOperator, float]:
        """All operator rates at the given progress."""
        return {op: self.rate(op, progress) for op in MutationOperator}

    def __iter__(self) -> Iterator[RateSchedule]:
        return iter(self.schedules)

    @property
    def initial(self) -> tuple[float, ...]:
        return tuple(s.initial for s in self.schedules)

    @property
    def final(self) -> tuple[float, ...]:
        return tuple(s.final for s in self.schedules)
