"""
Run lifecycle data models.

This module defines the enums and immutable records used by the
orchestrator to describe a run and its per-generation progress.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class AnalysisType(str, Enum):
    """Which indicator family trading rules are built from."""
    FUNDAMENTAL = "F"
    TECHNICAL = "T"

    @classmethod
    def from_option(cls, value: str) -> "AnalysisType":
        """Map an option string: ``fundamental`` selects F, anything else T."""
        return cls.FUNDAMENTAL if value == "fundamental" else cls.TECHNICAL


class SurvivorPool(str, Enum):
    """Which populations compete in survivor selection."""
    MUTATED = "mutated"    # previous generation + mutated offspring
    ALL = "all"            # previous generation + raw offspring + mutated offspring


class RunState(str, Enum):
    """Orchestrator lifecycle states."""
    UNINITIALIZED = "uninitialized"
    RUNNING = "running"
    COMPLETE = "complete"


@dataclass(frozen=True)
class GenerationSummary:
    """Fitness statistics of the population that survived a generation."""
    generation: int
    best_fitness: Optional[float]
    mean_fitness: Optional[float]
    worst_fitness: Optional[float]
    population_size: int
