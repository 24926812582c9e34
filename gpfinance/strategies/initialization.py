"""Ramped half-and-half population initialization."""

import random
from typing import Optional

from ..logging.config import get_logger
from ..models.run import AnalysisType
from ..rules.individual import TradingRuleIndividual
from .base import InitializationStrategy

logger = get_logger(__name__)


class RampedInitializationStrategy(InitializationStrategy):
    """
    Builds trees whose depth ramps from ``min_depth`` to ``max_depth``.

    Consecutive individuals alternate between the full method (every branch
    reaches the target depth) and the grow method (branches may stop early),
    so the starting population covers a range of shapes and sizes.
    """

    name = "ramped"

    def __init__(
        self,
        min_depth: int = 2,
        max_depth: int = 5,
        max_tree_depth: int = 8,
        rng: Optional[random.Random] = None
    ):
        super().__init__(rng)
        if min_depth < 1 or max_depth < min_depth:
            raise ValueError(f"Invalid depth ramp {min_depth}..{max_depth}")
        self.min_depth = min_depth
        self.max_depth = max_depth
        self.max_tree_depth = max(max_tree_depth, max_depth)

    def init(self, population_size: int, analysis_type: AnalysisType) -> list[TradingRuleIndividual]:
        if population_size < 1:
            raise ValueError(f"population_size must be at least 1, got {population_size}")

        depths = range(self.min_depth, self.max_depth + 1)
        population = []
        for i in range(population_size):
            depth = depths[i % len(depths)]
            full = (i // len(depths)) % 2 == 0
            population.append(TradingRuleIndividual.generate(
                self.rng, analysis_type, depth, self.max_tree_depth, full=full
            ))

        logger.debug(
            "Initialized population",
            population_size=population_size,
            analysis_type=analysis_type.value,
            depth_range=(self.min_depth, self.max_depth),
        )
        return population
