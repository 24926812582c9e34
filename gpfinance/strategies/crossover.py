"""Sexual (subtree-exchange) crossover."""

import random
from typing import Optional, Sequence

from ..logging.config import get_logger
from ..models.schedule import RateSchedule
from ..rules.individual import TradingRuleIndividual
from .base import CrossoverStrategy

logger = get_logger(__name__)


class SexualCrossoverStrategy(CrossoverStrategy):
    """
    Pairs candidates in order and exchanges a random subtree per pair.

    Candidates are paired (0, 1), (2, 3), ... Each pair recombines with
    probability ``schedule.rate(progress)``; otherwise both pass through as
    clones, as does a trailing unpaired candidate. A child deeper than its
    tree's depth limit is replaced by a clone of its parent. The output
    always has one individual per candidate.
    """

    name = "sexual"

    def __init__(self, schedule: RateSchedule, rng: Optional[random.Random] = None):
        super().__init__(rng)
        self.schedule = schedule

    def crossover(
        self,
        candidates: Sequence[TradingRuleIndividual],
        progress: float
    ) -> list[TradingRuleIndividual]:
        probability = self.schedule.rate(progress)
        offspring = []
        recombined = 0

        for i in range(0, len(candidates) - 1, 2):
            mother, father = candidates[i], candidates[i + 1]
            if self.rng.random() < probability:
                offspring.extend(self._recombine(mother, father))
                recombined += 1
            else:
                offspring.extend([mother.clone(), father.clone()])

        if len(candidates) % 2:
            offspring.append(candidates[-1].clone())

        logger.debug(
            "Crossover complete",
            candidates=len(candidates),
            pairs_recombined=recombined,
            probability=probability,
        )
        return offspring

    def _recombine(
        self,
        mother: TradingRuleIndividual,
        father: TradingRuleIndividual
    ) -> list[TradingRuleIndividual]:
        first, second = mother.clone(), father.clone()
        first.recombine(second, self.rng)

        if first.depth() > first.tree.max_depth:
            first = mother.clone()
        if second.depth() > second.tree.max_depth:
            second = father.clone()
        return [first, second]
