"""Tree mutation with independently annealed operator rates."""

import random
from typing import Optional, Sequence

from ..logging.config import get_logger
from ..models.schedule import MutationOperator, MutationSchedule
from ..rules.individual import TradingRuleIndividual
from .base import MutationStrategy

logger = get_logger(__name__)


class TreeMutationStrategy(MutationStrategy):
    """
    Applies the six tree mutation operators to clones of each individual.

    Operators run in ``MutationOperator`` order: grow, truncate,
    indicator swap, leaf replace, inequality flip, gaussian perturb. Each
    fires independently with its annealed rate, so an individual can get
    none, one or several mutations in a pass. One random draw is consumed
    per operator regardless of its rate.
    """

    name = "tree"

    def __init__(
        self,
        schedule: MutationSchedule,
        grow_depth: int = 2,
        rng: Optional[random.Random] = None
    ):
        super().__init__(rng)
        self.schedule = schedule
        self.grow_depth = grow_depth

    def mutate(
        self,
        individuals: Sequence[TradingRuleIndividual],
        progress: float
    ) -> list[TradingRuleIndividual]:
        rates = self.schedule.rates(progress)
        counts = dict.fromkeys(MutationOperator, 0)
        mutated = []

        for individual in individuals:
            child = individual.clone()
            for operator in MutationOperator:
                if self.rng.random() < rates[operator] and self._apply(child, operator):
                    counts[operator] += 1
            mutated.append(child)

        logger.debug(
            "Mutation complete",
            individuals=len(individuals),
            applied={op.name.lower(): count for op, count in counts.items()},
        )
        return mutated

    def _apply(self, child: TradingRuleIndividual, operator: MutationOperator) -> bool:
        if operator is MutationOperator.GROW:
            return child.grow(self.rng, self.grow_depth)
        if operator is MutationOperator.TRUNCATE:
            return child.truncate(self.rng)
        if operator is MutationOperator.INDICATOR:
            return child.swap_indicator(self.rng)
        if operator is MutationOperator.LEAF:
            return child.replace_leaf(self.rng)
        if operator is MutationOperator.INEQUALITY:
            return child.flip_inequality(self.rng)
        return child.perturb_threshold(self.rng)
