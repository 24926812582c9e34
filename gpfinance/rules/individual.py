"""Trading-rule individual evolved by the engine."""

import random
from typing import TYPE_CHECKING, Sequence

from ..errors import MeasurementError
from ..models.individual import Individual
from ..models.run import AnalysisType
from .fitness import measure_fitness
from .indicators import indicators_for
from .tree import TradingRuleTree, swap_subtrees

if TYPE_CHECKING:
    from ..data.security import Security


class TradingRuleIndividual(Individual):
    """A decision-tree trading rule with cached fitness."""

    def __init__(self, tree: TradingRuleTree, analysis_type: AnalysisType):
        super().__init__()
        self.tree = tree
        self.analysis_type = analysis_type

    @classmethod
    def generate(
        cls,
        rng: random.Random,
        analysis_type: AnalysisType,
        depth: int,
        max_depth: int,
        full: bool = False
    ) -> "TradingRuleIndividual":
        tree = TradingRuleTree.generate(rng, indicators_for(analysis_type), depth, max_depth, full)
        return cls(tree, analysis_type)

    def evaluate(self, securities: Sequence["Security"]) -> float:
        try:
            return measure_fitness(self.tree, securities)
        except MeasurementError:
            raise
        except (ArithmeticError, IndexError) as e:
            raise MeasurementError(f"Backtest failed: {e}") from e

    def measure(self, generation: int, securities: Sequence["Security"]) -> float:
        try:
            return super().measure(generation, securities)
        except MeasurementError as e:
            e.generation = generation
            raise

    # Structural operators; each invalidates fitness when it changes the tree

    def _apply(self, changed: bool) -> bool:
        if changed:
            self.invalidate()
        return changed

    def grow(self, rng: random.Random, grow_depth: int = 2) -> bool:
        return self._apply(self.tree.grow(rng, grow_depth))

    def truncate(self, rng: random.Random) -> bool:
        return self._apply(self.tree.truncate(rng))

    def swap_indicator(self, rng: random.Random) -> bool:
        return self._apply(self.tree.swap_indicator(rng))

    def replace_leaf(self, rng: random.Random) -> bool:
        return self._apply(self.tree.replace_leaf(rng))

    def flip_inequality(self, rng: random.Random) -> bool:
        return self._apply(self.tree.flip_inequality(rng))

    def perturb_threshold(self, rng: random.Random) -> bool:
        return self._apply(self.tree.perturb_threshold(rng))

    def recombine(self, other: "TradingRuleIndividual", rng: random.Random) -> None:
        """Exchange a random subtree with ``other``, in place on both."""
        swap_subtrees(self.tree, other.tree, rng)
        self.invalidate()
        other.invalidate()

    def depth(self) -> int:
        return self.tree.depth()

    def __repr__(self) -> str:
        return (
            f"TradingRuleIndividual(fitness={self.fitness}, generation={self.generation}, "
            f"rule={self.tree})"
        )
