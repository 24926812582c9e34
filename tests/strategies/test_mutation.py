"""Tests for tree mutation."""

import random
from unittest.mock import MagicMock

import pytest

from gpfinance.models.run import AnalysisType
from gpfinance.models.schedule import MutationSchedule, NUM_MUTATIONS
from gpfinance.rules.individual import TradingRuleIndividual
from gpfinance.strategies.mutation import TreeMutationStrategy


def schedule(initial: float, final: float) -> MutationSchedule:
    return MutationSchedule.from_rates((initial,) * NUM_MUTATIONS, (final,) * NUM_MUTATIONS)


@pytest.fixture
def population(rng: random.Random, securities) -> list[TradingRuleIndividual]:
    individuals = [
        TradingRuleIndividual.generate(rng, AnalysisType.TECHNICAL, depth=4, max_depth=8)
        for _ in range(6)
    ]
    for individual in individuals:
        individual.measure(0, securities)
    return individuals


class TestTreeMutation:
    """Test suite for TreeMutationStrategy."""

    @pytest.mark.parametrize("progress", [0.0, 0.5, 0.99])
    def test_zero_rates_copy_structure(self, rng: random.Random, population, progress: float) -> None:
        strategy = TreeMutationStrategy(schedule(0.0, 0.0), rng=rng)

        mutated = strategy.mutate(population, progress)

        assert len(mutated) == len(population)
        for original, child in zip(population, mutated):
            assert child is not original
            assert child.tree.root == original.tree.root
            assert child.fitness == original.fitness

    def test_inputs_are_never_modified(self, rng: random.Random, population) -> None:
        before = [str(individual.tree) for individual in population]
        strategy = TreeMutationStrategy(schedule(1.0, 1.0), rng=rng)

        strategy.mutate(population, 0.0)

        assert [str(individual.tree) for individual in population] == before
        assert all(individual.is_measured for individual in population)

    def test_full_rates_invalidate_fitness(self, rng: random.Random, population) -> None:
        strategy = TreeMutationStrategy(schedule(1.0, 1.0), rng=rng)

        mutated = strategy.mutate(population, 0.0)

        # Leaf replacement always changes the tree
        assert all(child.fitness is None for child in mutated)

    def test_final_rates_apply_at_end_of_run(self, rng: random.Random, population) -> None:
        strategy = TreeMutationStrategy(schedule(1.0, 0.0), rng=rng)

        mutated = strategy.mutate(population, 1.0)

        for original, child in zip(population, mutated):
            assert child.tree.root == original.tree.root

    def test_operator_order(self, rng: random.Random) -> None:
        child = MagicMock()
        individual = MagicMock()
        individual.clone.return_value = child
        strategy = TreeMutationStrategy(schedule(1.0, 1.0), grow_depth=3, rng=rng)

        assert strategy.mutate([individual], 0.0) == [child]

        assert [call[0] for call in child.method_calls] == [
            "grow",
            "truncate",
            "swap_indicator",
            "replace_leaf",
            "flip_inequality",
            "perturb_threshold",
        ]
        child.grow.assert_called_once_with(rng, 3)

    def test_one_draw_per_operator(self, population) -> None:
        """Operators with a zero rate still consume their draw."""
        rng = random.Random(99)
        TreeMutationStrategy(schedule(0.0, 0.0), rng=rng).mutate(population, 0.5)
        assert rng.getstate() == _advanced(99, len(population) * NUM_MUTATIONS)


def _advanced(seed: int, draws: int):
    rng = random.Random(seed)
    for _ in range(draws):
        rng.random()
    return rng.getstate()
