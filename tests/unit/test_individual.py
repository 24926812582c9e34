"""Unit tests for the Individual contract and fitness ordering."""

from gpfinance.models.individual import best_individual, sort_by_descending_fitness
from gpfinance.models.run import AnalysisType
from gpfinance.rules.individual import TradingRuleIndividual
from gpfinance.rules.indicators import indicators_for
from gpfinance.rules.tree import (
    DecisionNode,
    Inequality,
    Signal,
    SignalNode,
    TradingRuleTree,
)


def rsi_rule() -> TradingRuleIndividual:
    tree = TradingRuleTree(
        DecisionNode("rsi", Inequality.LESS, 50.0, SignalNode(Signal.BUY), SignalNode(Signal.SELL)),
        indicators_for(AnalysisType.TECHNICAL),
        max_depth=4,
    )
    return TradingRuleIndividual(tree, AnalysisType.TECHNICAL)


class TestMeasurement:
    """Test suite for measurement and fitness caching."""

    def test_unmeasured_by_default(self, make_individuals) -> None:
        individual = make_individuals([None])[0]
        assert individual.fitness is None
        assert individual.generation is None
        assert not individual.is_measured

    def test_measure_stamps_generation(self, make_individuals) -> None:
        individual = make_individuals([None])[0]
        individual.value = 0.7

        assert individual.measure(3, []) == 0.7
        assert individual.fitness == 0.7
        assert individual.generation == 3

    def test_measure_is_idempotent(self, make_individuals) -> None:
        """Re-measuring an unchanged individual does not recompute fitness."""
        individual = make_individuals([0.5])[0]
        evaluations = individual.evaluations

        individual.measure(0, [])
        individual.measure(1, [])

        assert individual.evaluations == evaluations
        assert individual.generation == 1

    def test_invalidate_forces_recompute(self, make_individuals) -> None:
        individual = make_individuals([0.5])[0]
        individual.invalidate()
        assert individual.fitness is None

        individual.measure(2, [])
        assert individual.evaluations == 2
        assert individual.fitness == 0.5

    def test_structural_change_invalidates(self, rng, rsi_security) -> None:
        individual = rsi_rule()
        individual.measure(0, [rsi_security])
        assert individual.is_measured

        assert individual.flip_inequality(rng)
        assert individual.fitness is None
        assert individual.generation is None


class TestClone:
    """Test suite for deep copies."""

    def test_clone_keeps_fitness_and_structure(self, rsi_security) -> None:
        individual = rsi_rule()
        individual.measure(4, [rsi_security])

        clone = individual.clone()

        assert clone is not individual
        assert clone.fitness == individual.fitness
        assert clone.generation == 4
        assert str(clone.tree) == str(individual.tree)

    def test_clone_is_independent(self, rng) -> None:
        """Mutating the clone must not alter the source."""
        individual = rsi_rule()
        before = str(individual.tree)

        clone = individual.clone()
        clone.flip_inequality(rng)
        clone.replace_leaf(rng)
        clone.perturb_threshold(rng)

        assert str(individual.tree) == before
        assert str(clone.tree) != before
        assert clone.tree.root is not individual.tree.root


class TestOrdering:
    """Test suite for descending-fitness ordering."""

    def test_sort_descending(self, make_individuals) -> None:
        population = make_individuals([0.1, 0.9, -0.5, 0.4])
        ordered = sort_by_descending_fitness(population)
        assert [i.fitness for i in ordered] == [0.9, 0.4, 0.1, -0.5]

    def test_sort_returns_new_list(self, make_individuals) -> None:
        population = make_individuals([0.1, 0.9])
        ordered = sort_by_descending_fitness(population)
        assert ordered is not population
        assert [i.fitness for i in population] == [0.1, 0.9]

    def test_ties_keep_insertion_order(self, make_individuals) -> None:
        population = make_individuals([0.5, 0.5, 0.7, 0.5])
        ordered = sort_by_descending_fitness(population)
        assert [i.label for i in ordered] == ["ind-2", "ind-0", "ind-1", "ind-3"]

    def test_unmeasured_sort_last(self, make_individuals) -> None:
        population = make_individuals([None, -10.0, 0.3])
        ordered = sort_by_descending_fitness(population)
        assert [i.label for i in ordered] == ["ind-2", "ind-1", "ind-0"]

    def test_best_individual(self, make_individuals) -> None:
        population = make_individuals([0.2, 0.8, 0.8])
        assert best_individual(population).label == "ind-1"
        assert best_individual([]) is None
