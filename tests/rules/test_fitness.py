"""Tests for the backtest fitness measure."""

import pytest

from gpfinance.data.security import Security
from gpfinance.errors import MeasurementError
from gpfinance.models.run import AnalysisType
from gpfinance.rules.fitness import backtest, measure_fitness
from gpfinance.rules.indicators import indicators_for
from gpfinance.rules.individual import TradingRuleIndividual
from gpfinance.rules.tree import (
    DecisionNode,
    Inequality,
    Signal,
    SignalNode,
    TradingRuleTree,
)

TECHNICAL = indicators_for(AnalysisType.TECHNICAL)


def constant_rule(signal: Signal) -> TradingRuleTree:
    return TradingRuleTree(SignalNode(signal), TECHNICAL, max_depth=4)


@pytest.fixture
def rising_security() -> Security:
    return Security(symbol="UP", prices=(100.0, 110.0, 121.0), indicators={"rsi": (50.0, 50.0, 50.0)})


class TestBacktest:
    """Test suite for the long/flat backtest."""

    def test_always_long(self, rising_security: Security) -> None:
        assert backtest(constant_rule(Signal.BUY), rising_security) == pytest.approx(0.21)

    @pytest.mark.parametrize("signal", [Signal.SELL, Signal.HOLD])
    def test_never_long(self, rising_security: Security, signal: Signal) -> None:
        assert backtest(constant_rule(signal), rising_security) == 0.0

    def test_rule_enters_and_exits(self, rsi_security: Security) -> None:
        """Buys while RSI is low, sells when it is high."""
        tree = TradingRuleTree(
            DecisionNode("rsi", Inequality.LESS, 50.0, SignalNode(Signal.BUY), SignalNode(Signal.SELL)),
            TECHNICAL,
            max_depth=4,
        )
        assert backtest(tree, rsi_security) == pytest.approx(0.1)

    def test_hold_keeps_position(self) -> None:
        security = Security(symbol="HOLD", prices=(100.0, 110.0, 121.0), indicators={"rsi": (10.0, 90.0, 90.0)})
        tree = TradingRuleTree(
            DecisionNode("rsi", Inequality.LESS, 50.0, SignalNode(Signal.BUY), SignalNode(Signal.HOLD)),
            TECHNICAL,
            max_depth=4,
        )
        assert backtest(tree, security) == pytest.approx(0.21)

    def test_single_period(self) -> None:
        security = Security(symbol="ONE", prices=(100.0,))
        assert backtest(constant_rule(Signal.BUY), security) == 0.0


class TestMeasureFitness:
    """Test suite for fitness over a security set."""

    def test_mean_over_securities(self, rising_security: Security) -> None:
        flat = Security(symbol="FLAT", prices=(100.0, 100.0, 100.0))
        assert measure_fitness(constant_rule(Signal.BUY), [rising_security, flat]) == pytest.approx(0.105)

    def test_no_securities(self) -> None:
        assert measure_fitness(constant_rule(Signal.BUY), []) == 0.0

    def test_missing_indicator(self, rising_security: Security) -> None:
        tree = TradingRuleTree(
            DecisionNode("macd", Inequality.LESS, 0.0, SignalNode(Signal.BUY), SignalNode(Signal.SELL)),
            TECHNICAL,
            max_depth=4,
        )
        individual = TradingRuleIndividual(tree, AnalysisType.TECHNICAL)

        with pytest.raises(MeasurementError) as exc_info:
            individual.measure(3, [rising_security])

        assert exc_info.value.security == "UP"
        assert exc_info.value.generation == 3
        assert individual.fitness is None
