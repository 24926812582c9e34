"""
Reference fitness measure: a long/flat backtest.

BUY opens a long position, SELL closes it, HOLD keeps whatever position is
open. The rule is evaluated at each period and the position earns the
return to the next period. Fitness is the mean compounded return across
all securities.
"""

from typing import TYPE_CHECKING, Sequence

from .tree import Signal

if TYPE_CHECKING:
    from ..data.security import Security
    from .tree import TradingRuleTree


def backtest(tree: "TradingRuleTree", security: "Security") -> float:
    """Compounded return of trading ``security`` with ``tree``."""
    prices = security.prices
    equity = 1.0
    long = False

    for period in range(len(prices) - 1):
        signal = tree.evaluate(security, period)
        if signal is Signal.BUY:
            long = True
        elif signal is Signal.SELL:
            long = False

        if long and prices[period] > 0:
            equity *= prices[period + 1] / prices[period]

    return equity - 1.0


def measure_fitness(tree: "TradingRuleTree", securities: Sequence["Security"]) -> float:
    """Mean backtest return over ``securities``; 0.0 when there are none."""
    if not securities:
        return 0.0
    return sum(backtest(tree, security) for security in securities) / len(securities)
