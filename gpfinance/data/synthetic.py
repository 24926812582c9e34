"""
Synthetic security generator.

Produces random-walk prices with indicator series drawn inside each
indicator's nominal range. Used for demos, smoke runs and tests when no
real market data is loaded.
"""

import math
import random
from typing import Optional

from ..models.run import AnalysisType
from ..rules.indicators import indicators_for
from .security import Security


def generate_security(
    symbol: str,
    periods: int = 250,
    rng: Optional[random.Random] = None,
    analysis_types: tuple[AnalysisType, ...] = (AnalysisType.FUNDAMENTAL, AnalysisType.TECHNICAL),
    start_price: float = 100.0,
    volatility: float = 0.02
) -> Security:
    """Random-walk security carrying every indicator of ``analysis_types``."""
    rng = rng or random.Random()

    prices = [start_price]
    for _ in range(periods - 1):
        prices.append(prices[-1] * math.exp(rng.gauss(0.0, volatility)))

    indicators = {}
    for analysis_type in analysis_types:
        for indicator in indicators_for(analysis_type):
            # Bounded random walk inside the nominal range
            value = rng.uniform(indicator.low, indicator.high)
            series = []
            for _ in range(periods):
                value += rng.gauss(0.0, 0.05 * indicator.span)
                value = min(max(value, indicator.low), indicator.high)
                series.append(value)
            indicators[indicator.name] = series

    return Security(symbol=symbol, prices=tuple(prices), indicators=indicators)


def generate_securities(count: int, periods: int = 250, seed: Optional[int] = None) -> list[Security]:
    """``count`` synthetic securities named SYN000, SYN001, ..."""
    rng = random.Random(seed)
    return [generate_security(f"SYN{i:03d}", periods, rng) for i in range(count)]
