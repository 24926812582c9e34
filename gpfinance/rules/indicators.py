"""Indicator catalogue for fundamental and technical analysis."""

from dataclasses import dataclass

from ..models.run import AnalysisType


@dataclass(frozen=True)
class Indicator:
    """An indicator a decision node can test, with its nominal value range."""
    name: str
    low: float
    high: float

    @property
    def span(self) -> float:
        return self.high - self.low


FUNDAMENTAL_INDICATORS: tuple[Indicator, ...] = (
    Indicator("pe_ratio", 0.0, 60.0),           # Price / earnings
    Indicator("pb_ratio", 0.0, 10.0),           # Price / book
    Indicator("dividend_yield", 0.0, 0.12),
    Indicator("roe", -0.5, 0.5),                # Return on equity
    Indicator("roa", -0.3, 0.3),                # Return on assets
    Indicator("debt_to_equity", 0.0, 3.0),
    Indicator("current_ratio", 0.0, 5.0),
    Indicator("earnings_growth", -1.0, 1.0),
)

TECHNICAL_INDICATORS: tuple[Indicator, ...] = (
    Indicator("sma_ratio", 0.8, 1.2),           # Price / simple moving average
    Indicator("ema_ratio", 0.8, 1.2),           # Price / exponential moving average
    Indicator("rsi", 0.0, 100.0),
    Indicator("macd", -5.0, 5.0),
    Indicator("momentum", -0.3, 0.3),
    Indicator("rate_of_change", -0.3, 0.3),
    Indicator("bollinger_pct", -0.5, 1.5),
    Indicator("volume_ratio", 0.0, 3.0),
)

_CATALOGUE = {
    AnalysisType.FUNDAMENTAL: FUNDAMENTAL_INDICATORS,
    AnalysisType.TECHNICAL: TECHNICAL_INDICATORS,
}

_BY_NAME = {ind.name: ind for ind in FUNDAMENTAL_INDICATORS + TECHNICAL_INDICATORS}


def indicators_for(analysis_type: AnalysisType) -> tuple[Indicator, ...]:
    """Indicators available to rules of the given analysis type."""
    return _CATALOGUE[AnalysisType(analysis_type)]


def get_indicator(name: str) -> Indicator:
    """Look up an indicator by name."""
    return _BY_NAME[name]
