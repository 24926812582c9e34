"""Tests for the security data model and providers."""

import dataclasses

import pytest

from gpfinance.data.security import InMemorySecurityProvider, Security
from gpfinance.data.synthetic import generate_securities, generate_security
from gpfinance.errors import MeasurementError
from gpfinance.models.run import AnalysisType
from gpfinance.rules.indicators import indicators_for


class TestSecurity:
    """Test suite for Security."""

    def test_series_are_frozen(self) -> None:
        security = Security(symbol="ABC", prices=[1, 2, 3], indicators={"rsi": [10, 20, 30]})

        assert security.prices == (1.0, 2.0, 3.0)
        assert security.indicators["rsi"] == (10.0, 20.0, 30.0)
        assert len(security) == 3

        with pytest.raises(TypeError):
            security.indicators["rsi"] = (0.0, 0.0, 0.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            security.prices = (4.0,)

    def test_source_dict_not_shared(self) -> None:
        source = {"rsi": [10, 20]}
        security = Security(symbol="ABC", prices=[1, 2], indicators=source)
        source["macd"] = [0, 0]
        assert not security.has_indicator("macd")

    def test_misaligned_indicator(self) -> None:
        with pytest.raises(ValueError, match="rsi"):
            Security(symbol="ABC", prices=[1, 2, 3], indicators={"rsi": [10, 20]})

    def test_indicator_lookup(self) -> None:
        security = Security(symbol="ABC", prices=[1, 2], indicators={"rsi": [10, 20]})
        assert security.indicator("rsi", 1) == 20.0
        with pytest.raises(MeasurementError):
            security.indicator("macd", 0)


class TestProviders:
    """Test suite for security providers and synthetic data."""

    def test_in_memory_provider(self) -> None:
        securities = generate_securities(2, periods=10, seed=1)
        provider = InMemorySecurityProvider(securities)
        assert list(provider.get_securities()) == securities
        assert InMemorySecurityProvider().get_securities() == ()

    def test_synthetic_security_shape(self) -> None:
        security = generate_security("SYN", periods=30)
        assert len(security) == 30
        assert all(price > 0 for price in security.prices)
        for analysis_type in AnalysisType:
            for indicator in indicators_for(analysis_type):
                values = security.indicators[indicator.name]
                assert len(values) == 30
                assert all(indicator.low <= v <= indicator.high for v in values)

    def test_synthetic_securities_are_reproducible(self) -> None:
        first = generate_securities(2, periods=20, seed=3)
        second = generate_securities(2, periods=20, seed=3)
        assert [s.prices for s in first] == [s.prices for s in second]
        assert [s.symbol for s in first] == ["SYN000", "SYN001"]
