"""Pytest configuration and shared fixtures."""

import random
from typing import Callable, Optional, Sequence

import pytest

from gpfinance.data.security import Security
from gpfinance.data.synthetic import generate_securities
from gpfinance.models.individual import Individual


class StubIndividual(Individual):
    """Individual with a preset fitness value and a label for identification."""

    def __init__(self, label: str, value: float):
        super().__init__()
        self.label = label
        self.value = value
        self.evaluations = 0

    def evaluate(self, securities: Sequence[Security]) -> float:
        self.evaluations += 1
        return self.value


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def securities() -> list[Security]:
    """Small synthetic security set carrying all indicators."""
    return generate_securities(count=2, periods=40, seed=7)


@pytest.fixture
def rsi_security() -> Security:
    """Three-period security with a known RSI series."""
    return Security(
        symbol="TEST",
        prices=(100.0, 110.0, 99.0),
        indicators={"rsi": (10.0, 90.0, 10.0)},
    )


@pytest.fixture
def make_individuals() -> Callable[..., list[StubIndividual]]:
    """Factory for measured stub individuals with the given fitnesses."""
    def factory(fitnesses: Sequence[Optional[float]], generation: int = 0) -> list[StubIndividual]:
        individuals = []
        for i, fitness in enumerate(fitnesses):
            individual = StubIndividual(f"ind-{i}", fitness if fitness is not None else 0.0)
            if fitness is not None:
                individual.measure(generation, [])
            individuals.append(individual)
        return individuals
    return factory
