"""
Canonical security data model.

A security is the read-only measurement input shared by every individual
in a run. Instances are frozen and their series are stored as tuples so
nothing in the search can modify them.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Protocol, Sequence

from ..errors import MeasurementError


@dataclass(frozen=True)
class Security:
    """Time-ordered prices with indicator series aligned to them."""
    symbol: str
    prices: tuple[float, ...]
    indicators: Mapping[str, tuple[float, ...]] = field(default_factory=dict)

    def __post_init__(self):
        """Freeze series and check alignment."""
        prices = tuple(float(p) for p in self.prices)
        indicators = {
            name: tuple(float(v) for v in values)
            for name, values in self.indicators.items()
        }
        for name, values in indicators.items():
            if len(values) != len(prices):
                raise ValueError(
                    f"Indicator '{name}' of {self.symbol} has {len(values)} values, "
                    f"expected {len(prices)}"
                )
        object.__setattr__(self, "prices", prices)
        object.__setattr__(self, "indicators", MappingProxyType(indicators))

    def __len__(self) -> int:
        return len(self.prices)

    def indicator(self, name: str, period: int) -> float:
        """Value of indicator ``name`` at ``period``."""
        try:
            return self.indicators[name][period]
        except KeyError:
            raise MeasurementError(
                f"Security {self.symbol} has no indicator '{name}'",
                security=self.symbol,
            ) from None

    def has_indicator(self, name: str) -> bool:
        return name in self.indicators


class SecurityProvider(Protocol):
    """Supplies the immutable securities for a run."""

    def get_securities(self) -> Sequence[Security]:
        ...


class InMemorySecurityProvider:
    """Provider over an already loaded list of securities."""

    def __init__(self, securities: Optional[Sequence[Security]] = None):
        self._securities = tuple(securities or ())

    def get_securities(self) -> Sequence[Security]:
        return self._securities
