"""
Scenario value types.

A ScenarioConfig describes ONE simulated venture. Every uncertain input is a
Triple (min, likely, max) consumed by the triangular sampler; everything else
is a plain constant. Nothing in here draws random numbers.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Tuple


@dataclass(frozen=True)
class Triple:
    """Three-point estimate. Valid when min <= likely <= max."""

    min: float
    likely: float
    max: float

    @classmethod
    def fixed(cls, value: float) -> "Triple":
        """Degenerate range: always samples to `value`."""
        return cls(value, value, value)

    @property
    def width(self) -> float:
        return self.max - self.min

    @property
    def mean(self) -> float:
        """Theoretical mean of the triangular distribution."""
        return (self.min + self.likely + self.max) / 3.0

    @property
    def is_degenerate(self) -> bool:
        return self.max == self.min

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.min, self.likely, self.max)

    def with_likely(self, likely: float) -> "Triple":
        """Move the mode, widening the range if it falls outside [min, max]."""
        return Triple(min(self.min, likely), likely, max(self.max, likely))


class WeatherSensitivity(str, Enum):
    NONE = "NONE"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


ZERO = Triple.fixed(0.0)


@dataclass(frozen=True)
class ScenarioConfig:
    """
    Complete input for one Monte Carlo run.

    Covers are per trading day, tickets are $ per cover, cost ratios are % of
    revenue, overheads are $ per month, CPI / wage growth / escalation /
    interest are annual %.
    """

    # structure
    seats: int
    trading_days: int
    periods: int
    iterations: int

    # revenue drivers
    lunch_covers: Triple
    lunch_ticket: Triple
    dinner_covers: Triple
    dinner_ticket: Triple

    # cost ratios (% of revenue)
    food_cost_pct: Triple
    beverage_cost_pct: Triple
    labour_pct: Triple

    # fixed costs
    rent_monthly: float
    rent_escalation_pct: float
    overheads: Triple

    # macro shocks
    cpi_pct: Triple
    wage_growth_pct: Triple

    # capital structure
    capex: float
    contingency_pct: float
    loan_interest_pct: float
    loan_term_months: int

    weather_sensitivity: WeatherSensitivity = WeatherSensitivity.NONE
    functions_per_month: Triple = field(default=ZERO)
    function_value: Triple = field(default=ZERO)
    name: str = "Untitled venue"

    def triples(self) -> Iterator[Tuple[str, Triple]]:
        """Yield (field name, Triple) for every ranged input."""
        for name in TRIPLE_FIELDS:
            yield name, getattr(self, name)

    def replace(self, **changes) -> "ScenarioConfig":
        return dataclasses.replace(self, **changes)

    @property
    def initial_cash(self) -> float:
        """Opening position: capital outlay plus contingency, owed."""
        return -(self.capex * (1 + self.contingency_pct / 100.0))


TRIPLE_FIELDS: Tuple[str, ...] = tuple(
    f.name for f in dataclasses.fields(ScenarioConfig) if f.type in ("Triple", Triple)
)
