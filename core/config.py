"""
Engine settings: the policy constants of the viability model.

Defaults reproduce the reference venue simulator. The insolvency threshold and
the weather-event probability in particular have no calibration behind them;
they are exposed here so callers can tune them per market.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from .schema import WeatherSensitivity


def _default_weather_multipliers() -> Dict[WeatherSensitivity, float]:
    return {
        WeatherSensitivity.NONE: 1.0,
        WeatherSensitivity.LOW: 0.97,
        WeatherSensitivity.MEDIUM: 0.93,
        WeatherSensitivity.HIGH: 0.85,
    }


@dataclass(frozen=True)
class EngineSettings:
    max_iterations: int = 2000
    weeks_per_month: float = 4.33

    # weather: one independent Bernoulli draw per month
    weather_event_probability: float = 0.2
    weather_multipliers: Dict[WeatherSensitivity, float] = field(
        default_factory=_default_weather_multipliers
    )

    # insolvency once cash < -(ruin_capex_multiple * capex)
    ruin_capex_multiple: float = 2.0

    # CPI pass-through: above the threshold, cost ratios pick up
    # (cpi - threshold) * rate * share percentage points
    cpi_pressure_threshold: float = 4.0
    cpi_pressure_rate: float = 0.6
    food_pressure_share: float = 0.4
    beverage_pressure_share: float = 0.3

    histogram_buckets: int = 20
    percentiles: Tuple[float, float, float] = (0.1, 0.5, 0.9)

    def weather_multiplier(self, level: WeatherSensitivity) -> float:
        return self.weather_multipliers[WeatherSensitivity(level)]


DEFAULT_SETTINGS = EngineSettings()
