"""
Weather events: the monthly one-off shocks to trade.

Two kinds of randomness act on a simulated month:
  Regime (cashflow.py): CPI and wage growth, drawn once per simulated life.
  Events (this file):   a bad-weather month, drawn independently every month.

A triggered month scales that month's covers by the venue's weather
sensitivity multiplier; the next month starts clean.
"""

from __future__ import annotations

import numpy as np

from core.config import EngineSettings
from core.schema import WeatherSensitivity
from distributions.sampler import TriangularSampler


def draw_weather_multipliers(
    *,
    n_months: int,
    sensitivity: WeatherSensitivity,
    sampler: TriangularSampler,
    settings: EngineSettings,
) -> np.ndarray:
    """
    Per-month covers multiplier: the sensitivity multiplier in event months,
    1.0 otherwise. Always consumes `n_months` uniforms.
    """
    hit = sampler.bernoulli(settings.weather_event_probability, size=n_months)
    return np.where(hit, settings.weather_multiplier(sensitivity), 1.0)
