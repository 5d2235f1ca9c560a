"""
Tornado ranking: a STATIC sensitivity heuristic.

This is not derived from the Monte Carlo output. Each variable's impact is a
closed-form estimate of how many dollars per week its configured range could
swing the venue, using the likely values as a baseline. It depends only on
the scenario, so re-running with another seed never reorders it.

The baseline revenue helper here is separate from the stochastic
roll-forward: it uses likely values only and draws nothing.
"""

from __future__ import annotations

from typing import List, Tuple

from core.config import EngineSettings
from core.schema import ScenarioConfig, WeatherSensitivity

from .results import SensitivityItem

# share of the CPI range that flows through to costs in the heuristic
CPI_COST_SHARE = 0.3
# years of rent escalation the Rent bar covers
RENT_ESCALATION_YEARS = 3


def baseline_monthly_revenue(scenario: ScenarioConfig, *, weeks_per_month: float = 4.33) -> float:
    """Deterministic monthly revenue from likely values only."""
    s = scenario
    covers_revenue = (
        s.lunch_covers.likely * s.lunch_ticket.likely
        + s.dinner_covers.likely * s.dinner_ticket.likely
    ) * s.trading_days * weeks_per_month
    return covers_revenue + s.functions_per_month.likely * s.function_value.likely


def _weather_share(level: WeatherSensitivity) -> float:
    return 0.15 if WeatherSensitivity(level) is WeatherSensitivity.HIGH else 0.05


def sensitivity_ranking(scenario: ScenarioConfig, settings: EngineSettings) -> Tuple[SensitivityItem, ...]:
    """Rank inputs by estimated weekly $ impact, largest first."""
    s = scenario
    wpm = settings.weeks_per_month
    rev = baseline_monthly_revenue(s, weeks_per_month=wpm)

    # covers and tickets: monthly swing (x wpm) back to weekly (/ wpm)
    impacts: List[Tuple[str, float]] = [
        ("Dinner Covers", abs(s.dinner_covers.width) * s.dinner_ticket.likely * s.trading_days * wpm / wpm),
        ("Labour %", rev * s.labour_pct.width / 100 / wpm),
        ("Rent", s.rent_monthly * s.rent_escalation_pct / 100 * RENT_ESCALATION_YEARS / wpm),
        ("Food Cost %", rev * s.food_cost_pct.width / 100 / wpm),
        ("Avg Ticket", s.dinner_ticket.width * s.dinner_covers.likely * s.trading_days * wpm / wpm),
        ("CPI", rev * s.cpi_pct.width * CPI_COST_SHARE / 100 / wpm),
        ("Bev Cost %", rev * s.beverage_cost_pct.width / 100 / wpm),
        ("Weather", rev * _weather_share(s.weather_sensitivity) / wpm),
    ]

    ranked = sorted(impacts, key=lambda item: item[1], reverse=True)
    return tuple(SensitivityItem(variable=name, impact=float(impact)) for name, impact in ranked)
