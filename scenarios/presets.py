"""
Preset scenarios.

DEFAULT_SCENARIO is the reference venue: a 45-seat wine bar trading six days
a week, modelled over three years.
"""

from __future__ import annotations

from core.schema import ScenarioConfig, Triple, WeatherSensitivity

DEFAULT_SCENARIO = ScenarioConfig(
    name="Fortitude Valley Wine Bar",
    seats=45,
    trading_days=6,
    periods=36,
    iterations=1000,
    lunch_covers=Triple(15, 25, 35),
    lunch_ticket=Triple(45, 55, 65),
    dinner_covers=Triple(30, 42, 55),
    dinner_ticket=Triple(75, 90, 110),
    functions_per_month=Triple(1, 2, 4),
    function_value=Triple(3000, 5000, 8000),
    food_cost_pct=Triple(26, 28, 32),
    beverage_cost_pct=Triple(18, 21, 25),
    labour_pct=Triple(26, 29, 34),
    rent_monthly=5500,
    rent_escalation_pct=5,
    overheads=Triple(4500, 5500, 7000),
    cpi_pct=Triple(2, 3.5, 6),
    wage_growth_pct=Triple(3, 3.75, 5),
    weather_sensitivity=WeatherSensitivity.MEDIUM,
    capex=450000,
    contingency_pct=15,
    loan_interest_pct=7.5,
    loan_term_months=60,
)

PRESETS = {
    "wine_bar": DEFAULT_SCENARIO,
}


def get_preset(name: str) -> ScenarioConfig:
    try:
        return PRESETS[name]
    except KeyError:
        raise ValueError(f"Unknown preset '{name}'. Available: {sorted(PRESETS)}") from None
