"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from core.schema import ScenarioConfig, Triple
from scenarios.presets import DEFAULT_SCENARIO


def zero_venue(**overrides) -> ScenarioConfig:
    """A venue where every driver is fixed at zero; tests switch on what they need."""
    base = dict(
        name="Zero Venue",
        seats=0,
        trading_days=5,
        periods=12,
        iterations=1,
        lunch_covers=Triple.fixed(0),
        lunch_ticket=Triple.fixed(0),
        dinner_covers=Triple.fixed(0),
        dinner_ticket=Triple.fixed(0),
        food_cost_pct=Triple.fixed(0),
        beverage_cost_pct=Triple.fixed(0),
        labour_pct=Triple.fixed(0),
        rent_monthly=0,
        rent_escalation_pct=0,
        overheads=Triple.fixed(0),
        cpi_pct=Triple.fixed(0),
        wage_growth_pct=Triple.fixed(0),
        capex=0,
        contingency_pct=0,
        loan_interest_pct=0,
        loan_term_months=12,
    )
    base.update(overrides)
    return ScenarioConfig(**base)


@pytest.fixture
def wine_bar() -> ScenarioConfig:
    return DEFAULT_SCENARIO.replace(iterations=200)


@pytest.fixture
def fixed_profit_venue() -> ScenarioConfig:
    """
    capex 100k, no contingency, +2000/month exactly: one function a month
    worth 3000 against a 1000/month interest-free loan over 100 months.
    """
    return zero_venue(
        name="Fixed Profit",
        capex=100_000,
        loan_term_months=100,
        functions_per_month=Triple.fixed(1),
        function_value=Triple.fixed(3000),
    )


@pytest.fixture
def make_venue():
    return zero_venue
