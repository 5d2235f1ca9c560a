"""
Period roll-forward: one simulated life of the venue, month by month.

Key modelling rules:
  1. CPI and wage growth are drawn ONCE per life (a persistent macro regime);
     covers, tickets, cost ratios, functions and overheads are redrawn
     every month.
  2. Growth compounds by year index: mult = (1 + g/100) ** (m // 12).
  3. Above the CPI threshold, food and beverage ratios pick up an extra
     pass-through term (policy, see EngineSettings).
  4. The loan payment is a level annuity on capex, fixed for the run.
  5. Break-even and insolvency latch on first occurrence; months are 1-based.
     A life that never breaks even reports break-even = periods.

The horizon is computed as numpy vectors; each vector holds one draw per
month, so the arithmetic is the month loop written column-wise.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from core.config import EngineSettings
from core.schema import ScenarioConfig
from distributions.sampler import TriangularSampler

from .events import draw_weather_multipliers


def level_payment(balance: float, monthly_rate: float, n_months: int) -> float:
    """Standard fully-amortizing level payment (PMT) with near-zero rate guard."""
    if balance <= 0:
        return 0.0
    if n_months <= 0:
        return float(balance)
    if abs(monthly_rate) < 1e-12:
        return float(balance) / n_months
    return float(balance) * monthly_rate / (1 - (1 + monthly_rate) ** -n_months)


def loan_payment_for(scenario: ScenarioConfig) -> float:
    """Monthly debt service on the capital outlay (annual % -> /1200)."""
    return level_payment(
        scenario.capex,
        scenario.loan_interest_pct / 1200.0,
        scenario.loan_term_months,
    )


@dataclass
class IterationTrace:
    """Outcome of one simulated life."""
    cash: np.ndarray               # shape (periods,), cumulative cash after each month
    break_even_month: int          # 1-based; == periods when never reached
    broke_even: bool
    insolvency_month: Optional[int]  # 1-based; None when never insolvent
    weekly_equivalent: float       # final cash / (periods / weeks_per_month)
    cpi_pct: float
    wage_growth_pct: float

    @property
    def survived(self) -> bool:
        return self.insolvency_month is None

    @property
    def final_cash(self) -> float:
        return float(self.cash[-1])


def _first_month(mask: np.ndarray) -> Optional[int]:
    hits = np.flatnonzero(mask)
    if hits.size == 0:
        return None
    return int(hits[0]) + 1


def cpi_pressure(cpi_pct: float, settings: EngineSettings) -> float:
    """Extra cost-ratio points once CPI runs above the pass-through threshold."""
    if cpi_pct > settings.cpi_pressure_threshold:
        return (cpi_pct - settings.cpi_pressure_threshold) * settings.cpi_pressure_rate
    return 0.0


def roll_forward(
    scenario: ScenarioConfig,
    sampler: TriangularSampler,
    *,
    settings: EngineSettings,
    loan_payment: Optional[float] = None,
) -> IterationTrace:
    """
    Simulate `scenario.periods` months for one life.

    Draw order (fixed, so a seeded sampler reproduces a trace exactly):
    CPI, wage growth, weather, lunch covers, dinner covers, lunch ticket,
    dinner ticket, function count, function value, food %, beverage %,
    labour %, overheads.
    """
    s = scenario
    n = s.periods
    if loan_payment is None:
        loan_payment = loan_payment_for(s)

    # slow variables: one regime per life
    cpi = sampler.sample_triple(s.cpi_pct)
    wage = sampler.sample_triple(s.wage_growth_pct)

    year = np.arange(n) // 12
    year_mult = (1 + cpi / 100.0) ** year
    wage_mult = (1 + wage / 100.0) ** year

    weather = draw_weather_multipliers(
        n_months=n,
        sensitivity=s.weather_sensitivity,
        sampler=sampler,
        settings=settings,
    )

    # fast variables: redrawn every month
    cover_days = s.trading_days * settings.weeks_per_month * weather
    lunch_covers = sampler.sample_triple(s.lunch_covers, size=n) * cover_days
    dinner_covers = sampler.sample_triple(s.dinner_covers, size=n) * cover_days
    lunch_ticket = sampler.sample_triple(s.lunch_ticket, size=n)
    dinner_ticket = sampler.sample_triple(s.dinner_ticket, size=n)
    function_revenue = (
        sampler.sample_triple(s.functions_per_month, size=n)
        * sampler.sample_triple(s.function_value, size=n)
    )
    revenue = lunch_covers * lunch_ticket + dinner_covers * dinner_ticket + function_revenue

    pressure = cpi_pressure(cpi, settings)
    food_pct = sampler.sample_triple(s.food_cost_pct, size=n) + pressure * settings.food_pressure_share
    bev_pct = sampler.sample_triple(s.beverage_cost_pct, size=n) + pressure * settings.beverage_pressure_share
    labour_pct = sampler.sample_triple(s.labour_pct, size=n)

    food_cost = revenue * food_pct / 100.0 * year_mult
    bev_cost = revenue * bev_pct / 100.0 * year_mult
    labour = revenue * labour_pct / 100.0 * wage_mult
    rent = s.rent_monthly * (1 + s.rent_escalation_pct / 100.0) ** year
    overheads = sampler.sample_triple(s.overheads, size=n) * year_mult

    profit = revenue - food_cost - bev_cost - labour - rent - overheads - loan_payment
    # running sum seeded with the opening position, same order as a month loop
    cash = np.cumsum(np.concatenate(([s.initial_cash], profit)))[1:]

    break_even = _first_month(cash >= 0)
    insolvency = _first_month(cash < -settings.ruin_capex_multiple * s.capex)

    return IterationTrace(
        cash=cash,
        break_even_month=break_even if break_even is not None else n,
        broke_even=break_even is not None,
        insolvency_month=insolvency,
        weekly_equivalent=float(cash[-1]) / (n / settings.weeks_per_month),
        cpi_pct=cpi,
        wage_growth_pct=wage,
    )
