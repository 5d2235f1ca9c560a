"""
Stress tests: named, pure transformations of a scenario.

Each test moves the likely value (and widens the range where needed) of a
handful of inputs to represent a recognisable bad year:

  perfect_storm     wage rise + dearer food and drink + weather-exposed venue
  debt_trap         +2 pts interest and a 15% capex blowout
  efficiency_floor  10% fewer dinner covers while labour runs 4 pts hotter
  regulatory_shock  award wage rise plus on-costs (super, payroll timing)

run_stress_suite() runs the baseline and every test with the same seed so
the comparison isolates the change in inputs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional

import pandas as pd

from core.config import EngineSettings
from core.schema import ScenarioConfig, WeatherSensitivity
from engine.runner import run_simulation

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class StressTest:
    name: str
    title: str
    description: str
    transform: Callable[[ScenarioConfig], ScenarioConfig]

    def apply(self, scenario: ScenarioConfig) -> ScenarioConfig:
        stressed = self.transform(scenario)
        return stressed.replace(name=f"{scenario.name} [{self.title}]")


def _perfect_storm(s: ScenarioConfig) -> ScenarioConfig:
    return s.replace(
        wage_growth_pct=s.wage_growth_pct.with_likely(4.5),
        food_cost_pct=s.food_cost_pct.with_likely(33),
        beverage_cost_pct=s.beverage_cost_pct.with_likely(26),
        weather_sensitivity=WeatherSensitivity.HIGH,
    )


def _debt_trap(s: ScenarioConfig) -> ScenarioConfig:
    return s.replace(
        loan_interest_pct=s.loan_interest_pct + 2,
        capex=round(s.capex * 1.15),
    )


def _efficiency_floor(s: ScenarioConfig) -> ScenarioConfig:
    return s.replace(
        dinner_covers=s.dinner_covers.with_likely(round(s.dinner_covers.likely * 0.9)),
        labour_pct=s.labour_pct.with_likely(s.labour_pct.likely + 4),
    )


def _regulatory_shock(s: ScenarioConfig) -> ScenarioConfig:
    return s.replace(
        wage_growth_pct=s.wage_growth_pct.with_likely(4.5),
        labour_pct=s.labour_pct.with_likely(s.labour_pct.likely + 2),
    )


STRESS_TESTS: Dict[str, StressTest] = {
    t.name: t
    for t in (
        StressTest(
            "perfect_storm", "Perfect Storm",
            "+4.5% wage growth, food 33%, beverage 26%, high weather exposure",
            _perfect_storm,
        ),
        StressTest(
            "debt_trap", "Debt Trap",
            "+2 pts loan interest and a 15% capex blowout",
            _debt_trap,
        ),
        StressTest(
            "efficiency_floor", "Efficiency Floor",
            "-10% dinner covers with labour +4 pts",
            _efficiency_floor,
        ),
        StressTest(
            "regulatory_shock", "Regulatory Shock",
            "4.5% award wage growth and labour +2 pts",
            _regulatory_shock,
        ),
    )
}


def get_stress_test(name: str) -> StressTest:
    try:
        return STRESS_TESTS[name]
    except KeyError:
        raise ValueError(
            f"Unknown stress test '{name}'. Available: {sorted(STRESS_TESTS)}"
        ) from None


def run_stress_suite(
    scenario: ScenarioConfig,
    *,
    seed: int = 42,
    settings: Optional[EngineSettings] = None,
    workers: int = 1,
) -> pd.DataFrame:
    """Baseline plus every stress test, one row each, same seed throughout."""
    rows = []
    cases = [("baseline", "Baseline", scenario)] + [
        (t.name, t.title, t.apply(scenario)) for t in STRESS_TESTS.values()
    ]
    for key, title, case in cases:
        LOGGER.info("Stress suite: running %s", key)
        r = run_simulation(case, seed=seed, settings=settings, workers=workers)
        rows.append({
            "Test": title,
            "Survival %": r.survival_pct,
            "Insolvency %": r.insolvency_pct,
            "Weekly P10": r.weekly_profit.p10,
            "Weekly P50": r.weekly_profit.p50,
            "Weekly P90": r.weekly_profit.p90,
            "Break-Even P50": r.break_even.p50,
        })
    return pd.DataFrame(rows)
