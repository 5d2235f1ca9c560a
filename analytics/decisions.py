"""
Viability decision support: ratings and flags an owner can act on.

Translates a SimulationResult into the questions behind a venue decision:
  Q1: "Will it survive?"            -> survival rating
  Q2: "How likely is it to sink?"   -> insolvency rating + mean month
  Q3: "When do I get my money back?" -> break-even P50 vs horizon
  Q4: "What should I watch?"        -> top sensitivity driver
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import pandas as pd

from .results import SimulationResult

SURVIVAL_STRONG = 80
SURVIVAL_MARGINAL = 60
INSOLVENCY_HIGH = 20
INSOLVENCY_ELEVATED = 10


def rate_survival(survival_pct: float) -> str:
    if survival_pct >= SURVIVAL_STRONG:
        return "strong"
    if survival_pct >= SURVIVAL_MARGINAL:
        return "marginal"
    return "weak"


def rate_insolvency(insolvency_pct: float) -> str:
    if insolvency_pct > INSOLVENCY_HIGH:
        return "high"
    if insolvency_pct > INSOLVENCY_ELEVATED:
        return "elevated"
    return "low"


@dataclass
class ViabilityReport:
    """Structured viability verdict for one simulated scenario."""
    scenario_name: str
    survival_pct: int
    survival_rating: str
    insolvency_pct: int
    insolvency_rating: str
    insolvency_mean_month: float
    break_even_p50: float
    periods: int
    median_weekly_profit: float
    top_driver: Optional[str]
    top_driver_impact: float
    flags: List[str] = field(default_factory=list)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to a display-friendly table."""
        rows = [
            {"Metric": "Scenario", "Value": self.scenario_name},
            {"Metric": "Survival", "Value": f"{self.survival_pct}% ({self.survival_rating})"},
            {"Metric": "Insolvency Risk", "Value": f"{self.insolvency_pct}% ({self.insolvency_rating})"},
            {"Metric": "Median Break-Even", "Value": f"month {self.break_even_p50:.0f} of {self.periods}"},
            {"Metric": "Median Weekly Profit", "Value": f"${self.median_weekly_profit:,.0f}"},
        ]
        if self.insolvency_mean_month > 0:
            rows.append({"Metric": "Mean Insolvency Month", "Value": f"{self.insolvency_mean_month:.0f}"})
        if self.top_driver is not None:
            rows.append({
                "Metric": "Top Risk Driver",
                "Value": f"{self.top_driver} (±${self.top_driver_impact:,.0f}/wk)",
            })
        if self.flags:
            rows.append({"Metric": "FLAGS", "Value": " | ".join(self.flags)})
        return pd.DataFrame(rows)


def generate_viability_report(result: SimulationResult) -> ViabilityReport:
    flags = []
    if result.survival_pct < SURVIVAL_MARGINAL:
        flags.append(f"LOW_SURVIVAL: only {result.survival_pct}% of runs survive")
    if result.insolvency_pct > INSOLVENCY_HIGH:
        flags.append(f"INSOLVENCY_RISK: {result.insolvency_pct}% of runs breach the ruin threshold")
    if result.break_even.p50 >= result.periods:
        flags.append("NO_BREAK_EVEN: median run does not break even within the horizon")
    if result.weekly_profit.p50 < 0:
        flags.append("NEGATIVE_MEDIAN_PROFIT: median weekly-equivalent position is a loss")

    top = result.sensitivity[0] if result.sensitivity else None

    return ViabilityReport(
        scenario_name=result.scenario_name,
        survival_pct=result.survival_pct,
        survival_rating=rate_survival(result.survival_pct),
        insolvency_pct=result.insolvency_pct,
        insolvency_rating=rate_insolvency(result.insolvency_pct),
        insolvency_mean_month=result.insolvency_mean_month,
        break_even_p50=result.break_even.p50,
        periods=result.periods,
        median_weekly_profit=result.weekly_profit.p50,
        top_driver=top.variable if top is not None else None,
        top_driver_impact=top.impact if top is not None else 0.0,
        flags=flags,
    )
