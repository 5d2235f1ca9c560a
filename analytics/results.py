"""
Result value types returned by the engine, with tabular views for display.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Optional, Tuple

import pandas as pd


@dataclass(frozen=True)
class PercentileBand:
    p10: float
    p50: float
    p90: float


@dataclass(frozen=True)
class HistogramBucket:
    lower: float
    upper: float
    mid: float
    count: int

    @property
    def is_loss(self) -> bool:
        return self.mid < 0


@dataclass(frozen=True)
class MonthBand:
    month: int  # 1-based
    p10: float
    p50: float
    p90: float


@dataclass(frozen=True)
class SensitivityItem:
    variable: str
    impact: float  # $ per week


@dataclass(frozen=True)
class SimulationResult:
    scenario_name: str
    iterations: int
    periods: int
    seed: Optional[int]

    survival_pct: int
    insolvency_pct: int
    insolvency_mean_month: float

    weekly_profit: PercentileBand
    weekly_profit_mean: float
    break_even: PercentileBand

    histogram: Tuple[HistogramBucket, ...]
    cash_flow: Tuple[MonthBand, ...]
    sensitivity: Tuple[SensitivityItem, ...]

    def to_dict(self) -> Dict:
        """JSON-serialisable representation."""
        return asdict(self)

    def summary_table(self) -> pd.DataFrame:
        rows = [
            {"Metric": "Survival", "Value": self.survival_pct, "Unit": "%"},
            {"Metric": "Insolvency", "Value": self.insolvency_pct, "Unit": "%"},
            {"Metric": "Mean Insolvency Month", "Value": round(self.insolvency_mean_month, 1), "Unit": "month"},
            {"Metric": "Weekly Profit P10", "Value": round(self.weekly_profit.p10), "Unit": "$/wk"},
            {"Metric": "Weekly Profit P50", "Value": round(self.weekly_profit.p50), "Unit": "$/wk"},
            {"Metric": "Weekly Profit P90", "Value": round(self.weekly_profit.p90), "Unit": "$/wk"},
            {"Metric": "Weekly Profit Mean", "Value": round(self.weekly_profit_mean), "Unit": "$/wk"},
            {"Metric": "Break-Even P10", "Value": self.break_even.p10, "Unit": "month"},
            {"Metric": "Break-Even P50", "Value": self.break_even.p50, "Unit": "month"},
            {"Metric": "Break-Even P90", "Value": self.break_even.p90, "Unit": "month"},
        ]
        return pd.DataFrame(rows)

    def histogram_frame(self) -> pd.DataFrame:
        return pd.DataFrame([asdict(b) for b in self.histogram])

    def cash_flow_frame(self) -> pd.DataFrame:
        return pd.DataFrame([asdict(b) for b in self.cash_flow])

    def sensitivity_frame(self) -> pd.DataFrame:
        return pd.DataFrame([asdict(s) for s in self.sensitivity])
