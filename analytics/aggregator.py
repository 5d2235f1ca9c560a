"""
Fold per-iteration traces into a SimulationResult.

All percentiles are order statistics: sort ascending and read the value at
floor(n * p). No interpolation, so a given seed and iteration count always
yields the same concrete sample values (the P50 of 1000 runs is run #500 of
the sorted list, not a blend of #499 and #500).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Tuple

import numpy as np

from core.config import EngineSettings
from core.schema import ScenarioConfig
from core.utils import order_statistic, round_half_up

from .results import HistogramBucket, MonthBand, PercentileBand, SimulationResult
from .sensitivity import sensitivity_ranking

if TYPE_CHECKING:
    from engine.cashflow import IterationTrace


def percentile_band(values: np.ndarray, percentiles: Tuple[float, float, float]) -> PercentileBand:
    ordered = np.sort(np.asarray(values, dtype=float))
    p10, p50, p90 = (float(order_statistic(ordered, p)) for p in percentiles)
    return PercentileBand(p10=p10, p50=p50, p90=p90)


def profit_histogram(values: np.ndarray, n_buckets: int = 20) -> Tuple[HistogramBucket, ...]:
    """
    Equal-width buckets spanning [min, max]. The top edge falls in the last
    bucket. When every value is equal the width falls back to 1.
    """
    values = np.asarray(values, dtype=float)
    lo = float(values.min())
    hi = float(values.max())
    width = (hi - lo) / n_buckets or 1.0

    idx = np.minimum(np.floor((values - lo) / width).astype(int), n_buckets - 1)
    counts = np.bincount(idx, minlength=n_buckets)

    return tuple(
        HistogramBucket(
            lower=lo + i * width,
            upper=lo + (i + 1) * width,
            mid=lo + (i + 0.5) * width,
            count=int(counts[i]),
        )
        for i in range(n_buckets)
    )


def cash_flow_bands(cash: np.ndarray, percentiles: Tuple[float, float, float]) -> Tuple[MonthBand, ...]:
    """Per-month P10/P50/P90 across iterations; `cash` is (iterations, periods)."""
    ordered = np.sort(cash, axis=0)
    p10, p50, p90 = (order_statistic(ordered, p, axis=0) for p in percentiles)
    return tuple(
        MonthBand(month=m + 1, p10=float(p10[m]), p50=float(p50[m]), p90=float(p90[m]))
        for m in range(cash.shape[1])
    )


class SimulationAccumulator:
    """
    Explicit reducer for the Monte Carlo loop.

    Traces are folded in as they arrive (in any order; each lands in the
    row of its own iteration index) and are not retained. `finalize()` runs
    the reductions once.
    """

    def __init__(self, *, iterations: int, periods: int):
        self.iterations = iterations
        self.periods = periods
        self.cash = np.empty((iterations, periods), dtype=float)
        self.weekly = np.empty(iterations, dtype=float)
        self.break_even = np.empty(iterations, dtype=float)
        self.insolvency_months = np.zeros(iterations, dtype=float)
        self.insolvent = np.zeros(iterations, dtype=bool)
        self._filled = np.zeros(iterations, dtype=bool)

    def add(self, index: int, trace: IterationTrace) -> None:
        self.cash[index, :] = trace.cash
        self.weekly[index] = trace.weekly_equivalent
        self.break_even[index] = trace.break_even_month
        if trace.insolvency_month is not None:
            self.insolvent[index] = True
            self.insolvency_months[index] = trace.insolvency_month
        self._filled[index] = True

    @property
    def n_folded(self) -> int:
        return int(self._filled.sum())

    def finalize(
        self,
        scenario: ScenarioConfig,
        settings: EngineSettings,
        *,
        seed: Optional[int] = None,
    ) -> SimulationResult:
        if self.n_folded != self.iterations:
            raise ValueError(
                f"Accumulator holds {self.n_folded} of {self.iterations} iterations."
            )

        n = self.iterations
        n_insolvent = int(self.insolvent.sum())
        n_survived = n - n_insolvent
        insolvency_mean = (
            float(self.insolvency_months[self.insolvent].mean()) if n_insolvent else 0.0
        )

        return SimulationResult(
            scenario_name=scenario.name,
            iterations=n,
            periods=self.periods,
            seed=seed,
            survival_pct=round_half_up(n_survived / n * 100),
            insolvency_pct=round_half_up(n_insolvent / n * 100),
            insolvency_mean_month=insolvency_mean,
            weekly_profit=percentile_band(self.weekly, settings.percentiles),
            weekly_profit_mean=float(self.weekly.mean()),
            break_even=percentile_band(self.break_even, settings.percentiles),
            histogram=profit_histogram(self.weekly, settings.histogram_buckets),
            cash_flow=cash_flow_bands(self.cash, settings.percentiles),
            sensitivity=sensitivity_ranking(scenario, settings),
        )


def reduce_traces(
    traces: List[IterationTrace],
    scenario: ScenarioConfig,
    settings: EngineSettings,
    *,
    seed: Optional[int] = None,
) -> SimulationResult:
    """Convenience reducer for an already-collected list of traces."""
    acc = SimulationAccumulator(iterations=len(traces), periods=scenario.periods)
    for i, trace in enumerate(traces):
        acc.add(i, trace)
    return acc.finalize(scenario, settings, seed=seed)
