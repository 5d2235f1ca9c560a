"""
Analytics: result types, Monte Carlo reduction, sensitivity ranking and
viability decision support.
"""

from .results import (
    HistogramBucket,
    MonthBand,
    PercentileBand,
    SensitivityItem,
    SimulationResult,
)
from .aggregator import SimulationAccumulator, reduce_traces
from .sensitivity import baseline_monthly_revenue, sensitivity_ranking
from .decisions import ViabilityReport, generate_viability_report

__all__ = [
    "HistogramBucket",
    "MonthBand",
    "PercentileBand",
    "SensitivityItem",
    "SimulationResult",
    "SimulationAccumulator",
    "reduce_traces",
    "baseline_monthly_revenue",
    "sensitivity_ranking",
    "ViabilityReport",
    "generate_viability_report",
]
