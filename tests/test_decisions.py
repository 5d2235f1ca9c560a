import pytest

from analytics.decisions import generate_viability_report, rate_insolvency, rate_survival
from engine.runner import run_simulation


@pytest.mark.parametrize("pct,rating", [(100, "strong"), (80, "strong"), (79, "marginal"), (60, "marginal"), (59, "weak")])
def test_survival_rating(pct, rating):
    assert rate_survival(pct) == rating


@pytest.mark.parametrize("pct,rating", [(21, "high"), (20, "elevated"), (11, "elevated"), (10, "low"), (0, "low")])
def test_insolvency_rating(pct, rating):
    assert rate_insolvency(pct) == rating


def test_slow_venue_flags(fixed_profit_venue):
    report = generate_viability_report(run_simulation(fixed_profit_venue, seed=1))
    assert report.survival_rating == "strong"
    assert report.insolvency_rating == "low"
    flag_names = [f.split(":")[0] for f in report.flags]
    assert flag_names == ["NO_BREAK_EVEN", "NEGATIVE_MEDIAN_PROFIT"]


def test_report_table(wine_bar):
    report = generate_viability_report(run_simulation(wine_bar, seed=11))
    df = report.to_dataframe()
    assert df["Metric"].iloc[0] == "Scenario"
    assert report.top_driver == "Dinner Covers"


def test_result_frames(fixed_profit_venue):
    r = run_simulation(fixed_profit_venue, seed=2)
    assert len(r.histogram_frame()) == 20
    assert list(r.cash_flow_frame().columns) == ["month", "p10", "p50", "p90"]
    assert list(r.sensitivity_frame().columns) == ["variable", "impact"]
    assert r.summary_table().set_index("Metric").loc["Survival", "Value"] == 100
