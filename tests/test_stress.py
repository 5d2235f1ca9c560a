import pytest

from core.schema import Triple, WeatherSensitivity
from scenarios.presets import DEFAULT_SCENARIO
from scenarios.stress import STRESS_TESTS, get_stress_test, run_stress_suite


def test_four_named_tests():
    assert set(STRESS_TESTS) == {"perfect_storm", "debt_trap", "efficiency_floor", "regulatory_shock"}


def test_perfect_storm_widens_ranges():
    s = get_stress_test("perfect_storm").apply(DEFAULT_SCENARIO)
    assert s.wage_growth_pct == Triple(3, 4.5, 5)
    assert s.food_cost_pct == Triple(26, 33, 33)
    assert s.beverage_cost_pct == Triple(18, 26, 26)
    assert s.weather_sensitivity is WeatherSensitivity.HIGH


def test_debt_trap():
    s = get_stress_test("debt_trap").apply(DEFAULT_SCENARIO)
    assert s.loan_interest_pct == pytest.approx(9.5)
    assert s.capex == 517500


def test_efficiency_floor():
    s = get_stress_test("efficiency_floor").apply(DEFAULT_SCENARIO)
    assert s.dinner_covers == Triple(30, 38, 55)
    assert s.labour_pct == Triple(26, 33, 34)


def test_regulatory_shock():
    s = get_stress_test("regulatory_shock").apply(DEFAULT_SCENARIO)
    assert s.wage_growth_pct.likely == 4.5
    assert s.labour_pct.likely == 31


def test_apply_is_pure_and_renames():
    s = get_stress_test("debt_trap").apply(DEFAULT_SCENARIO)
    assert s.name == "Fortitude Valley Wine Bar [Debt Trap]"
    assert DEFAULT_SCENARIO.capex == 450000


def test_unknown_stress_test():
    with pytest.raises(ValueError, match="Available"):
        get_stress_test("zombie_apocalypse")


def test_suite_has_baseline_and_every_test():
    table = run_stress_suite(DEFAULT_SCENARIO.replace(iterations=20), seed=3)
    assert len(table) == 5
    assert table["Test"].iloc[0] == "Baseline"
    assert list(table["Test"].iloc[1:]) == [t.title for t in STRESS_TESTS.values()]
    assert table["Survival %"].between(0, 100).all()
