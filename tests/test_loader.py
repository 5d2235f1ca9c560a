import json

import pytest

from core.errors import ScenarioConfigError
from core.schema import Triple, WeatherSensitivity
from data_prep.loader import dump_scenario, load_scenario, scenario_from_dict, scenario_to_dict
from scenarios.presets import DEFAULT_SCENARIO


def test_template_round_trip(tmp_path):
    path = tmp_path / "venue.json"
    dump_scenario(DEFAULT_SCENARIO, path)
    assert load_scenario(path) == DEFAULT_SCENARIO


def test_ranges_written_as_lists():
    data = scenario_to_dict(DEFAULT_SCENARIO)
    assert data["lunch_covers"] == [15, 25, 35]
    assert data["weather_sensitivity"] == "MEDIUM"
    json.dumps(data)


def test_object_form_ranges_accepted():
    data = scenario_to_dict(DEFAULT_SCENARIO)
    data["dinner_covers"] = {"min": 30, "likely": 40, "max": 50}
    assert scenario_from_dict(data).dinner_covers == Triple(30, 40, 50)


def test_weather_level_is_case_insensitive():
    data = scenario_to_dict(DEFAULT_SCENARIO)
    data["weather_sensitivity"] = "high"
    assert scenario_from_dict(data).weather_sensitivity is WeatherSensitivity.HIGH


def test_optional_fields_default():
    data = scenario_to_dict(DEFAULT_SCENARIO)
    for key in ("functions_per_month", "function_value", "weather_sensitivity", "name"):
        del data[key]
    scenario = scenario_from_dict(data)
    assert scenario.functions_per_month == Triple.fixed(0)
    assert scenario.weather_sensitivity is WeatherSensitivity.NONE


def test_unknown_field_rejected():
    data = scenario_to_dict(DEFAULT_SCENARIO)
    data["parking_spaces"] = 12
    with pytest.raises(ScenarioConfigError, match="parking_spaces"):
        scenario_from_dict(data)


def test_wrong_range_length_rejected():
    data = scenario_to_dict(DEFAULT_SCENARIO)
    data["lunch_ticket"] = [45, 55]
    with pytest.raises(ScenarioConfigError, match="lunch_ticket"):
        scenario_from_dict(data)


def test_bad_type_rejected():
    data = scenario_to_dict(DEFAULT_SCENARIO)
    data["seats"] = "plenty"
    with pytest.raises(ScenarioConfigError) as info:
        scenario_from_dict(data)
    assert any("seats" in e for e in info.value.errors)


def test_missing_required_field_rejected():
    data = scenario_to_dict(DEFAULT_SCENARIO)
    del data["capex"]
    with pytest.raises(ScenarioConfigError, match="capex"):
        scenario_from_dict(data)


def test_invalid_json_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ScenarioConfigError, match="not valid JSON"):
        load_scenario(path)


def test_non_utf8_file(tmp_path):
    path = tmp_path / "latin1.json"
    path.write_bytes(b'{"name": "Caf\xe9"}')
    with pytest.raises(ScenarioConfigError, match="not valid JSON"):
        load_scenario(path)
