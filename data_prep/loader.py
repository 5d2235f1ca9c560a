"""
Scenario files: JSON in, ScenarioConfig out.

Ranged inputs may be written either as a list `[min, likely, max]` or as an
object `{"min": .., "likely": .., "max": ..}`. Field types are checked with
pydantic; range semantics are checked by validators.py.
"""

from __future__ import annotations

import dataclasses
import json
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import TypeAdapter, ValidationError

from core.errors import ScenarioConfigError
from core.schema import TRIPLE_FIELDS, ScenarioConfig

_ADAPTER = TypeAdapter(ScenarioConfig)
_KNOWN_FIELDS = frozenset(f.name for f in dataclasses.fields(ScenarioConfig))


def _normalise(payload: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(payload)
    for name in TRIPLE_FIELDS:
        value = out.get(name)
        if isinstance(value, (list, tuple)):
            if len(value) != 3:
                raise ScenarioConfigError(
                    [f"{name}: expected [min, likely, max], got {len(value)} values."]
                )
            out[name] = {"min": value[0], "likely": value[1], "max": value[2]}
    if isinstance(out.get("weather_sensitivity"), str):
        out["weather_sensitivity"] = out["weather_sensitivity"].strip().upper()
    return out


def scenario_from_dict(payload: Dict[str, Any]) -> ScenarioConfig:
    if not isinstance(payload, dict):
        raise ScenarioConfigError([f"Scenario must be a JSON object, got {type(payload).__name__}."])
    unknown = sorted(set(payload) - _KNOWN_FIELDS)
    if unknown:
        raise ScenarioConfigError([f"Unknown scenario fields: {unknown}"])
    try:
        return _ADAPTER.validate_python(_normalise(payload))
    except ValidationError as exc:
        raise ScenarioConfigError(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        ) from exc


def scenario_to_dict(scenario: ScenarioConfig) -> Dict[str, Any]:
    """Plain JSON-ready dict; ranges written as [min, likely, max] lists."""
    data = _ADAPTER.dump_python(scenario, mode="json")
    for name in TRIPLE_FIELDS:
        t = data[name]
        data[name] = [t["min"], t["likely"], t["max"]]
    return data


def load_scenario(path: Union[str, Path]) -> ScenarioConfig:
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ScenarioConfigError([f"{path.name} is not valid JSON: {exc}"]) from exc
    return scenario_from_dict(payload)


def dump_scenario(scenario: ScenarioConfig, path: Union[str, Path]) -> None:
    Path(path).write_text(json.dumps(scenario_to_dict(scenario), indent=2) + "\n", encoding="utf-8")
