"""
Core package: scenario value types, engine settings, errors and numeric helpers.
No simulation logic lives here.
"""

from .schema import Triple, ScenarioConfig, WeatherSensitivity
from .config import EngineSettings, DEFAULT_SETTINGS
from .errors import ScenarioConfigError, SimulationAborted
from .utils import excel_round, round_half_up, order_statistic

__all__ = [
    "Triple",
    "ScenarioConfig",
    "WeatherSensitivity",
    "EngineSettings",
    "DEFAULT_SETTINGS",
    "ScenarioConfigError",
    "SimulationAborted",
    "excel_round",
    "round_half_up",
    "order_statistic",
]
