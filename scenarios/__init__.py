"""
Scenario library: the reference venue and named stress tests.
"""

from .presets import DEFAULT_SCENARIO, PRESETS, get_preset
from .stress import STRESS_TESTS, StressTest, get_stress_test, run_stress_suite

__all__ = [
    "DEFAULT_SCENARIO",
    "PRESETS",
    "get_preset",
    "STRESS_TESTS",
    "StressTest",
    "get_stress_test",
    "run_stress_suite",
]
