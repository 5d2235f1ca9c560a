"""
Data preparation: loading scenario files and validating scenarios.
"""

from .loader import load_scenario, dump_scenario, scenario_from_dict, scenario_to_dict
from .validators import ValidationResult, validate_scenario, require_valid

__all__ = [
    "load_scenario",
    "dump_scenario",
    "scenario_from_dict",
    "scenario_to_dict",
    "ValidationResult",
    "validate_scenario",
    "require_valid",
]
