"""
Scenario validation before anything is sampled.

Catches problems early:
- Ranges whose likely value sits outside [min, max]
- Non-positive horizons / iteration counts
- Negative money, covers or cost ratios
- Inputs that are legal but suspicious (warnings only)
"""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass, field
from typing import List

from core.config import DEFAULT_SETTINGS, EngineSettings
from core.errors import ScenarioConfigError
from core.schema import ScenarioConfig, Triple, WeatherSensitivity

LOGGER = logging.getLogger(__name__)

# ranged inputs that may legitimately go negative (deflation, pay cuts)
SIGNED_TRIPLES = ("cpi_pct", "wage_growth_pct")

PRIME_COST_WARN_PCT = 70.0


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for a scenario."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def _check_triple(name: str, t: Triple, result: ValidationResult) -> None:
    values = t.as_tuple()
    if not all(isinstance(v, numbers.Real) and math.isfinite(v) for v in values):
        result.errors.append(f"{name}: all of min/likely/max must be finite numbers, got {values}.")
        return
    if t.min > t.max:
        result.errors.append(f"{name}: min {t.min} exceeds max {t.max}.")
    elif not (t.min <= t.likely <= t.max):
        result.errors.append(f"{name}: likely {t.likely} lies outside [{t.min}, {t.max}].")
    if name not in SIGNED_TRIPLES and t.min < 0:
        result.errors.append(f"{name}: negative values are not meaningful (min={t.min}).")
    elif name in SIGNED_TRIPLES and t.min <= -100:
        result.errors.append(f"{name}: min must exceed -100 (got {t.min}).")


def _check_number(name: str, value, result: ValidationResult, *, allow_negative: bool = False) -> None:
    if not isinstance(value, numbers.Real) or not math.isfinite(value):
        result.errors.append(f"{name} must be a finite number, got {value!r}.")
    elif value < 0 and not allow_negative:
        result.errors.append(f"{name} must not be negative (got {value}).")


def _check_settings(settings: EngineSettings, result: ValidationResult) -> None:
    if settings.max_iterations < 1:
        result.errors.append(f"settings.max_iterations must be at least 1 (got {settings.max_iterations}).")
    if settings.histogram_buckets < 1:
        result.errors.append(f"settings.histogram_buckets must be at least 1 (got {settings.histogram_buckets}).")
    if not 0 <= settings.weather_event_probability <= 1:
        result.errors.append(
            f"settings.weather_event_probability must lie in [0, 1] "
            f"(got {settings.weather_event_probability})."
        )
    if not settings.weeks_per_month > 0:
        result.errors.append(f"settings.weeks_per_month must be positive (got {settings.weeks_per_month}).")
    if len(settings.percentiles) != 3 or not all(0 <= p < 1 for p in settings.percentiles):
        result.errors.append(
            f"settings.percentiles must be three values in [0, 1) (got {settings.percentiles})."
        )
    missing = [w.value for w in WeatherSensitivity if w not in settings.weather_multipliers]
    if missing:
        result.errors.append(f"settings.weather_multipliers has no entry for {missing}.")


def validate_scenario(
    scenario: ScenarioConfig,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> ValidationResult:
    """
    Run all validation checks on a scenario.
    Returns a ValidationResult with errors (blocking) and warnings (informational).
    """
    result = ValidationResult()
    s = scenario

    _check_settings(settings, result)

    # --- Structure ---
    if not isinstance(s.periods, numbers.Integral) or s.periods <= 0:
        result.errors.append(f"periods must be a positive integer (got {s.periods!r}).")
    if not isinstance(s.iterations, numbers.Integral) or s.iterations <= 0:
        result.errors.append(f"iterations must be a positive integer (got {s.iterations!r}).")
    elif s.iterations > settings.max_iterations:
        result.warnings.append(
            f"iterations {s.iterations} exceeds the cap of {settings.max_iterations}; "
            f"the run will be clamped."
        )
    if not isinstance(s.trading_days, numbers.Integral) or not 1 <= s.trading_days <= 7:
        result.errors.append(f"trading_days must be an integer in 1..7 (got {s.trading_days!r}).")
    if not isinstance(s.seats, numbers.Integral) or s.seats < 0:
        result.errors.append(f"seats must be a non-negative integer (got {s.seats!r}).")

    # --- Ranged inputs ---
    degenerate = []
    for name, t in s.triples():
        if not isinstance(t, Triple):
            result.errors.append(f"{name} must be a (min, likely, max) Triple, got {t!r}.")
            continue
        _check_triple(name, t, result)
        if t.is_degenerate:
            degenerate.append(name)
    if degenerate:
        result.warnings.append(f"Fixed (degenerate) ranges: {', '.join(degenerate)}.")

    # --- Money and financing ---
    for name in ("rent_monthly", "capex", "contingency_pct", "loan_interest_pct"):
        _check_number(name, getattr(s, name), result)
    _check_number("rent_escalation_pct", s.rent_escalation_pct, result, allow_negative=True)
    if isinstance(s.rent_escalation_pct, numbers.Real) and s.rent_escalation_pct <= -100:
        result.errors.append(
            f"rent_escalation_pct must exceed -100 (got {s.rent_escalation_pct}); rent cannot go negative."
        )
    if not isinstance(s.loan_term_months, numbers.Integral) or s.loan_term_months <= 0:
        result.errors.append(
            f"loan_term_months must be a positive integer (got {s.loan_term_months!r})."
        )

    # --- Weather ---
    try:
        WeatherSensitivity(s.weather_sensitivity)
    except ValueError:
        levels = [w.value for w in WeatherSensitivity]
        result.errors.append(
            f"weather_sensitivity must be one of {levels} (got {s.weather_sensitivity!r})."
        )

    # --- Plausibility ---
    if result.is_valid:
        prime = s.food_cost_pct.likely + s.beverage_cost_pct.likely + s.labour_pct.likely
        if prime > PRIME_COST_WARN_PCT:
            result.warnings.append(
                f"Prime cost (food + beverage + labour, likely) is {prime:.1f}% of revenue, "
                f"above {PRIME_COST_WARN_PCT:.0f}%."
            )

    return result


def require_valid(
    scenario: ScenarioConfig,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> ValidationResult:
    """Validate and raise ScenarioConfigError on any blocking error."""
    result = validate_scenario(scenario, settings)
    for w in result.warnings:
        LOGGER.warning("%s: %s", scenario.name, w)
    if not result.is_valid:
        raise ScenarioConfigError(result.errors)
    return result
