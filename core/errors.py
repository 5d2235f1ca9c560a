from __future__ import annotations

from typing import Iterable, List


class ScenarioConfigError(ValueError):
    """Scenario rejected before any sampling took place."""

    def __init__(self, errors: Iterable[str]):
        self.errors: List[str] = list(errors)
        super().__init__("Invalid scenario: " + "; ".join(self.errors))


class SimulationAborted(RuntimeError):
    """Raised when a caller's abort check fires between iterations."""
