"""
Monte Carlo runner: repeats the period roll-forward and reduces the lives.

Randomness: one root SeedSequence per run, spawned into one child stream per
iteration. Iteration i always sees the same stream for a given seed, so the
result is identical whether the lives are simulated sequentially or spread
over worker threads.

Failure modes:
  - invalid scenario       -> ScenarioConfigError before any sampling
  - caller abort requested -> SimulationAborted between iterations
No partial result is ever returned.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, List, Optional, Sequence, Tuple, Union

import numpy as np

from analytics.aggregator import SimulationAccumulator
from analytics.results import SimulationResult
from core.config import DEFAULT_SETTINGS, EngineSettings
from core.errors import SimulationAborted
from core.schema import ScenarioConfig
from data_prep.validators import require_valid
from distributions.sampler import TriangularSampler

from .cashflow import IterationTrace, loan_payment_for, roll_forward

LOGGER = logging.getLogger(__name__)

SeedInput = Union[None, int, np.random.SeedSequence]
AbortCheck = Callable[[], bool]


def _root_sequence(seed: SeedInput) -> np.random.SeedSequence:
    if isinstance(seed, np.random.SeedSequence):
        return seed
    return np.random.SeedSequence(seed)


def _replay_seed(root: np.random.SeedSequence) -> Optional[int]:
    """The int that recreates `root`, when there is one."""
    if isinstance(root.entropy, int) and not root.spawn_key:
        return int(root.entropy)
    return None


def _simulate_range(
    scenario: ScenarioConfig,
    settings: EngineSettings,
    loan_payment: float,
    streams: Sequence[np.random.SeedSequence],
    indices: Sequence[int],
    should_abort: Optional[AbortCheck],
    stop: threading.Event,
) -> List[Tuple[int, IterationTrace]]:
    out = []
    for i in indices:
        if stop.is_set():
            raise SimulationAborted(f"Aborted before iteration {i} (another worker stopped).")
        if should_abort is not None and should_abort():
            stop.set()
            raise SimulationAborted(f"Aborted before iteration {i}.")
        sampler = TriangularSampler(streams[i])
        out.append((i, roll_forward(scenario, sampler, settings=settings, loan_payment=loan_payment)))
    return out


def run_simulation(
    scenario: ScenarioConfig,
    *,
    seed: SeedInput = None,
    settings: Optional[EngineSettings] = None,
    workers: int = 1,
    should_abort: Optional[AbortCheck] = None,
) -> SimulationResult:
    """
    Run the full Monte Carlo simulation for one scenario.

    Parameters
    ----------
    scenario : ScenarioConfig
        Complete, caller-supplied venue scenario (never mutated).
    seed : int or SeedSequence, optional
        Root of all randomness. None draws fresh OS entropy; the entropy used
        is reported back in `SimulationResult.seed`.
    settings : EngineSettings, optional
        Policy constants; defaults reproduce the reference model.
    workers : int
        Worker threads. Any value gives the same result for the same seed.
    should_abort : callable, optional
        Polled between iterations; returning True raises SimulationAborted.
    """
    settings = settings or DEFAULT_SETTINGS
    require_valid(scenario, settings)
    if workers < 1:
        raise ValueError(f"workers must be >= 1 (got {workers}).")

    n_iter = min(scenario.iterations, settings.max_iterations)
    if n_iter < scenario.iterations:
        LOGGER.info(
            "Clamping iterations from %d to %d.", scenario.iterations, settings.max_iterations
        )

    root = _root_sequence(seed)
    streams = root.spawn(n_iter)
    loan_payment = loan_payment_for(scenario)
    acc = SimulationAccumulator(iterations=n_iter, periods=scenario.periods)
    # set by the first worker that aborts; the others stop at their next iteration
    stop = threading.Event()

    LOGGER.info(
        "Simulating '%s': %d iterations x %d months, %d worker(s), loan payment %.2f/month",
        scenario.name, n_iter, scenario.periods, workers, loan_payment,
    )
    started = time.perf_counter()

    if workers == 1:
        for i, trace in _simulate_range(
            scenario, settings, loan_payment, streams, range(n_iter), should_abort, stop
        ):
            acc.add(i, trace)
    else:
        chunks = [c for c in np.array_split(np.arange(n_iter), workers) if len(c)]
        with ThreadPoolExecutor(max_workers=len(chunks), thread_name_prefix="viability-mc") as pool:
            futures = [
                pool.submit(
                    _simulate_range,
                    scenario, settings, loan_payment, streams, chunk.tolist(), should_abort, stop,
                )
                for chunk in chunks
            ]
            try:
                for fut in as_completed(futures):
                    part = fut.result()
                    LOGGER.debug("Folding %d traces from worker chunk.", len(part))
                    for i, trace in part:
                        acc.add(i, trace)
            except BaseException:
                stop.set()
                for fut in futures:
                    fut.cancel()
                raise

    result = acc.finalize(scenario, settings, seed=_replay_seed(root))
    LOGGER.info(
        "Finished '%s' in %.2fs: survival %d%%, insolvency %d%%, P50 weekly %.0f",
        scenario.name, time.perf_counter() - started,
        result.survival_pct, result.insolvency_pct, result.weekly_profit.p50,
    )
    return result
