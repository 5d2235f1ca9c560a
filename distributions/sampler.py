"""
Triangular sampler: the leaf of the simulation.

Every uncertain venue input is a three-point estimate (min, likely, max).
Draws use the inverse-CDF method so that one uniform variate maps to exactly
one triangular variate:

    u  ~ Uniform(0, 1)
    fc = (likely - min) / (max - min)
    u < fc  ->  min + sqrt(u * (max - min) * (likely - min))
    else    ->  max - sqrt((1 - u) * (max - min) * (max - likely))

numpy's Generator.triangular is not used: it rejects min == max, and the
degenerate case is common here (fixed costs entered as ranges).
"""

from __future__ import annotations

from typing import Optional, Union

import numpy as np

from core.schema import Triple

SeedLike = Union[None, int, np.random.SeedSequence, np.random.Generator]


def triangular_inverse_cdf(u, low: float, likely: float, high: float):
    """Map uniform variate(s) `u` onto the triangular distribution."""
    u = np.asarray(u, dtype=float)
    if high == low:
        return np.full(u.shape, float(likely))
    span = high - low
    fc = (likely - low) / span
    left = low + np.sqrt(u * span * (likely - low))
    right = high - np.sqrt((1.0 - u) * span * (high - likely))
    return np.where(u < fc, left, right)


class TriangularSampler:
    """
    Seedable source of triangular and Bernoulli draws.

    Usage:
        sampler = TriangularSampler(seed=42)
        sampler.sample(20, 25, 35)                 # one float
        sampler.sample(20, 25, 35, size=36)        # one draw per month
        sampler.sample_triple(scenario.labour_pct, size=36)
    """

    def __init__(self, seed: SeedLike = None):
        if isinstance(seed, np.random.Generator):
            self.rng = seed
        else:
            self.rng = np.random.default_rng(seed)

    def sample(
        self,
        low: float,
        likely: float,
        high: float,
        size: Optional[int] = None,
    ):
        """
        Draw from Triangular(low, likely, high).

        Returns a float when `size` is None, otherwise an array of `size`
        independent draws. Degenerate ranges still consume their uniforms so
        that the stream position does not depend on the inputs.
        """
        u = self.rng.random(size)
        x = triangular_inverse_cdf(u, low, likely, high)
        if size is None:
            return float(x)
        return x

    def sample_triple(self, triple: Triple, size: Optional[int] = None):
        return self.sample(triple.min, triple.likely, triple.max, size=size)

    def bernoulli(self, p: float, size: Optional[int] = None):
        """True with probability p (one uniform per trial)."""
        return self.rng.random(size) < p


def sample(low: float, likely: float, high: float, *, seed: SeedLike = None) -> float:
    """One-off draw; pass `seed` for a reproducible value."""
    return TriangularSampler(seed).sample(low, likely, high)
