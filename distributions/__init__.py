"""
Distributions package: the random-variate layer every simulation stage calls.
"""

from .sampler import TriangularSampler, triangular_inverse_cdf, sample

__all__ = [
    "TriangularSampler",
    "triangular_inverse_cdf",
    "sample",
]
