"""
Simulation engine: monthly roll-forward of one venue life + Monte Carlo runner.
"""

from .cashflow import IterationTrace, level_payment, loan_payment_for, roll_forward
from .runner import run_simulation

__all__ = [
    "IterationTrace",
    "level_payment",
    "loan_payment_for",
    "roll_forward",
    "run_simulation",
]
