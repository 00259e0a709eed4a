"""
Monte Carlo estimation of π with a data-frame pipeline.

Run ``python -m monte_carlo_pi.run`` to sample 5000 points (seed 2019) and plot
the running estimate against the number of samples.
"""

from .run import main

__all__ = ["main"]
