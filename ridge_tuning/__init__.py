"""
Ridge regression hyper-parameter tuning on a housing price table.

Run ``python -m ridge_tuning.run`` to split the data, compare ordinary least
squares with ridge, and pick the penalty by 10-fold cross-validation.
"""

from .run import main  # re-export the CLI entrypoint for convenience

__all__ = ["main"]
