"""Pytest fixtures/config for the ridge tuning and Monte Carlo tests."""

import os
import sys

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def regression_data(rng):
    """Well-conditioned linear data with a known coefficient vector."""
    n, p = 120, 4
    X = rng.standard_normal((n, p))
    beta_true = np.array([1.5, -2.0, 0.5, 0.0])
    y = 3.0 + X @ beta_true + rng.standard_normal(n) * 0.1
    return X, y, beta_true


@pytest.fixture
def housing_frame(rng):
    """Small synthetic housing table with one categorical column."""
    n = 200
    rooms = rng.integers(2, 9, size=n).astype(float)
    age = rng.uniform(1, 60, size=n)
    income = rng.uniform(1, 12, size=n)
    region = rng.choice(["coast", "inland", "island"], size=n)
    region_effect = pd.Series(region).map({"coast": 40.0, "inland": 0.0, "island": 80.0}).to_numpy()
    price = 50.0 + 12.0 * rooms - 0.4 * age + 25.0 * income + region_effect + rng.normal(0, 5, size=n)
    return pd.DataFrame(
        {
            "rooms": rooms,
            "age": age,
            "income": income,
            "region": region,
            "price": price,
        }
    )
