"""
K-fold cross-validated search over the ridge penalty.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

import numpy as np
from sklearn.metrics import mean_squared_error
from sklearn.model_selection import KFold

from .model import fit_penalized

logger = logging.getLogger(__name__)

LAMBDA_MIN = 1e-4
LAMBDA_MAX = 1e3
LAMBDA_COUNT = 30
N_SPLITS = 10


@dataclass
class PenaltySearch:
    """Cross-validation outcome over a penalty grid."""

    lambdas: np.ndarray
    cv_errors: np.ndarray
    fold_errors: np.ndarray
    best_lambda: float
    best_error: float
    lambda_1se: float

    def to_dict(self) -> dict:
        return {
            "lambda_grid": self.lambdas.tolist(),
            "mean_cv_errors": self.cv_errors.tolist(),
            "fold_errors": self.fold_errors.tolist(),
            "best_lambda": self.best_lambda,
            "best_error": self.best_error,
            "lambda_1se": self.lambda_1se,
        }


def lambda_grid(
    lambda_min: float = LAMBDA_MIN,
    lambda_max: float = LAMBDA_MAX,
    count: int = LAMBDA_COUNT,
) -> np.ndarray:
    """Log-spaced penalty grid between the two bounds (inclusive)."""
    return np.logspace(np.log10(lambda_min), np.log10(lambda_max), num=count)


def cross_val_ridge(
    X,
    y,
    lambdas: np.ndarray,
    n_splits: int = N_SPLITS,
    random_state: int = 2019,
    standardize: bool = False,
) -> Tuple[np.ndarray, np.ndarray]:
    """Estimate held-out MSE for each lambda; every lambda sees the same folds."""
    X_arr = np.asarray(X, dtype=float)
    y_arr = np.asarray(y, dtype=float)
    lambdas = np.atleast_1d(np.asarray(lambdas, dtype=float))

    kf = KFold(n_splits=n_splits, shuffle=True, random_state=random_state)
    folds = list(kf.split(X_arr))
    fold_errors = np.zeros((len(lambdas), n_splits))

    for lambda_idx, alpha in enumerate(lambdas):
        for fold_idx, (train_idx, test_idx) in enumerate(folds):
            fit = fit_penalized(X_arr[train_idx], y_arr[train_idx], alpha, standardize=standardize)
            preds = fit.predict(X_arr[test_idx])
            fold_errors[lambda_idx, fold_idx] = mean_squared_error(y_arr[test_idx], preds)

    mean_errors = fold_errors.mean(axis=1)
    return mean_errors, fold_errors


def select_penalty(lambdas: np.ndarray, mean_errors: np.ndarray) -> float:
    """Return the lambda with the lowest mean CV error; exact ties go to the first."""
    lambdas = np.atleast_1d(np.asarray(lambdas, dtype=float))
    if lambdas.size == 0:
        raise ValueError("Penalty grid is empty.")
    return float(lambdas[int(np.argmin(mean_errors))])


def one_standard_error_penalty(
    lambdas: np.ndarray,
    mean_errors: np.ndarray,
    fold_errors: np.ndarray,
) -> float:
    """Largest lambda whose mean error is within one standard error of the minimum."""
    lambdas = np.atleast_1d(np.asarray(lambdas, dtype=float))
    mean_errors = np.asarray(mean_errors, dtype=float)
    fold_errors = np.atleast_2d(np.asarray(fold_errors, dtype=float))
    if lambdas.size == 0:
        raise ValueError("Penalty grid is empty.")

    best_idx = int(np.argmin(mean_errors))
    n_folds = fold_errors.shape[1]
    if n_folds > 1:
        se = fold_errors[best_idx].std(ddof=1) / np.sqrt(n_folds)
    else:
        se = 0.0
    threshold = mean_errors[best_idx] + se
    within = lambdas[mean_errors <= threshold]
    return float(within.max())


def search_penalty(
    X,
    y,
    lambdas: np.ndarray,
    n_splits: int = N_SPLITS,
    random_state: int = 2019,
    standardize: bool = False,
) -> PenaltySearch:
    lambdas = np.atleast_1d(np.asarray(lambdas, dtype=float))
    if lambdas.size == 0:
        raise ValueError("Penalty grid is empty.")
    logger.info("Cross-validating %d penalties over %d folds", lambdas.size, n_splits)

    mean_errors, fold_errors = cross_val_ridge(
        X, y, lambdas, n_splits=n_splits, random_state=random_state, standardize=standardize
    )
    best_idx = int(np.argmin(mean_errors))
    return PenaltySearch(
        lambdas=lambdas,
        cv_errors=mean_errors,
        fold_errors=fold_errors,
        best_lambda=select_penalty(lambdas, mean_errors),
        best_error=float(mean_errors[best_idx]),
        lambda_1se=one_standard_error_penalty(lambdas, mean_errors, fold_errors),
    )
