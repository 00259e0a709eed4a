"""
Ordinary and penalized least-squares fits with a small prediction wrapper.

``fit_penalized`` minimizes ``||y - b0 - X b||^2 + penalty * ||b||^2`` with an
unpenalized intercept. At ``penalty == 0`` this is ordinary least squares; a
singular design at zero penalty is left to the underlying solver.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
from sklearn.linear_model import LinearRegression, Ridge
from sklearn.metrics import mean_squared_error
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import StandardScaler


@dataclass
class LinearFit:
    """Intercept and coefficients expressed in the original feature scale."""

    intercept: float
    coefficients: np.ndarray
    penalty: float
    feature_names: Optional[List[str]] = field(default=None)

    def predict(self, X) -> np.ndarray:
        X_arr = np.asarray(X, dtype=float)
        return self.intercept + X_arr @ self.coefficients

    def to_dict(self) -> dict:
        names = self.feature_names or [f"x{i}" for i in range(len(self.coefficients))]
        return {
            "penalty": float(self.penalty),
            "intercept": float(self.intercept),
            "coefficients": dict(zip(names, self.coefficients.tolist())),
        }


def _feature_names(X) -> Optional[List[str]]:
    columns = getattr(X, "columns", None)
    return [str(c) for c in columns] if columns is not None else None


def fit_ols(X, y) -> LinearFit:
    """Ordinary least squares with an intercept."""
    reg = LinearRegression(fit_intercept=True)
    reg.fit(np.asarray(X, dtype=float), np.asarray(y, dtype=float))
    return LinearFit(
        intercept=float(reg.intercept_),
        coefficients=np.asarray(reg.coef_, dtype=float),
        penalty=0.0,
        feature_names=_feature_names(X),
    )


def fit_penalized(X, y, penalty: float, standardize: bool = False) -> LinearFit:
    """
    Fit ridge regression and return coefficients on the original feature scale.

    Parameters
    ----------
    X:
        Design matrix (array or DataFrame), shape (n_rows, n_features).
    y:
        Response vector.
    penalty:
        Non-negative ridge strength (lambda).
    standardize:
        Penalize coefficients of standardized features instead of raw ones. The
        returned coefficients are mapped back so that ``predict`` takes raw inputs.
    """
    X_arr = np.asarray(X, dtype=float)
    y_arr = np.asarray(y, dtype=float)

    if not standardize:
        reg = Ridge(alpha=penalty, fit_intercept=True)
        reg.fit(X_arr, y_arr)
        return LinearFit(
            intercept=float(reg.intercept_),
            coefficients=np.asarray(reg.coef_, dtype=float),
            penalty=float(penalty),
            feature_names=_feature_names(X),
        )

    model = Pipeline(
        steps=[
            ("scaler", StandardScaler(with_mean=True, with_std=True)),
            ("reg", Ridge(alpha=penalty, fit_intercept=True)),
        ]
    )
    model.fit(X_arr, y_arr)

    scaler: StandardScaler = model.named_steps["scaler"]
    reg: Ridge = model.named_steps["reg"]

    # constant columns have scale_ == 1 in recent sklearn, older releases report 0
    scale_safe = np.where(scaler.scale_ == 0, 1.0, scaler.scale_)
    coef_original = np.asarray(reg.coef_, dtype=float) / scale_safe
    intercept_original = float(reg.intercept_) - float(coef_original @ scaler.mean_)

    return LinearFit(
        intercept=intercept_original,
        coefficients=coef_original,
        penalty=float(penalty),
        feature_names=_feature_names(X),
    )


def ridge_closed_form(X, y, penalty: float) -> LinearFit:
    """Normal-equation ridge solution on centered data, used as a reference."""
    X_arr = np.asarray(X, dtype=float)
    y_arr = np.asarray(y, dtype=float)
    x_mean = X_arr.mean(axis=0)
    y_mean = y_arr.mean()
    Xc = X_arr - x_mean
    yc = y_arr - y_mean

    gram = Xc.T @ Xc + penalty * np.eye(X_arr.shape[1])
    beta = np.linalg.solve(gram, Xc.T @ yc)
    return LinearFit(
        intercept=float(y_mean - x_mean @ beta),
        coefficients=beta,
        penalty=float(penalty),
        feature_names=_feature_names(X),
    )


def rmse(y_true, y_pred) -> float:
    """Root-mean-squared error, sqrt(mean((prediction - actual)^2))."""
    return float(np.sqrt(mean_squared_error(np.asarray(y_true, dtype=float), np.asarray(y_pred, dtype=float))))


def evaluate(fit: LinearFit, X, y) -> float:
    return rmse(y, fit.predict(X))
