import argparse
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from joblib import dump

from logger_setup import setup_logger

from .data import DATA_URL, RESPONSE, load_housing, make_design_matrix, split_frame
from .model import LinearFit, evaluate, fit_ols, fit_penalized
from .search import LAMBDA_COUNT, LAMBDA_MAX, LAMBDA_MIN, N_SPLITS, PenaltySearch, lambda_grid, search_penalty

OUTPUT_DIR = Path(__file__).resolve().parent
RESULTS_DIR = OUTPUT_DIR / "results"
DEFAULT_SEED = 2019
TEST_SIZE = 0.2

# under `python -m` __name__ is "__main__"; keep the package logger name
logger = logging.getLogger(__spec__.name if __spec__ else __name__)


@dataclass
class RidgeStudyResult:
    """Outcome of one split / tune / refit / evaluate pass."""

    response: str
    n_train: int
    n_test: int
    search: PenaltySearch
    ols: LinearFit
    ridge: LinearFit
    ols_train_rmse: float
    ols_test_rmse: float
    ridge_train_rmse: float
    ridge_test_rmse: float
    feature_names: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "response": self.response,
            "n_train": self.n_train,
            "n_test": self.n_test,
            **self.search.to_dict(),
            "ols": self.ols.to_dict(),
            "ridge": self.ridge.to_dict(),
            "ols_train_rmse": self.ols_train_rmse,
            "ols_test_rmse": self.ols_test_rmse,
            "ridge_train_rmse": self.ridge_train_rmse,
            "ridge_test_rmse": self.ridge_test_rmse,
            "feature_names": self.feature_names,
        }


def coefficient_table(ols: LinearFit, ridge: LinearFit, feature_names: Sequence[str]) -> pd.DataFrame:
    """Side-by-side OLS and ridge estimates, intercept first."""
    index = ["(Intercept)"] + list(feature_names)
    return pd.DataFrame(
        {
            "ols": np.concatenate([[ols.intercept], ols.coefficients]),
            "ridge": np.concatenate([[ridge.intercept], ridge.coefficients]),
        },
        index=index,
    )


def describe_top_attributes(fit: LinearFit, feature_names: Sequence[str], top_k: int = 5) -> str:
    coefs = pd.Series(fit.coefficients, index=list(feature_names))
    top_features = coefs.abs().sort_values(ascending=False).index[:top_k]
    lines = [f"Top attributes (|beta|, lambda={fit.penalty:.4g}):"]
    for feat in top_features:
        direction = "increases" if coefs[feat] > 0 else "decreases"
        lines.append(f"  - {feat}: {direction} the prediction ({coefs[feat]:.4g})")
    return "\n".join(lines)


def save_fold_errors(result_dir: Path, search: PenaltySearch) -> Path:
    records = []
    for lambda_idx, alpha in enumerate(search.lambdas):
        for fold_idx, err in enumerate(search.fold_errors[lambda_idx]):
            records.append({"lambda": alpha, "fold": fold_idx + 1, "mse": err})
    path = result_dir / "cv_errors.csv"
    pd.DataFrame(records).to_csv(path, index=False)
    return path


def plot_cv_curve(result_dir: Path, search: PenaltySearch, n_splits: int) -> Path:
    """Plot mean CV error against lambda, marking the minimum and the 1-SE choice."""
    plt.figure(figsize=(7, 5))
    plt.plot(search.lambdas, search.cv_errors, marker="o")
    plt.axvline(search.best_lambda, color="crimson", linestyle="--", label="min CV error")
    plt.axvline(search.lambda_1se, color="gray", linestyle=":", label="1-SE rule")
    plt.xscale("log")
    plt.xlabel("Regularization strength (lambda)")
    plt.ylabel(f"{n_splits}-fold CV MSE")
    plt.title(f"CV error vs lambda\nBest λ={search.best_lambda:.4g}, MSE={search.best_error:.4g}")
    plt.grid(True, which="both", ls="--", alpha=0.4)
    plt.legend()
    path = result_dir / "lambda_curve.png"
    plt.tight_layout()
    plt.savefig(path, dpi=150)
    plt.close()
    return path


def save_predictions_csv(result_dir: Path, name: str, actual: pd.Series, predictions: dict) -> Path:
    out = pd.DataFrame({"actual": actual.to_numpy()}, index=actual.index)
    for key, preds in predictions.items():
        out[f"{key}_pred"] = preds
    path = result_dir / f"{name}_predictions.csv"
    out.to_csv(path, index=True)
    return path


def run_study(
    df: pd.DataFrame,
    response: str = RESPONSE,
    lambdas: Optional[np.ndarray] = None,
    n_splits: int = N_SPLITS,
    test_size: float = TEST_SIZE,
    random_state: int = DEFAULT_SEED,
    standardize: bool = False,
    results_dir: Path = RESULTS_DIR,
    save_predictions: bool = False,
) -> RidgeStudyResult:
    """Split, tune the penalty by CV on the training rows, refit, and evaluate on the test rows."""
    if lambdas is None:
        lambdas = lambda_grid()
    results_dir = Path(results_dir)
    results_dir.mkdir(parents=True, exist_ok=True)

    X_df, y = make_design_matrix(df, response)
    feature_names = X_df.columns.tolist()
    X_train, X_test, y_train, y_test = split_frame(X_df, y, test_size=test_size, random_state=random_state)
    logger.info("Split %d rows into %d train / %d test", len(X_df), len(X_train), len(X_test))

    ols = fit_ols(X_train, y_train)
    search = search_penalty(
        X_train,
        y_train,
        lambdas,
        n_splits=n_splits,
        random_state=random_state,
        standardize=standardize,
    )
    ridge = fit_penalized(X_train, y_train, search.best_lambda, standardize=standardize)

    result = RidgeStudyResult(
        response=response,
        n_train=len(X_train),
        n_test=len(X_test),
        search=search,
        ols=ols,
        ridge=ridge,
        ols_train_rmse=evaluate(ols, X_train, y_train),
        ols_test_rmse=evaluate(ols, X_test, y_test),
        ridge_train_rmse=evaluate(ridge, X_train, y_train),
        ridge_test_rmse=evaluate(ridge, X_test, y_test),
        feature_names=feature_names,
    )

    table = coefficient_table(ols, ridge, feature_names)
    print(f"\n=== Ridge tuning: {response} ===")
    print(table.to_string(float_format=lambda v: f"{v:.4f}"))
    print(f"Selected λ (min CV MSE): {search.best_lambda:.4g} | λ (1-SE): {search.lambda_1se:.4g}")
    print(f"OLS   RMSE train: {result.ols_train_rmse:.4f} | test: {result.ols_test_rmse:.4f}")
    print(f"Ridge RMSE train: {result.ridge_train_rmse:.4f} | test: {result.ridge_test_rmse:.4f}")
    print(describe_top_attributes(ridge, feature_names))

    errors_path = save_fold_errors(results_dir, search)
    curve_path = plot_cv_curve(results_dir, search, n_splits)
    table_path = results_dir / "coefficients.csv"
    table.to_csv(table_path, index_label="term")
    logger.info("Saved fold-by-fold errors to %s", errors_path)
    logger.info("Saved lambda curve to %s", curve_path)
    logger.info("Saved coefficient table to %s", table_path)

    model_path = results_dir / "model.joblib"
    dump(ridge, model_path)
    with (results_dir / "feature_names.json").open("w", encoding="utf-8") as handle:
        json.dump(feature_names, handle, indent=2)
    logger.info("Saved fitted model to %s", model_path)

    if save_predictions:
        train_path = save_predictions_csv(
            results_dir, "train", y_train, {"ols": ols.predict(X_train), "ridge": ridge.predict(X_train)}
        )
        test_path = save_predictions_csv(
            results_dir, "test", y_test, {"ols": ols.predict(X_test), "ridge": ridge.predict(X_test)}
        )
        logger.info("Saved predictions to %s and %s", train_path, test_path)

    summary_path = results_dir / "ridge_results.json"
    with summary_path.open("w", encoding="utf-8") as handle:
        json.dump(result.to_dict(), handle, indent=2)
    logger.info("Saved numeric summary to %s", summary_path)

    return result


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Ridge regression penalty tuning on housing prices.")
    parser.add_argument("--data", default=DATA_URL, help="CSV path or URL of the housing dataset.")
    parser.add_argument("--response", default=RESPONSE, help=f"Response column (default: {RESPONSE}).")
    parser.add_argument("--folds", type=int, default=N_SPLITS, help="Number of CV folds (default: 10).")
    parser.add_argument(
        "--lambda-min",
        type=float,
        default=LAMBDA_MIN,
        dest="lambda_min",
        help="Lower bound of the logarithmic lambda grid (default: 1e-4).",
    )
    parser.add_argument(
        "--lambda-max",
        type=float,
        default=LAMBDA_MAX,
        dest="lambda_max",
        help="Upper bound of the logarithmic lambda grid (default: 1e3).",
    )
    parser.add_argument(
        "--lambda-count",
        type=int,
        default=LAMBDA_COUNT,
        dest="lambda_count",
        help="Number of lambda values sampled between the bounds (default: 30).",
    )
    parser.add_argument(
        "--test-size",
        type=float,
        default=TEST_SIZE,
        help="Fraction of rows held out for testing (default: 0.2).",
    )
    parser.add_argument(
        "--random-state",
        type=int,
        default=DEFAULT_SEED,
        help="Seed controlling the train/test split and CV shuffling (default: 2019).",
    )
    parser.add_argument(
        "--standardize",
        action="store_true",
        help="Penalize coefficients of standardized features instead of raw ones.",
    )
    parser.add_argument("--results-dir", type=Path, default=RESULTS_DIR, help="Where to write artefacts.")
    parser.add_argument(
        "--save-predictions",
        action="store_true",
        help="Persist actual vs. predicted values for the train and test rows.",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO).")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    setup_logger("ridge_tuning", args.log_level)

    df = load_housing(args.data, response=args.response)
    lambdas = lambda_grid(args.lambda_min, args.lambda_max, args.lambda_count)
    run_study(
        df,
        response=args.response,
        lambdas=lambdas,
        n_splits=args.folds,
        test_size=args.test_size,
        random_state=args.random_state,
        standardize=args.standardize,
        results_dir=args.results_dir,
        save_predictions=args.save_predictions,
    )


if __name__ == "__main__":
    main()
