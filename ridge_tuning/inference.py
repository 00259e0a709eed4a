"""
Score new housing rows with the ridge model saved by ``python -m ridge_tuning.run``.

The trainer writes ``model.joblib`` and ``feature_names.json`` into its results
directory; this script reads both back, aligns the input columns to the training
order and prints (or saves) the predictions.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pandas as pd
from joblib import load

from logger_setup import setup_logger

from .model import LinearFit
from .run import RESULTS_DIR

# under `python -m` __name__ is "__main__"; keep the package logger name
logger = logging.getLogger(__spec__.name if __spec__ else __name__)


def load_artifacts(results_dir: Path = RESULTS_DIR) -> Tuple[List[str], LinearFit]:
    """Load the saved ridge fit and its feature ordering."""
    results_dir = Path(results_dir)
    model_path = results_dir / "model.joblib"
    feature_names_path = results_dir / "feature_names.json"

    if not model_path.exists():
        raise FileNotFoundError(
            f"Missing trained model in '{results_dir}'. Run `python -m ridge_tuning.run` first."
        )
    if not feature_names_path.exists():
        raise FileNotFoundError(
            f"Missing feature name list in '{results_dir}'. Did the training complete successfully?"
        )

    model = load(model_path)
    with feature_names_path.open("r", encoding="utf-8") as handle:
        feature_names = json.load(handle)
    return feature_names, model


def prepare_features(feature_names: Sequence[str], rows: pd.DataFrame) -> pd.DataFrame:
    """Expand categorical inputs and align to the training columns, filling gaps with zero."""
    df = pd.get_dummies(rows, dtype=float)
    missing = [col for col in feature_names if col not in df.columns]
    if missing:
        logger.debug("Filling %d missing feature columns with 0: %s", len(missing), missing)
    return df.reindex(columns=list(feature_names), fill_value=0.0).astype(float)


def predict_rows(rows: pd.DataFrame, results_dir: Path = RESULTS_DIR, response: str = "prediction") -> pd.DataFrame:
    feature_names, model = load_artifacts(results_dir)
    features = prepare_features(feature_names, rows)
    out = rows.reset_index(drop=True).copy()
    out[f"{response}_pred"] = model.predict(features.values)
    return out


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Predict housing prices with a saved ridge fit.")
    parser.add_argument("input_csv", help="CSV file with the feature columns to score.")
    parser.add_argument("--results-dir", type=Path, default=RESULTS_DIR, help="Trainer artefact directory.")
    parser.add_argument("--output", type=Path, default=None, help="Optional CSV path for the scored rows.")
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    setup_logger("ridge_tuning", args.log_level)

    rows = pd.read_csv(args.input_csv)
    output_df = predict_rows(rows, results_dir=args.results_dir)

    print("\nPredictions:")
    print(output_df)

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        output_df.to_csv(args.output, index=False)
        logger.info("Saved inference results to %s", args.output)


if __name__ == "__main__":
    main()
