import argparse
import json
import logging
from pathlib import Path
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from logger_setup import setup_logger
from monte_carlo_pi.run import RESULTS_DIR as PI_RESULTS_DIR
from ridge_tuning.run import RESULTS_DIR as RIDGE_RESULTS_DIR

RIDGE_RESULTS_PATH = RIDGE_RESULTS_DIR / "ridge_results.json"
PI_RESULTS_PATH = PI_RESULTS_DIR / "pi_results.json"

# under `python -m` __name__ is "__main__"; keep the package logger name
logger = logging.getLogger(__spec__.name if __spec__ else __name__)


def _load_json(path: Path) -> Optional[dict]:
    if not path.exists():
        logger.warning("Missing file: %s", path)
        return None
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


CV_MARKERS = (
    ("best_lambda", "min CV error", "crimson", "--"),
    ("lambda_1se", "1-SE rule", "gray", ":"),
)


def _plot_cv_panel(ax, entry: dict) -> None:
    """Mean CV error over the penalty grid, with each selected penalty marked on the curve."""
    curve = pd.DataFrame(
        {
            "lambda": entry.get("lambda_grid", []),
            "mse": entry.get("mean_cv_errors", []),
        }
    ).astype(float)
    ax.set_title(f"{entry.get('response', 'response')}\nCV MSE vs λ")
    ax.set_xlabel("λ")
    ax.set_ylabel("CV MSE")
    ax.grid(True, which="both", linestyle="--", alpha=0.3)
    if curve.empty:
        return

    ax.plot(curve["lambda"], curve["mse"], marker="o", linewidth=1.6)
    ax.set_xscale("log")
    for key, label, color, style in CV_MARKERS:
        chosen = entry.get(key)
        if chosen is None:
            continue
        # both penalties are grid points; take the nearest in case of float round-off
        row = curve.iloc[int(np.argmin(np.abs(curve["lambda"] - chosen)))]
        ax.axvline(chosen, color=color, linestyle=style, linewidth=1.2, label=f"{label} (λ={chosen:.3g})")
        ax.scatter([row["lambda"]], [row["mse"]], color=color, zorder=5)
    ax.legend(fontsize=8)


def _plot_rmse_panel(ax, entry: dict) -> None:
    labels = ["OLS train", "OLS test", "Ridge train", "Ridge test"]
    keys = ["ols_train_rmse", "ols_test_rmse", "ridge_train_rmse", "ridge_test_rmse"]
    colors = ["#4C72B0", "#4C72B0", "#55A868", "#55A868"]

    values = []
    annotations = []
    for key in keys:
        value = entry.get(key)
        if value is None or not np.isfinite(value):
            values.append(0.0)
            annotations.append("N/A")
        else:
            values.append(value)
            annotations.append(f"{value:.3g}")

    ax.bar(labels, values, color=colors)
    for label, value, annotation in zip(labels, values, annotations):
        ax.text(label, value, annotation, ha="center", va="bottom", fontsize=8)
    ax.set_title("RMSE comparison")
    ax.set_ylabel("RMSE")
    ax.tick_params(axis="x", labelrotation=20)


def _plot_pi_panel(ax, entry: dict) -> None:
    checkpoints = entry.get("checkpoints", {})
    sizes = np.asarray([int(k) for k in checkpoints], dtype=int)
    estimates = np.asarray(list(checkpoints.values()), dtype=float)
    order = np.argsort(sizes)

    ax.plot(sizes[order], estimates[order], marker="o", linewidth=1.6)
    ax.axhline(np.pi, color="crimson", linestyle="--", linewidth=1.2)
    ax.set_xscale("log")
    ax.set_title(f"π estimate (seed {entry.get('seed')})")
    ax.set_xlabel("Samples")
    ax.set_ylabel("Estimate")
    ax.grid(True, which="both", linestyle="--", alpha=0.3)


def build_summary(
    output_dir: Path,
    ridge_path: Path = RIDGE_RESULTS_PATH,
    pi_path: Path = PI_RESULTS_PATH,
) -> Optional[Path]:
    """Render one figure and a metrics table from whichever result files exist."""
    ridge = _load_json(Path(ridge_path))
    pi = _load_json(Path(pi_path))
    if ridge is None and pi is None:
        logger.warning("No results found; run ridge_tuning.run or monte_carlo_pi.run first.")
        return None

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    panels = []
    if ridge is not None:
        panels += [(_plot_cv_panel, ridge), (_plot_rmse_panel, ridge)]
    if pi is not None:
        panels.append((_plot_pi_panel, pi))

    fig, axes = plt.subplots(1, len(panels), figsize=(5 * len(panels), 4.5), squeeze=False)
    for ax, (plot_fn, entry) in zip(axes[0], panels):
        plot_fn(ax, entry)
    fig.tight_layout()
    figure_path = output_dir / "summary.png"
    fig.savefig(figure_path, dpi=150)
    plt.close(fig)
    logger.info("Saved summary figure to %s", figure_path)

    rows = []
    if ridge is not None:
        rows += [
            {"metric": "best_lambda", "value": ridge.get("best_lambda")},
            {"metric": "lambda_1se", "value": ridge.get("lambda_1se")},
            {"metric": "ols_test_rmse", "value": ridge.get("ols_test_rmse")},
            {"metric": "ridge_test_rmse", "value": ridge.get("ridge_test_rmse")},
        ]
    if pi is not None:
        rows += [
            {"metric": "pi_final_estimate", "value": pi.get("final_estimate")},
            {"metric": "pi_std_error", "value": pi.get("std_error")},
        ]
    pd.DataFrame(rows).to_csv(output_dir / "summary_metrics.csv", index=False)
    logger.info("Saved summary metrics to %s", output_dir / "summary_metrics.csv")
    return figure_path


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Summarise the ridge tuning and Monte Carlo π results.")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("analysis") / "output",
        help="Directory where the summary figure and table are written.",
    )
    parser.add_argument("--ridge-results", type=Path, default=RIDGE_RESULTS_PATH)
    parser.add_argument("--pi-results", type=Path, default=PI_RESULTS_PATH)
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    setup_logger("analysis", args.log_level)
    build_summary(args.output_dir, ridge_path=args.ridge_results, pi_path=args.pi_results)


if __name__ == "__main__":
    main()
