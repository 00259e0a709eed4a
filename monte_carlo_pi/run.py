import argparse
import json
import logging
from pathlib import Path
from typing import Optional, Sequence

from logger_setup import setup_logger

from .simulation import (
    DEFAULT_SAMPLES,
    DEFAULT_SEED,
    PiSimulationResult,
    plot_convergence,
    plot_points,
    simulate_points,
    summarize,
)

OUTPUT_DIR = Path(__file__).resolve().parent
RESULTS_DIR = OUTPUT_DIR / "results"

# under `python -m` __name__ is "__main__"; keep the package logger name
logger = logging.getLogger(__spec__.name if __spec__ else __name__)


def run_simulation(
    n_samples: int = DEFAULT_SAMPLES,
    seed: int = DEFAULT_SEED,
    results_dir: Path = RESULTS_DIR,
    plot_sample_limit: int = 2000,
    log_x: bool = False,
) -> PiSimulationResult:
    results_dir = Path(results_dir)
    results_dir.mkdir(parents=True, exist_ok=True)

    points = simulate_points(n_samples, seed=seed)
    result = summarize(points, seed=seed)

    print(f"\n=== Monte Carlo π (N={n_samples}, seed={seed}) ===")
    print(f"Points inside quarter circle: {result.n_inside} / {result.n_samples}")
    print(f"Final estimate: {result.final_estimate:.5f} ± {result.std_error:.5f} (|error| = {result.abs_error:.5f})")
    for size, estimate in result.checkpoints.items():
        print(f"  after {size:>7d} samples: {estimate:.5f}")

    trajectory_path = results_dir / "pi_trajectory.csv"
    points.to_csv(trajectory_path, index=False)
    curve_path = plot_convergence(points, results_dir / "pi_convergence.png", log_x=log_x)
    scatter_path = plot_points(points, results_dir / "pi_points.png", limit=plot_sample_limit)
    logger.info("Saved trajectory to %s", trajectory_path)
    logger.info("Saved plots to %s and %s", curve_path, scatter_path)

    summary_path = results_dir / "pi_results.json"
    with summary_path.open("w", encoding="utf-8") as handle:
        json.dump(result.to_dict(), handle, indent=2)
    logger.info("Saved numeric summary to %s", summary_path)

    return result


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Estimate π by sampling points in the unit square.")
    parser.add_argument(
        "--samples",
        type=int,
        default=DEFAULT_SAMPLES,
        help=f"Number of random points (default: {DEFAULT_SAMPLES}).",
    )
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help=f"Random seed (default: {DEFAULT_SEED}).")
    parser.add_argument("--results-dir", type=Path, default=RESULTS_DIR, help="Where to write artefacts.")
    parser.add_argument(
        "--plot-sample-limit",
        type=int,
        default=2000,
        help="Maximum number of points drawn in the scatter plot (default: 2000).",
    )
    parser.add_argument("--log-x", action="store_true", help="Use a logarithmic sample axis in the convergence plot.")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO).")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    setup_logger("monte_carlo_pi", args.log_level)
    run_simulation(
        n_samples=args.samples,
        seed=args.seed,
        results_dir=args.results_dir,
        plot_sample_limit=args.plot_sample_limit,
        log_x=args.log_x,
    )


if __name__ == "__main__":
    main()
