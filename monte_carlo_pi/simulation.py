"""
Monte Carlo estimate of pi from uniform points in the unit square.

Each point lands inside the quarter circle x^2 + y^2 < 1 with probability pi/4,
so after i draws the running estimate is 4 * (hits so far) / i. The estimate
drifts toward pi as i grows but nothing bounds it for small i.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

DEFAULT_SEED = 2019
DEFAULT_SAMPLES = 5000


@dataclass
class PiSimulationResult:
    n_samples: int
    seed: int
    n_inside: int
    final_estimate: float
    abs_error: float
    std_error: float
    checkpoints: Dict[int, float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "n_samples": self.n_samples,
            "seed": self.seed,
            "n_inside": self.n_inside,
            "final_estimate": self.final_estimate,
            "abs_error": self.abs_error,
            "std_error": self.std_error,
            # json keys must be strings
            "checkpoints": {str(k): v for k, v in self.checkpoints.items()},
        }


def running_pi_estimate(inside) -> np.ndarray:
    """4 * cumulative hit count / row number, for rows numbered from 1."""
    hits = np.cumsum(np.asarray(inside, dtype=bool))
    return 4.0 * hits / np.arange(1, hits.size + 1)


def simulate_points(n_samples: int = DEFAULT_SAMPLES, seed: int = DEFAULT_SEED) -> pd.DataFrame:
    """Draw ``n_samples`` points and return them with the inside flag and running estimate."""
    if n_samples < 1:
        raise ValueError(f"n_samples must be at least 1, got {n_samples}")

    rng = np.random.default_rng(seed)
    return (
        pd.DataFrame(
            {
                "sample": np.arange(1, n_samples + 1),
                "x": rng.random(n_samples),
                "y": rng.random(n_samples),
            }
        )
        .assign(inside=lambda d: d["x"] ** 2 + d["y"] ** 2 < 1.0)
        .assign(pi_estimate=lambda d: running_pi_estimate(d["inside"]))
    )


def checkpoint_sizes(n_samples: int) -> List[int]:
    """Powers of ten up to ``n_samples``, always ending with ``n_samples`` itself."""
    sizes = []
    size = 10
    while size < n_samples:
        sizes.append(size)
        size *= 10
    sizes.append(n_samples)
    return sizes


def summarize(points: pd.DataFrame, seed: int = DEFAULT_SEED) -> PiSimulationResult:
    n = len(points)
    inside = points["inside"].to_numpy(dtype=bool)
    p_hat = inside.mean()
    final = float(points["pi_estimate"].iloc[-1])
    estimates = points["pi_estimate"].to_numpy()
    return PiSimulationResult(
        n_samples=n,
        seed=seed,
        n_inside=int(inside.sum()),
        final_estimate=final,
        abs_error=abs(final - np.pi),
        std_error=float(4.0 * np.sqrt(p_hat * (1.0 - p_hat) / n)),
        checkpoints={size: float(estimates[size - 1]) for size in checkpoint_sizes(n)},
    )


def plot_convergence(points: pd.DataFrame, path: Path, log_x: bool = False) -> Path:
    """Running estimate against sample count, with a reference line at pi."""
    plt.figure(figsize=(8, 4.5))
    plt.plot(points["sample"], points["pi_estimate"], linewidth=1.2, label="running estimate")
    plt.axhline(np.pi, color="crimson", linestyle="--", linewidth=1.2, label="π")
    if log_x:
        plt.xscale("log")
    plt.xlabel("Number of samples")
    plt.ylabel("Estimate of π")
    plt.title(f"Monte Carlo estimate of π (final: {points['pi_estimate'].iloc[-1]:.5f})")
    plt.grid(True, ls="--", alpha=0.4)
    plt.legend()
    plt.tight_layout()
    plt.savefig(path, dpi=150)
    plt.close()
    return path


def plot_points(points: pd.DataFrame, path: Path, limit: int = 2000) -> Path:
    """Scatter of the first ``limit`` points, coloured by quarter-circle membership."""
    shown = points.head(limit)
    theta = np.linspace(0.0, np.pi / 2, 200)

    fig, ax = plt.subplots(figsize=(5, 5))
    ax.scatter(shown.loc[shown["inside"], "x"], shown.loc[shown["inside"], "y"], s=4, c="#4C72B0", label="inside")
    ax.scatter(shown.loc[~shown["inside"], "x"], shown.loc[~shown["inside"], "y"], s=4, c="#C44E52", label="outside")
    ax.plot(np.cos(theta), np.sin(theta), color="black", linewidth=1.0)
    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1)
    ax.set_aspect("equal")
    ax.set_title(f"First {len(shown)} sampled points")
    ax.legend(loc="upper right", fontsize=8)
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
    return path
