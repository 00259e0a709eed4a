"""Tests for the Monte Carlo estimate of pi."""

import numpy as np
import pytest

from monte_carlo_pi.simulation import checkpoint_sizes, running_pi_estimate, simulate_points, summarize


class TestRunningEstimate:

    def test_hand_computed_sequence(self):
        estimates = running_pi_estimate([True, False, True, True])
        assert np.allclose(estimates, [4.0, 2.0, 8.0 / 3.0, 3.0])

    def test_all_outside_is_zero(self):
        assert np.allclose(running_pi_estimate([False] * 5), 0.0)

    def test_all_inside_is_four(self):
        assert np.allclose(running_pi_estimate([True] * 5), 4.0)


class TestSimulatePoints:

    @pytest.mark.parametrize("n_samples", [1, 2, 37, 1000])
    def test_length_and_bounds(self, n_samples):
        points = simulate_points(n_samples, seed=5)
        assert len(points) == n_samples
        assert points["pi_estimate"].between(0.0, 4.0).all()
        assert points["sample"].tolist() == list(range(1, n_samples + 1))

    def test_coordinates_in_unit_square(self):
        points = simulate_points(500, seed=1)
        for col in ("x", "y"):
            assert (points[col] >= 0.0).all()
            assert (points[col] < 1.0).all()

    def test_inside_flag_matches_region(self):
        points = simulate_points(500, seed=3)
        expected = points["x"] ** 2 + points["y"] ** 2 < 1.0
        assert (points["inside"] == expected).all()

    def test_estimate_is_cumulative_count(self):
        points = simulate_points(300, seed=9)
        expected = 4.0 * points["inside"].cumsum() / points["sample"]
        assert np.allclose(points["pi_estimate"], expected)

    def test_deterministic_given_seed(self):
        first = simulate_points(200, seed=2019)
        second = simulate_points(200, seed=2019)
        assert first.equals(second)

    def test_reference_run_close_to_pi(self):
        """Seed 2019 with 5000 draws lands within 0.1 of pi."""
        points = simulate_points(5000, seed=2019)
        assert abs(points["pi_estimate"].iloc[-1] - 3.14159) < 0.1

    @pytest.mark.parametrize("n_samples", [0, -3])
    def test_non_positive_samples_raise(self, n_samples):
        with pytest.raises(ValueError):
            simulate_points(n_samples)


class TestSummary:

    def test_checkpoint_sizes(self):
        assert checkpoint_sizes(5000) == [10, 100, 1000, 5000]
        assert checkpoint_sizes(1000) == [10, 100, 1000]
        assert checkpoint_sizes(3) == [3]

    def test_summary_fields(self):
        points = simulate_points(5000, seed=2019)
        result = summarize(points, seed=2019)
        assert result.n_samples == 5000
        assert result.n_inside == int(points["inside"].sum())
        assert result.final_estimate == points["pi_estimate"].iloc[-1]
        assert np.isclose(result.abs_error, abs(result.final_estimate - np.pi))
        # binomial SE for p near pi/4 and N=5000 is about 0.023
        assert 0.015 < result.std_error < 0.03
        assert list(result.checkpoints) == [10, 100, 1000, 5000]
        assert result.checkpoints[5000] == result.final_estimate

    def test_summary_json_keys_are_strings(self):
        result = summarize(simulate_points(50, seed=0), seed=0)
        assert list(result.to_dict()["checkpoints"]) == ["10", "50"]
