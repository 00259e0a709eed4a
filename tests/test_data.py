"""Tests for housing loading, design matrix construction and train/test splits."""

import numpy as np
import pandas as pd
import pytest

from ridge_tuning.data import load_housing, make_design_matrix, split_frame, split_indices


class TestSplitIndices:

    @pytest.mark.parametrize("n_rows,test_size", [(10, 0.2), (101, 0.3), (5000, 0.25)])
    def test_disjoint_and_complete(self, n_rows, test_size):
        """Train and test indices never overlap and together cover every row."""
        train_idx, test_idx = split_indices(n_rows, test_size=test_size, random_state=7)
        assert np.intersect1d(train_idx, test_idx).size == 0
        assert np.array_equal(np.sort(np.concatenate([train_idx, test_idx])), np.arange(n_rows))

    def test_sizes_follow_ratio(self):
        train_idx, test_idx = split_indices(100, test_size=0.2, random_state=0)
        assert len(test_idx) == 20
        assert len(train_idx) == 80

    def test_same_seed_same_split(self):
        first = split_indices(50, random_state=2019)
        second = split_indices(50, random_state=2019)
        assert np.array_equal(first[0], second[0])
        assert np.array_equal(first[1], second[1])

    def test_different_seed_changes_split(self):
        first = split_indices(50, random_state=1)
        second = split_indices(50, random_state=2)
        assert not np.array_equal(first[1], second[1])

    def test_split_frame_keeps_rows_aligned(self, housing_frame):
        X_df, y = make_design_matrix(housing_frame, "price")
        X_train, X_test, y_train, y_test = split_frame(X_df, y, test_size=0.25, random_state=3)
        assert list(X_train.index) == list(y_train.index)
        assert list(X_test.index) == list(y_test.index)
        assert len(X_train) + len(X_test) == len(housing_frame)


class TestDesignMatrix:

    def test_categorical_expanded_to_indicators(self, housing_frame):
        X_df, y = make_design_matrix(housing_frame, "price")
        # first level ("coast") is dropped
        assert "region_inland" in X_df.columns
        assert "region_island" in X_df.columns
        assert "region_coast" not in X_df.columns
        assert "region" not in X_df.columns
        assert "price" not in X_df.columns
        assert all(dtype == float for dtype in X_df.dtypes)

    def test_integer_columns_cast_to_float(self):
        df = pd.DataFrame(
            {
                "a": [1, 2, 3, 4],
                "c": ["u", "v", "u", "v"],
                "target": [1.0, 2.0, 3.0, 4.0],
            }
        )
        X_df, _ = make_design_matrix(df, "target")
        assert dict(X_df.dtypes) == {"a": np.dtype("float64"), "c_v": np.dtype("float64")}

    def test_response_is_float_series(self, housing_frame):
        _, y = make_design_matrix(housing_frame, "price")
        assert y.dtype == float
        assert np.allclose(y.to_numpy(), housing_frame["price"].to_numpy())

    def test_missing_response_raises(self, housing_frame):
        with pytest.raises(ValueError, match="not found"):
            make_design_matrix(housing_frame, "median_house_value")


class TestLoadHousing:

    def test_drops_incomplete_rows(self, tmp_path):
        df = pd.DataFrame(
            {
                "rooms": [3.0, 4.0, None, 5.0],
                "ocean_proximity": ["NEAR BAY", "INLAND", "INLAND", None],
                "median_house_value": [100.0, 150.0, 120.0, 200.0],
            }
        )
        path = tmp_path / "housing.csv"
        df.to_csv(path, index=False)

        loaded = load_housing(str(path))
        assert len(loaded) == 2
        assert list(loaded.index) == [0, 1]

    def test_missing_response_raises(self, tmp_path):
        path = tmp_path / "housing.csv"
        pd.DataFrame({"rooms": [1.0, 2.0]}).to_csv(path, index=False)
        with pytest.raises(ValueError):
            load_housing(str(path), response="median_house_value")
