"""
Housing data access and train/test partitioning for the ridge study.
"""

import logging
from typing import Tuple

import numpy as np
import pandas as pd
from sklearn.model_selection import train_test_split

logger = logging.getLogger(__name__)

DATA_URL = "https://raw.githubusercontent.com/ageron/handson-ml2/master/datasets/housing/housing.csv"
RESPONSE = "median_house_value"


def load_housing(source: str = DATA_URL, response: str = RESPONSE) -> pd.DataFrame:
    """Read the housing table from a URL or local path and drop incomplete rows."""
    df = pd.read_csv(source, sep=",", header=0, skipinitialspace=True)
    if response not in df.columns:
        raise ValueError(f"Response '{response}' not found in dataset columns: {list(df.columns)}")

    n_before = len(df)
    df = df.dropna().reset_index(drop=True)
    dropped = n_before - len(df)
    if dropped:
        logger.info("Dropped %d of %d rows with missing values", dropped, n_before)
    return df


def make_design_matrix(df: pd.DataFrame, response: str = RESPONSE) -> Tuple[pd.DataFrame, pd.Series]:
    """
    Build the numeric design matrix and the response vector.

    Categorical columns are expanded into indicator columns (first level dropped),
    so the returned frame is dense float.
    """
    if response not in df.columns:
        raise ValueError(f"Response '{response}' not found in dataset columns: {list(df.columns)}")

    X_df = df.drop(columns=[response])
    X_df = pd.get_dummies(X_df, drop_first=True, dtype=float).astype(float)
    y = df[response].astype(float)
    return X_df, y


def split_indices(
    n_rows: int,
    test_size: float = 0.2,
    random_state: int = 2019,
) -> Tuple[np.ndarray, np.ndarray]:
    """Partition ``range(n_rows)`` into disjoint train and test index arrays."""
    train_idx, test_idx = train_test_split(
        np.arange(n_rows),
        test_size=test_size,
        random_state=random_state,
        shuffle=True,
    )
    return np.asarray(train_idx), np.asarray(test_idx)


def split_frame(
    X_df: pd.DataFrame,
    y: pd.Series,
    test_size: float = 0.2,
    random_state: int = 2019,
) -> Tuple[pd.DataFrame, pd.DataFrame, pd.Series, pd.Series]:
    train_idx, test_idx = split_indices(len(X_df), test_size=test_size, random_state=random_state)
    return (
        X_df.iloc[train_idx],
        X_df.iloc[test_idx],
        y.iloc[train_idx],
        y.iloc[test_idx],
    )
