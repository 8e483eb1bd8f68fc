"""
Проверка соответствия загруженных данных их метаданным.
"""

from __future__ import annotations

import numpy as np

from parallel_kmeans.data.dataset import Dataset


def validate_dataset(dataset: Dataset) -> None:
    """
    Проверяет размеры X (и центров, если они есть) по метаданным.

    Raises:
        AssertionError: Если размеры данных не соответствуют метаданным
    """
    meta = dataset.metadata

    assert dataset.X.ndim == 2, f"Expected 2D data, got shape {dataset.X.shape}"
    assert dataset.X.shape[0] == meta["N"], (
        f"Expected {meta['N']} points, got {dataset.X.shape[0]}"
    )
    assert dataset.X.shape[1] == meta["D"], (
        f"Expected {meta['D']} dimensions, got {dataset.X.shape[1]}"
    )
    assert np.all(np.isfinite(dataset.X)), "Dataset contains NaN or Inf values"

    if dataset.centers is not None and "K" in meta:
        assert dataset.centers.shape == (meta["K"], meta["D"]), (
            f"Expected centers shape ({meta['K']}, {meta['D']}), "
            f"got {dataset.centers.shape}"
        )
