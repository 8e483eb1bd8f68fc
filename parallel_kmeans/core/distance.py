"""Евклидовы расстояния, используемые шагами назначения и оценкой целевой функции."""

from __future__ import annotations

import numpy as np


def squared_distances(X: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Квадраты расстояний (M, D) x (K, D) → (M, K)."""
    diff = X[:, None, :] - centroids[None, :, :]
    return np.einsum("mkd,mkd->mk", diff, diff, optimize=True)


def row_squared_distances(X: np.ndarray, rows: np.ndarray) -> np.ndarray:
    """Построчные квадраты расстояний: ||X[i] - rows[i]||^2 → (M,)."""
    diff = X - rows
    return np.einsum("md,md->m", diff, diff)


def pairwise_squared_distance(X: np.ndarray, i: int, j: int) -> float:
    """Квадрат расстояния между точками X[i] и X[j]."""
    diff = X[i] - X[j]
    return float(diff @ diff)


def centroid_distances(centroids: np.ndarray) -> np.ndarray:
    """
    Матрица евклидовых (не квадратов!) расстояний между центроидами (K, K).

    Неравенство треугольника выполняется для самих расстояний, а не для
    их квадратов, поэтому оценки отсечения строятся по этой матрице.
    """
    d2 = squared_distances(centroids, centroids)
    np.maximum(d2, 0.0, out=d2)
    return np.sqrt(d2)


def sum_of_squares(X: np.ndarray, labels: np.ndarray, centroids: np.ndarray) -> float:
    """Сумма квадратов расстояний точек до назначенных центроидов (однопоточно)."""
    return float(row_squared_distances(X, centroids[labels]).sum())
