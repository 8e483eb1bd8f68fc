"""
Инициализация центроидов.

Стратегии:
- "k-means++": первый центр выбирается равномерно, каждый следующий —
  с вероятностью, пропорциональной квадрату расстояния до ближайшего
  уже выбранного центра;
- "random": k различных точек выборки.
"""

from __future__ import annotations

import numpy as np

from parallel_kmeans.core.distance import row_squared_distances
from parallel_kmeans.core.parallel import parallelize
from parallel_kmeans.errors import InvalidArgumentError

STRATEGIES = ("k-means++", "random")


def initialize(
    X: np.ndarray,
    k: int,
    n_workers: int = 1,
    strategy: str = "k-means++",
    random_state: int | np.random.Generator | None = None,
) -> np.ndarray:
    """
    Возвращает начальные центроиды формы (k, D).

    Args:
        X: Матрица данных (N, D)
        k: Количество кластеров
        n_workers: Количество потоков для обновления расстояний (k-means++)
        strategy: "k-means++" или "random"
        random_state: seed или np.random.Generator

    Raises:
        InvalidArgumentError: неизвестная стратегия или k вне 1..N
    """
    N = X.shape[0]
    if k < 1 or k > N:
        raise InvalidArgumentError(f"k must be in 1..{N}, got {k}")

    rng = np.random.default_rng(random_state)

    if strategy == "random":
        idx = rng.choice(N, size=k, replace=False)
        return X[idx].astype(np.float64, copy=True)
    if strategy == "k-means++":
        return _kmeans_plusplus(X, k, n_workers, rng)

    raise InvalidArgumentError(
        f"Unknown init strategy {strategy!r}, expected one of {STRATEGIES}"
    )


def _kmeans_plusplus(
    X: np.ndarray, k: int, n_workers: int, rng: np.random.Generator
) -> np.ndarray:
    N, D = X.shape
    centroids = np.empty((k, D), dtype=np.float64)
    centroids[0] = X[rng.integers(N)]

    min_d2 = np.full(N, np.inf, dtype=np.float64)
    for c in range(1, k):
        parallelize(n_workers, N, _refresh_min_distance, min_d2, X, centroids[c - 1])

        total = min_d2.sum()
        if total > 0.0:
            next_idx = rng.choice(N, p=min_d2 / total)
        else:
            # Все точки совпадают с уже выбранными центрами
            next_idx = rng.integers(N)
        centroids[c] = X[next_idx]

    return centroids


def _refresh_min_distance(
    min_d2: np.ndarray, X: np.ndarray, center: np.ndarray, r: range, idx: int
) -> None:
    sl = slice(r.start, r.stop)
    np.minimum(min_d2[sl], row_squared_distances(X[sl], center), out=min_d2[sl])
