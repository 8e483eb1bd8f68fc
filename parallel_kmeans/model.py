from __future__ import annotations

from multiprocessing import cpu_count
from typing import Any

import numpy as np

from parallel_kmeans.config import KMeansConfig, ParallelConfig
from parallel_kmeans.core.containers import Containers
from parallel_kmeans.core.distance import squared_distances
from parallel_kmeans.core.kmeans import AlgorithmLike, get_algorithm, kmeans_into
from parallel_kmeans.core.result import KMeansResult


class KMeans:
    """
    Модель K-means с интерфейсом fit/predict поверх :func:`kmeans_into`.

    Хранит контейнеры между вызовами fit: повторная подгонка на данных той же
    формы не выделяет буферы заново. После fit доступны centroids, labels,
    inertia, converged, n_iters_actual и тайминги шагов:
    - t_assign_total: суммарное время шага назначения;
    - t_update_total: суммарное время шага обновления центроидов;
    - t_iter_total: сумма двух предыдущих.
    """

    def __init__(
        self,
        n_clusters: int,
        algorithm: AlgorithmLike = "lloyd",
        n_iters: int = 300,
        tol: float = 1e-6,
        n_workers: int | None = None,
        init: str = "k-means++",
        random_state: Any = None,
        verbose: bool = False,
        logger: Any | None = None,
    ):
        self.K = n_clusters
        self.algorithm = get_algorithm(algorithm)
        self.config = KMeansConfig(max_iters=n_iters, tol=tol, init=init, verbose=verbose)
        self.parallel = ParallelConfig(n_workers=cpu_count() if n_workers is None else n_workers)
        self.config.validate()
        self.parallel.validate()
        self.random_state = random_state
        self.logger = logger

        self.centroids: np.ndarray | None = None
        self.labels: np.ndarray | None = None
        self.result: KMeansResult | None = None
        self._containers: Containers | None = None

    @property
    def inertia(self) -> float | None:
        return None if self.result is None else self.result.totalcost

    @property
    def converged(self) -> bool:
        return bool(self.result is not None and self.result.converged)

    @property
    def n_iters_actual(self) -> int:
        return 0 if self.result is None else self.result.iterations

    @property
    def t_assign_total(self) -> float:
        return 0.0 if self.result is None else self.result.t_assign_total

    @property
    def t_update_total(self) -> float:
        return 0.0 if self.result is None else self.result.t_update_total

    @property
    def t_iter_total(self) -> float:
        return self.t_assign_total + self.t_update_total

    def fit(self, X: np.ndarray, initial_centroids: np.ndarray | None = None) -> "KMeans":
        """Подгонка модели; initial_centroids копируются и не изменяются."""
        X = np.asarray(X, dtype=np.float64)
        containers = self._ensure_containers(X)

        self.result = kmeans_into(
            self.algorithm,
            containers,
            X,
            self.K,
            n_workers=self.parallel.n_workers,
            init=self.config.init,
            max_iters=self.config.max_iters,
            tol=self.config.tol,
            verbose=self.config.verbose,
            initial_centroids=initial_centroids,
            random_state=self.random_state,
            logger=self.logger,
        )
        self.centroids = self.result.centroids
        self.labels = self.result.assignments
        return self

    def predict(self, X: np.ndarray) -> np.ndarray:
        """Метка ближайшего центроида для каждой точки X."""
        return np.argmin(self.transform(X), axis=1)

    def transform(self, X: np.ndarray) -> np.ndarray:
        """Евклидовы расстояния до центроидов (N, K)."""
        if self.centroids is None:
            raise RuntimeError("KMeans model is not fitted yet, call fit() first")
        X = np.asarray(X, dtype=np.float64)
        return np.sqrt(np.maximum(squared_distances(X, self.centroids), 0.0))

    def _ensure_containers(self, X: np.ndarray) -> Containers:
        """Переиспользует контейнеры, если форма задачи не изменилась."""
        N, D = X.shape if X.ndim == 2 else (0, 0)
        shape = (N, self.K, D, self.parallel.n_workers)
        if self._containers is None or self._containers.shape != shape:
            self._containers = self.algorithm.create_containers(
                self.K, D, N, self.parallel.n_workers
            )
        return self._containers
