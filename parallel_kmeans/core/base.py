from __future__ import annotations

from abc import ABC, abstractmethod
from concurrent.futures import Executor
from typing import Optional

import numpy as np

from parallel_kmeans.core.containers import Containers
from parallel_kmeans.core.distance import centroid_distances, row_squared_distances
from parallel_kmeans.core.parallel import parallelize
from parallel_kmeans.errors import EmptyClusterError

# Относительный запас при сравнении оценок с расстояниями: оценки после
# релаксации могут превышать истинное расстояние на несколько ulp
BOUND_RTOL = 1e-9


class KMeansAlgorithm(ABC):
    """
    Базовый класс вариантов K-means (Lloyd, LightElkan, Hamerly).

    Итерация состоит из двух параллельных шагов:
    - update_containers: назначение точек чанка кластерам (метки, стоимости, оценки);
    - update_centroids: частичные суммы по слотам, свёртка после join,
      новые центроиды и значение целевой функции J.

    Перед шагом назначения вызывается prepare (последовательно) —
    здесь варианты с отсечением считают расстояния между центроидами.
    """

    name: str = "base"
    containers_cls = Containers

    def create_containers(
        self, n_clusters: int, n_features: int, n_samples: int, n_workers: int
    ) -> Containers:
        return self.containers_cls.allocate(n_clusters, n_features, n_samples, n_workers)

    def prepare(self, containers: Containers, centroids: np.ndarray) -> None:
        """Последовательная подготовка к шагу назначения."""

    @abstractmethod
    def update_containers(
        self,
        containers: Containers,
        X: np.ndarray,
        centroids: np.ndarray,
        r: range,
        idx: int,
    ) -> None:
        """Шаг назначения для точек диапазона r."""
        raise NotImplementedError

    def chunk_update_centroids(
        self, containers: Containers, X: np.ndarray, r: range, idx: int
    ) -> None:
        """Частичная редукция чанка: суммы координат, счётчики и J в слот idx."""
        sums = containers.new_centroids[idx]
        counts = containers.centroids_cnt[idx]
        X_chunk = X[r.start:r.stop]
        labels_chunk = containers.labels[r.start:r.stop]

        for k in range(sums.shape[0]):
            mask = labels_chunk == k
            if not np.any(mask):
                continue
            pts = X_chunk[mask]
            sums[k] += pts.sum(axis=0)
            counts[k] += pts.shape[0]

        containers.sum_of_squares[idx] = containers.costs[r.start:r.stop].sum()

    def update_centroids(
        self,
        centroids: np.ndarray,
        containers: Containers,
        X: np.ndarray,
        n_workers: int,
        executor: Optional[Executor] = None,
        iteration: Optional[int] = None,
    ) -> float:
        """
        Обновляет centroids на месте и возвращает J текущей итерации.

        Raises:
            EmptyClusterError: если у какого-либо кластера не осталось точек
        """
        containers.reset_accumulators()
        parallelize(
            n_workers,
            X.shape[0],
            self.chunk_update_centroids,
            containers,
            X,
            executor=executor,
        )

        # Свёртка слотов в слот 0 строго после join
        J = float(containers.sum_of_squares[0])
        for i in range(1, containers.n_workers):
            containers.new_centroids[0] += containers.new_centroids[i]
            containers.centroids_cnt[0] += containers.centroids_cnt[i]
            J += float(containers.sum_of_squares[i])

        counts = containers.centroids_cnt[0]
        empty = np.flatnonzero(counts == 0)
        if empty.size > 0:
            raise EmptyClusterError(empty, iteration=iteration)

        new_centroids = containers.new_centroids[0] / counts[:, None]
        self.centroids_moved(containers, centroids, new_centroids)
        centroids[:] = new_centroids

        return J

    def centroids_moved(
        self, containers: Containers, old: np.ndarray, new: np.ndarray
    ) -> None:
        """Хук после пересчёта центроидов (для релаксации оценок)."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class BoundedKMeansAlgorithm(KMeansAlgorithm):
    """
    Общая часть вариантов с отсечением по неравенству треугольника.

    Все оценки хранятся в евклидовых расстояниях (не в квадратах).
    Смещения центроидов запоминаются после обновления и применяются
    к оценкам на следующем шаге назначения, каждым воркером для своего чанка.
    """

    def prepare(self, containers: Containers, centroids: np.ndarray) -> None:
        containers.centroids_dist[:] = centroid_distances(centroids)

    def centroids_moved(
        self, containers: Containers, old: np.ndarray, new: np.ndarray
    ) -> None:
        containers.shifts[:] = np.sqrt(row_squared_distances(new, old))
