"""
Hamerly: одна верхняя и одна нижняя оценка на точку.

upper[i] — расстояние до назначенного центроида a, lower[i] — нижняя оценка
расстояния до второго ближайшего центроида. Если
    upper[i] < max(lower[i], half_separation[a]),
назначение точки измениться не могло и полный пересчёт пропускается.
Иначе (в том числе при равенстве) точка пересчитывается по всем кластерам,
и обе оценки обновляются.

После сдвига центроидов lower[i] уменьшается на наибольший сдвиг среди
остальных кластеров (и обрезается снизу нулём).
"""

from __future__ import annotations

import numpy as np

from .base import BOUND_RTOL, BoundedKMeansAlgorithm
from .containers import HamerlyContainers
from .distance import row_squared_distances, squared_distances


class Hamerly(BoundedKMeansAlgorithm):
    """K-means с парой оценок (upper, lower) на точку."""

    name = "hamerly"
    containers_cls = HamerlyContainers

    def prepare(self, containers: HamerlyContainers, centroids: np.ndarray) -> None:
        super().prepare(containers, centroids)
        dist = containers.centroids_dist.copy()
        np.fill_diagonal(dist, np.inf)
        containers.half_separation[:] = 0.5 * dist.min(axis=1)

    def update_containers(
        self,
        containers: HamerlyContainers,
        X: np.ndarray,
        centroids: np.ndarray,
        r: range,
        idx: int,
    ) -> None:
        start, stop = r.start, r.stop
        labels = containers.labels[start:stop]
        costs = containers.costs[start:stop]
        upper = containers.upper[start:stop]
        lower = containers.lower[start:stop]
        X_chunk = X[start:stop]

        fresh = labels < 0
        if np.any(fresh):
            self._full_evaluation(X_chunk, centroids, fresh, labels, costs, upper, lower)

        rows = np.flatnonzero(~fresh)
        if rows.size == 0:
            return

        lab = labels[rows]
        lower[rows] = np.maximum(lower[rows] - self._max_other_shift(containers.shifts, lab), 0.0)

        # upper всегда точное: стоимость точки нужна для J
        best_sq = row_squared_distances(X_chunk[rows], centroids[lab])
        upper[rows] = np.sqrt(best_sq)
        costs[rows] = best_sq

        # пропуск только при строгом неравенстве с запасом: при ничьей
        # полный пересчёт выбирает меньший номер, как argmin
        bound = np.maximum(lower[rows], containers.half_separation[lab])
        redo = upper[rows] >= bound * (1.0 - BOUND_RTOL)
        if np.any(redo):
            mask = np.zeros(labels.shape[0], dtype=bool)
            mask[rows[redo]] = True
            self._full_evaluation(X_chunk, centroids, mask, labels, costs, upper, lower)

    @staticmethod
    def _max_other_shift(shifts: np.ndarray, lab: np.ndarray) -> np.ndarray:
        """Наибольший сдвиг среди кластеров, отличных от назначенного."""
        if shifts.shape[0] == 1:
            return np.zeros(lab.shape[0], dtype=np.float64)
        order = np.argsort(shifts)
        furthest = order[-1]
        longest = shifts[furthest]
        second = shifts[order[-2]]
        return np.where(lab == furthest, second, longest)

    @staticmethod
    def _full_evaluation(
        X_chunk: np.ndarray,
        centroids: np.ndarray,
        mask: np.ndarray,
        labels: np.ndarray,
        costs: np.ndarray,
        upper: np.ndarray,
        lower: np.ndarray,
    ) -> None:
        """Полный пересчёт по всем кластерам: метка, upper и lower точные."""
        distances = squared_distances(X_chunk[mask], centroids)
        lab = np.argmin(distances, axis=1)
        rows = np.arange(lab.shape[0])
        labels[mask] = lab
        costs[mask] = distances[rows, lab]
        upper[mask] = np.sqrt(distances[rows, lab])

        if centroids.shape[0] == 1:
            lower[mask] = np.inf
        else:
            second = np.partition(distances, 1, axis=1)[:, 1]
            lower[mask] = np.sqrt(second)
