"""
Light-Elkan: отсечение по нижним оценкам расстояний до каждого кластера.

Для точки i хранится lower[i, j] <= ||x_i - c_j||. На шаге назначения считается
точное расстояние best до текущего центроида, после чего кластер j проверяется
только если одновременно:
- lower[i, j] <= best;
- 0.5 * ||c_a - c_j|| <= best (a — лучший кластер на данный момент).
Иначе ||x_i - c_j|| > best и кластер j не может оказаться ближе.
При равных расстояниях побеждает меньший номер кластера, как у argmin в Lloyd.

После сдвига центроидов оценки ослабляются: lower[i, j] = max(lower[i, j] - shift_j, 0),
так что оценка никогда не превышает истинное расстояние.
"""

from __future__ import annotations

import numpy as np

from .base import BOUND_RTOL, BoundedKMeansAlgorithm
from .containers import LightElkanContainers
from .distance import row_squared_distances, squared_distances


class LightElkan(BoundedKMeansAlgorithm):
    """K-means с нижними оценкам на пару (точка, кластер)."""

    name = "light_elkan"
    containers_cls = LightElkanContainers

    def update_containers(
        self,
        containers: LightElkanContainers,
        X: np.ndarray,
        centroids: np.ndarray,
        r: range,
        idx: int,
    ) -> None:
        start, stop = r.start, r.stop
        labels = containers.labels[start:stop]
        costs = containers.costs[start:stop]
        lower = containers.lower[start:stop]
        X_chunk = X[start:stop]

        fresh = labels < 0
        if np.any(fresh):
            self._full_evaluation(X_chunk, centroids, fresh, labels, costs, lower)

        rows = np.flatnonzero(~fresh)
        if rows.size == 0:
            return

        # Релаксация оценок на сдвиг центроидов с прошлого обновления
        lower[rows] = np.maximum(lower[rows] - containers.shifts, 0.0)

        X_rows = X_chunk[rows]
        lab = labels[rows]
        best_sq = row_squared_distances(X_rows, centroids[lab])
        best = np.sqrt(best_sq)
        lower[rows, lab] = best

        half_dist = 0.5 * containers.centroids_dist
        for j in range(centroids.shape[0]):
            # нестрого и с запасом: равноудалённый кластер с меньшим номером
            # тоже проверяется, иначе ничья разрешилась бы не как у argmin
            reach = best * (1.0 + BOUND_RTOL)
            candidates = (lab != j) & (lower[rows, j] <= reach) & (half_dist[lab, j] <= reach)
            if not np.any(candidates):
                continue

            sel = np.flatnonzero(candidates)
            d_sq = row_squared_distances(X_rows[sel], centroids[j])
            lower[rows[sel], j] = np.sqrt(d_sq)

            closer = (d_sq < best_sq[sel]) | ((d_sq == best_sq[sel]) & (j < lab[sel]))
            moved = sel[closer]
            lab[moved] = j
            best_sq[moved] = d_sq[closer]
            best[moved] = np.sqrt(d_sq[closer])

        labels[rows] = lab
        costs[rows] = best_sq

    @staticmethod
    def _full_evaluation(
        X_chunk: np.ndarray,
        centroids: np.ndarray,
        mask: np.ndarray,
        labels: np.ndarray,
        costs: np.ndarray,
        lower: np.ndarray,
    ) -> None:
        """Полный пересчёт: оценки становятся точными расстояниями."""
        distances = squared_distances(X_chunk[mask], centroids)
        lab = np.argmin(distances, axis=1)
        labels[mask] = lab
        costs[mask] = distances[np.arange(lab.shape[0]), lab]
        lower[mask] = np.sqrt(distances)
