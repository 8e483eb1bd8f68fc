# core/lloyd.py
from __future__ import annotations

import numpy as np

from .base import KMeansAlgorithm
from .containers import Containers
from .distance import squared_distances


class Lloyd(KMeansAlgorithm):
    """Классический алгоритм Ллойда: расстояния до всех центроидов (baseline)."""

    name = "lloyd"

    def update_containers(
        self,
        containers: Containers,
        X: np.ndarray,
        centroids: np.ndarray,
        r: range,
        idx: int,
    ) -> None:
        # (M, K) → (M,)
        distances = squared_distances(X[r.start:r.stop], centroids)
        labels = np.argmin(distances, axis=1)
        containers.labels[r.start:r.stop] = labels
        containers.costs[r.start:r.stop] = distances[np.arange(labels.shape[0]), labels]
