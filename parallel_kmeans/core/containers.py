"""
Контейнеры — рабочие буферы алгоритмов K-means.

Общая часть (Containers):
- labels/costs: по одному значению на точку, каждую точку пишет ровно
  один воркер (владелец чанка);
- new_centroids/centroids_cnt/sum_of_squares: по слоту на воркера, слот idx
  пишет только воркер с номером idx, свёртка слотов — после join.

Наследники добавляют состояние оценок (bounds) для алгоритмов с отсечением.
Метка -1 означает «точка требует полного пересчёта расстояний».
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

UNASSIGNED = -1


@dataclass
class Containers:
    """Буферы алгоритма Ллойда (без состояния оценок)."""

    labels: np.ndarray
    costs: np.ndarray
    new_centroids: np.ndarray
    centroids_cnt: np.ndarray
    sum_of_squares: np.ndarray

    @classmethod
    def allocate(
        cls, n_clusters: int, n_features: int, n_samples: int, n_workers: int
    ) -> "Containers":
        return cls(**cls._base_buffers(n_clusters, n_features, n_samples, n_workers))

    @staticmethod
    def _base_buffers(
        n_clusters: int, n_features: int, n_samples: int, n_workers: int
    ) -> dict:
        return {
            "labels": np.full(n_samples, UNASSIGNED, dtype=np.int64),
            "costs": np.zeros(n_samples, dtype=np.float64),
            "new_centroids": np.zeros((n_workers, n_clusters, n_features), dtype=np.float64),
            "centroids_cnt": np.zeros((n_workers, n_clusters), dtype=np.int64),
            "sum_of_squares": np.zeros(n_workers, dtype=np.float64),
        }

    @property
    def shape(self) -> Tuple[int, int, int, int]:
        """(n_samples, n_clusters, n_features, n_workers)."""
        n_workers, n_clusters, n_features = self.new_centroids.shape
        return self.labels.shape[0], n_clusters, n_features, n_workers

    @property
    def n_workers(self) -> int:
        return self.new_centroids.shape[0]

    def reset_accumulators(self) -> None:
        """Обнуление слотов перед шагом обновления центроидов."""
        self.new_centroids.fill(0.0)
        self.centroids_cnt.fill(0)
        self.sum_of_squares.fill(0.0)

    def reset(self) -> None:
        """Полный сброс: все точки снова требуют полного пересчёта."""
        self.labels.fill(UNASSIGNED)
        self.costs.fill(0.0)
        self.reset_accumulators()


@dataclass
class LightElkanContainers(Containers):
    """
    Буферы Light-Elkan.

    lower[i, j] — нижняя оценка евклидова расстояния от точки i до центроида j,
    centroids_dist — попарные расстояния между центроидами текущей итерации,
    shifts — смещение каждого центроида на последнем обновлении.
    """

    lower: np.ndarray = None  # type: ignore[assignment]
    centroids_dist: np.ndarray = None  # type: ignore[assignment]
    shifts: np.ndarray = None  # type: ignore[assignment]

    @classmethod
    def allocate(
        cls, n_clusters: int, n_features: int, n_samples: int, n_workers: int
    ) -> "LightElkanContainers":
        return cls(
            **cls._base_buffers(n_clusters, n_features, n_samples, n_workers),
            lower=np.zeros((n_samples, n_clusters), dtype=np.float64),
            centroids_dist=np.zeros((n_clusters, n_clusters), dtype=np.float64),
            shifts=np.zeros(n_clusters, dtype=np.float64),
        )

    def reset(self) -> None:
        super().reset()
        self.lower.fill(0.0)
        self.centroids_dist.fill(0.0)
        self.shifts.fill(0.0)


@dataclass
class HamerlyContainers(Containers):
    """
    Буферы Hamerly.

    upper[i] — расстояние до назначенного центроида, lower[i] — нижняя оценка
    расстояния до второго ближайшего, half_separation[j] — половина расстояния
    от центроида j до ближайшего другого центроида.
    """

    upper: np.ndarray = None  # type: ignore[assignment]
    lower: np.ndarray = None  # type: ignore[assignment]
    centroids_dist: np.ndarray = None  # type: ignore[assignment]
    half_separation: np.ndarray = None  # type: ignore[assignment]
    shifts: np.ndarray = None  # type: ignore[assignment]

    @classmethod
    def allocate(
        cls, n_clusters: int, n_features: int, n_samples: int, n_workers: int
    ) -> "HamerlyContainers":
        return cls(
            **cls._base_buffers(n_clusters, n_features, n_samples, n_workers),
            upper=np.zeros(n_samples, dtype=np.float64),
            lower=np.zeros(n_samples, dtype=np.float64),
            centroids_dist=np.zeros((n_clusters, n_clusters), dtype=np.float64),
            half_separation=np.zeros(n_clusters, dtype=np.float64),
            shifts=np.zeros(n_clusters, dtype=np.float64),
        )

    def reset(self) -> None:
        super().reset()
        self.upper.fill(0.0)
        self.lower.fill(0.0)
        self.centroids_dist.fill(0.0)
        self.half_separation.fill(0.0)
        self.shifts.fill(0.0)
