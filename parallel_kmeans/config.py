"""Параметры запуска параллельного K-means."""

from __future__ import annotations

from dataclasses import dataclass, field
from multiprocessing import cpu_count

from parallel_kmeans.errors import InvalidArgumentError


@dataclass(frozen=True)
class ParallelConfig:
    """Параметры fork-join исполнения."""

    n_workers: int = field(default_factory=cpu_count)

    def validate(self) -> None:
        if self.n_workers < 1:
            raise InvalidArgumentError(f"n_workers must be positive, got {self.n_workers}")


@dataclass(frozen=True)
class KMeansConfig:
    """Параметры цикла сходимости."""

    max_iters: int = 300
    tol: float = 1e-6
    init: str = "k-means++"
    verbose: bool = False

    def validate(self) -> None:
        if self.max_iters < 1:
            raise InvalidArgumentError(f"max_iters must be positive, got {self.max_iters}")
        if not self.tol > 0:
            raise InvalidArgumentError(f"tol must be positive, got {self.tol}")
