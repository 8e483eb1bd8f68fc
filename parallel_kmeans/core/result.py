from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np


@dataclass
class KMeansResult:
    """
    Результат кластеризации.

    - centroids: итоговые центроиды (K, D);
    - assignments: метки точек 0..K-1 (N,);
    - costs: квадрат расстояния каждой точки до своего центроида (N,);
    - counts / wcounts: число точек и вес кластеров (K,), веса точек единичные;
    - totalcost: сумма costs, пересчитанная по итоговым центроидам;
    - iterations: число выполненных итераций;
    - converged: достигнут ли порог tol до исчерпания max_iters.
    """

    centroids: np.ndarray
    assignments: np.ndarray
    costs: np.ndarray
    counts: np.ndarray
    wcounts: np.ndarray
    totalcost: float
    iterations: int
    converged: bool
    objective_history: List[float] = field(default_factory=list)
    t_assign_total: float = 0.0
    t_update_total: float = 0.0

    @property
    def t_iter_total(self) -> float:
        return self.t_assign_total + self.t_update_total

    def summary(self) -> dict:
        """Краткая сводка для логов и JSON-отчётов."""
        return {
            "K": int(self.centroids.shape[0]),
            "N": int(self.assignments.shape[0]),
            "totalcost": float(self.totalcost),
            "iterations": int(self.iterations),
            "converged": bool(self.converged),
            "counts": [int(c) for c in self.counts],
            "T_assign_total": float(self.t_assign_total),
            "T_update_total": float(self.t_update_total),
        }
