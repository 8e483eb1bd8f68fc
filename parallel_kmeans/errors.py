"""
Иерархия исключений параллельного K-means.

- InvalidArgumentError: некорректные аргументы (проверяются один раз до запуска воркеров);
- EmptyClusterError: кластер остался без точек при обновлении центроидов.

Отсутствие сходимости за max_iters ошибкой не является: результат возвращается
с флагом converged=False.
"""

from __future__ import annotations

from typing import Sequence


class KMeansError(Exception):
    """Базовое исключение пакета."""


class InvalidArgumentError(KMeansError, ValueError):
    """Некорректные параметры запуска кластеризации."""


class EmptyClusterError(KMeansError, ArithmeticError):
    """
    Пустой кластер на шаге обновления центроидов.

    Деление суммы координат на нулевой счётчик дало бы NaN-центроид,
    поэтому вызывающая сторона получает явную ошибку и может, например,
    перезапустить кластеризацию с другой инициализацией.
    """

    def __init__(self, clusters: Sequence[int], iteration: int | None = None) -> None:
        self.clusters = [int(c) for c in clusters]
        self.iteration = iteration
        where = f" at iteration {iteration}" if iteration is not None else ""
        super().__init__(f"Empty clusters {self.clusters}{where}")
