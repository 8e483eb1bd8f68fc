"""
Метрики производительности параллельного K-means.

Используются в режиме bench для сравнения вариантов алгоритма
и количества воркеров.
"""

from __future__ import annotations

from typing import Dict, Sequence

import numpy as np


def speedup(t_serial: float, t_parallel: float) -> float:
    """
    Ускорение относительно однопоточного запуска: t_serial / t_parallel.

    Raises:
        ZeroDivisionError: Если t_parallel равно нулю
    """
    if t_parallel == 0:
        raise ZeroDivisionError("Parallel time cannot be zero")
    return t_serial / t_parallel


def efficiency(speedup: float, n_workers: int) -> float:
    """
    Параллельная эффективность: speedup / n_workers.

    Идеальное значение 1.0 соответствует линейному ускорению.

    Raises:
        ZeroDivisionError: Если n_workers равно нулю
    """
    if n_workers == 0:
        raise ZeroDivisionError("Number of workers cannot be zero")
    return speedup / n_workers


def throughput(
    N: int, K: int, D: int, n_iters: int, total_time: float
) -> float:
    """
    Пропускная способность в операциях «точка × кластер × признак» в секунду.

    Для вариантов с отсечением это эквивалентная пропускная способность:
    считается так, будто все расстояния вычислялись полностью.

    Raises:
        ZeroDivisionError: Если total_time равно нулю
    """
    if total_time == 0:
        raise ZeroDivisionError("Total time cannot be zero")
    return (N * K * D * n_iters) / total_time


def fit_time_stats(times: Sequence[float]) -> Dict[str, float]:
    """
    Сводка по повторам одного замера: минимум, среднее и разброс времени fit.

    Для ускорения берётся T_fit_min: минимум меньше всего зависит
    от фоновой нагрузки на машину.
    """
    if len(times) == 0:
        raise ValueError("At least one timing is required")
    arr = np.asarray(times, dtype=np.float64)
    return {
        "T_fit_min": float(arr.min()),
        "T_fit_avg": float(arr.mean()),
        "T_fit_std": float(arr.std()),
    }
