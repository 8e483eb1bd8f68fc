"""
Цикл сходимости K-means и сборка результата.

kmeans       — выделяет контейнеры и запускает кластеризацию;
kmeans_into  — то же на заранее выделенных контейнерах (для серий запусков
               без повторных аллокаций).

Итерация: prepare (последовательно) → update_containers (параллельно по чанкам)
→ update_centroids (параллельно + свёртка) → проверка сходимости по J.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from multiprocessing import cpu_count
from typing import Any, Dict, List, Optional, Type, Union

import numpy as np

from parallel_kmeans.core.base import KMeansAlgorithm
from parallel_kmeans.core.containers import Containers
from parallel_kmeans.core.distance import row_squared_distances
from parallel_kmeans.core.hamerly import Hamerly
from parallel_kmeans.core.light_elkan import LightElkan
from parallel_kmeans.core.lloyd import Lloyd
from parallel_kmeans.core.parallel import parallelize
from parallel_kmeans.core.result import KMeansResult
from parallel_kmeans.core.seeding import STRATEGIES, initialize
from parallel_kmeans.errors import InvalidArgumentError
from parallel_kmeans.metrics.timers import PhaseTimings, Timer
from parallel_kmeans.utils.logging import setup_logger

ALGORITHMS: Dict[str, Type[KMeansAlgorithm]] = {
    Lloyd.name: Lloyd,
    LightElkan.name: LightElkan,
    Hamerly.name: Hamerly,
}

AlgorithmLike = Union[KMeansAlgorithm, str]


def get_algorithm(algorithm: AlgorithmLike) -> KMeansAlgorithm:
    """Экземпляр алгоритма по имени ("lloyd", "light_elkan", "hamerly") или как есть."""
    if isinstance(algorithm, KMeansAlgorithm):
        return algorithm
    try:
        return ALGORITHMS[algorithm]()
    except (KeyError, TypeError):
        raise InvalidArgumentError(
            f"Unknown algorithm {algorithm!r}, expected one of {sorted(ALGORITHMS)}"
        ) from None


def kmeans(
    algorithm: AlgorithmLike,
    X: np.ndarray,
    k: int,
    *,
    n_workers: Optional[int] = None,
    init: str = "k-means++",
    max_iters: int = 300,
    tol: float = 1e-6,
    verbose: bool = False,
    initial_centroids: Optional[np.ndarray] = None,
    random_state: Any = None,
    logger: Optional[logging.Logger] = None,
) -> KMeansResult:
    """
    Кластеризация матрицы X (N, D) на k кластеров.

    Args:
        algorithm: Вариант алгоритма (экземпляр или имя)
        X: Матрица данных (N, D), не изменяется
        k: Количество кластеров
        n_workers: Количество воркеров, по умолчанию cpu_count()
        init: Стратегия инициализации ("k-means++" или "random"),
            игнорируется при заданных initial_centroids
        max_iters: Максимальное количество итераций
        tol: Относительный порог изменения J для остановки
        verbose: Логировать ход итераций
        initial_centroids: Начальные центроиды (K, D), копируются
        random_state: seed для инициализации
        logger: Логгер; при verbose=True без логгера используется логгер проекта

    Returns:
        KMeansResult

    Raises:
        InvalidArgumentError: некорректные аргументы
        EmptyClusterError: кластер опустел на шаге обновления
    """
    alg = get_algorithm(algorithm)
    X = _as_design_matrix(X)
    n_workers = cpu_count() if n_workers is None else n_workers
    _validate(X, k, n_workers, max_iters, tol, init, initial_centroids)

    N, D = X.shape
    containers = alg.create_containers(k, D, N, n_workers)

    return kmeans_into(
        alg,
        containers,
        X,
        k,
        n_workers=n_workers,
        init=init,
        max_iters=max_iters,
        tol=tol,
        verbose=verbose,
        initial_centroids=initial_centroids,
        random_state=random_state,
        logger=logger,
    )


def kmeans_into(
    algorithm: AlgorithmLike,
    containers: Containers,
    X: np.ndarray,
    k: int,
    *,
    n_workers: Optional[int] = None,
    init: str = "k-means++",
    max_iters: int = 300,
    tol: float = 1e-6,
    verbose: bool = False,
    initial_centroids: Optional[np.ndarray] = None,
    random_state: Any = None,
    logger: Optional[logging.Logger] = None,
) -> KMeansResult:
    """
    Кластеризация на заранее выделенных контейнерах.

    Контейнеры должны соответствовать (N, k, D, n_workers) и типу алгоритма;
    перед запуском они сбрасываются. Аргументы как у :func:`kmeans`.
    """
    alg = get_algorithm(algorithm)
    X = _as_design_matrix(X)
    n_workers = containers.n_workers if n_workers is None else n_workers
    _validate(X, k, n_workers, max_iters, tol, init, initial_centroids)

    N, D = X.shape
    if not isinstance(containers, alg.containers_cls):
        raise InvalidArgumentError(
            f"{type(containers).__name__} cannot be used with {alg!r}"
        )
    if containers.shape != (N, k, D, n_workers):
        raise InvalidArgumentError(
            f"Containers shape {containers.shape} does not match "
            f"(N, k, D, n_workers)={(N, k, D, n_workers)}"
        )

    if verbose and logger is None:
        logger = setup_logger()

    containers.reset()

    executor = ThreadPoolExecutor(max_workers=n_workers - 1) if n_workers > 1 else None
    try:
        if initial_centroids is None:
            centroids = initialize(X, k, n_workers, strategy=init, random_state=random_state)
        else:
            centroids = np.array(initial_centroids, dtype=np.float64, copy=True)

        niters, converged, history, timings = _converge(
            alg, containers, X, centroids, n_workers, executor,
            max_iters=max_iters, tol=tol, verbose=verbose, logger=logger,
        )
    finally:
        if executor is not None:
            executor.shutdown(wait=True)

    result = _assemble_result(X, centroids, containers.labels, niters, converged)
    result.objective_history = history
    result.t_assign_total = timings.t_assign_total
    result.t_update_total = timings.t_update_total

    if logger and verbose and converged:
        logger.info(
            f"Successfully terminated with convergence after {niters} iterations "
            f"(totalcost={result.totalcost:.6e})"
        )
    return result


def _converge(
    alg: KMeansAlgorithm,
    containers: Containers,
    X: np.ndarray,
    centroids: np.ndarray,
    n_workers: int,
    executor: Optional[ThreadPoolExecutor],
    *,
    max_iters: int,
    tol: float,
    verbose: bool,
    logger: Optional[logging.Logger],
) -> tuple[int, bool, List[float], PhaseTimings]:
    """Чередует шаги назначения и обновления до сходимости J или max_iters."""
    N = X.shape[0]
    timings = PhaseTimings()
    history: List[float] = []

    converged = False
    niters = 1
    J_previous = 0.0

    while niters <= max_iters:
        with Timer() as t_assign:
            alg.prepare(containers, centroids)
            parallelize(
                n_workers,
                N,
                alg.update_containers,
                containers,
                X,
                centroids,
                executor=executor,
            )
        with Timer() as t_update:
            J = alg.update_centroids(
                centroids, containers, X, n_workers, executor, iteration=niters
            )
        timings.add(t_assign.elapsed, t_update.elapsed)
        history.append(J)

        if niters > 1 and _has_converged(J, J_previous, tol):
            converged = True

        if logger:
            status = " (converged)" if converged else ""
            message = (
                f"  Iteration {niters}/{max_iters}{status}: J={J:.6e} "
                f"(T_assign={t_assign.elapsed:.6f}s, T_update={t_update.elapsed:.6f}s)"
            )
            if verbose and (niters == 1 or niters % 10 == 0 or converged):
                logger.info(message)
            else:
                logger.debug(message)

        if converged:
            break

        J_previous = J
        niters += 1

    return min(niters, max_iters), converged, history, timings


def _has_converged(J: float, J_previous: float, tol: float) -> bool:
    # J == J_previous покрывает нулевую целевую функцию (|0 - 0| < tol * 0 ложно)
    return abs(J - J_previous) < tol * J or J == J_previous


def _assemble_result(
    X: np.ndarray,
    centroids: np.ndarray,
    labels: np.ndarray,
    niters: int,
    converged: bool,
) -> KMeansResult:
    """Однопоточный пересчёт стоимостей по итоговым центроидам."""
    k = centroids.shape[0]
    assignments = labels.copy()
    costs = row_squared_distances(X, centroids[assignments])
    counts = np.bincount(assignments, minlength=k).astype(np.int64)

    return KMeansResult(
        centroids=centroids,
        assignments=assignments,
        costs=costs,
        counts=counts,
        wcounts=counts.astype(np.float64),
        totalcost=float(costs.sum()),
        iterations=niters,
        converged=converged,
    )


def _as_design_matrix(X: Any) -> np.ndarray:
    X = np.asarray(X, dtype=np.float64)
    if X.ndim != 2:
        raise InvalidArgumentError(f"X must be a 2D array (N, D), got shape {X.shape}")
    return X


def _validate(
    X: np.ndarray,
    k: int,
    n_workers: int,
    max_iters: int,
    tol: float,
    init: str,
    initial_centroids: Optional[np.ndarray],
) -> None:
    """Проверка аргументов до запуска любых воркеров."""
    N, D = X.shape
    if N < 1:
        raise InvalidArgumentError("X must contain at least one point")
    if k < 1 or k > N:
        raise InvalidArgumentError(f"k must be in 1..{N}, got {k}")
    if n_workers < 1:
        raise InvalidArgumentError(f"n_workers must be positive, got {n_workers}")
    if max_iters < 1:
        raise InvalidArgumentError(f"max_iters must be positive, got {max_iters}")
    if not tol > 0:
        raise InvalidArgumentError(f"tol must be positive, got {tol}")
    if initial_centroids is None and init not in STRATEGIES:
        raise InvalidArgumentError(
            f"Unknown init strategy {init!r}, expected one of {STRATEGIES}"
        )
    if initial_centroids is not None:
        shape = np.shape(initial_centroids)
        if shape != (k, D):
            raise InvalidArgumentError(
                f"Expected initial centroids shape ({k}, {D}), got {shape}"
            )
