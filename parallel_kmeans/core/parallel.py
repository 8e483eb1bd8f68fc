"""
Fork-join каркас для параллельных шагов K-means.

Диапазон точек 0..N-1 режется на W смежных чанков. Каждый чанк обрабатывается
функцией f(*args, r, idx), где r — диапазон индексов точек, idx — номер
контейнера (слота), в который функция пишет свои частичные результаты.
Запись идёт только в собственный слот и в собственный диапазон меток,
поэтому блокировки не нужны: свёртка слотов выполняется после join.
"""

from __future__ import annotations

from concurrent.futures import Executor, Future, ThreadPoolExecutor, wait
from typing import Any, Callable, List, Optional

from parallel_kmeans.errors import InvalidArgumentError


def splitter(ncol: int, n_workers: int) -> List[range]:
    """
    Разбиение range(ncol) на n_workers смежных диапазонов.

    Размеры диапазонов отличаются не более чем на 1, первые ncol % n_workers
    диапазонов на единицу длиннее. При n_workers > ncol хвостовые диапазоны пустые.
    """
    if n_workers < 1:
        raise InvalidArgumentError(f"n_workers must be positive, got {n_workers}")
    if ncol < 0:
        raise InvalidArgumentError(f"ncol must be non-negative, got {ncol}")

    size, extra = divmod(ncol, n_workers)
    ranges: List[range] = []
    start = 0
    for i in range(n_workers):
        stop = start + size + (1 if i < extra else 0)
        ranges.append(range(start, stop))
        start = stop
    return ranges


def parallelize(
    n_workers: int,
    ncol: int,
    f: Callable[..., None],
    *args: Any,
    executor: Optional[Executor] = None,
) -> None:
    """
    Выполняет f по чанкам на n_workers исполнителях и дожидается всех.

    - n_workers == 1: один синхронный вызов f(*args, range(ncol), 0);
    - n_workers > 1: чанки 0..W-2 уходят в executor со слотами 1..W-1,
      последний чанк выполняет вызывающий поток со слотом 0.

    Пустые чанки пропускаются. Исключение из любого чанка пробрасывается
    вызывающему только после завершения всех запущенных задач.
    """
    if n_workers < 1:
        raise InvalidArgumentError(f"n_workers must be positive, got {n_workers}")

    if n_workers == 1:
        f(*args, range(ncol), 0)
        return

    ranges = splitter(ncol, n_workers)

    if executor is None:
        with ThreadPoolExecutor(max_workers=n_workers - 1) as own_executor:
            _fork_join(own_executor, ranges, f, args)
    else:
        _fork_join(executor, ranges, f, args)


def _fork_join(
    executor: Executor,
    ranges: List[range],
    f: Callable[..., None],
    args: tuple,
) -> None:
    waiting_list: List[Future] = []
    try:
        for i, r in enumerate(ranges[:-1]):
            if len(r) == 0:
                continue
            waiting_list.append(executor.submit(f, *args, r, i + 1))

        if len(ranges[-1]) > 0:
            f(*args, ranges[-1], 0)
    finally:
        # барьер: ни одна задача не должна писать в контейнеры после выхода
        wait(waiting_list)

    for fut in waiting_list:
        fut.result()
