"""
Таймеры для замера шагов K-means.

Timer — контекстный менеджер на time.perf_counter();
PhaseTimings — накопитель времени шагов назначения и обновления за один запуск.
"""
from __future__ import annotations
import time
from dataclasses import dataclass
from typing import Any


class Timer:
    """
    Контекстный менеджер для измерения времени выполнения кода.

    Пример использования:
        with Timer() as t:
            run_step()
        elapsed_time = t.elapsed
    """

    def __init__(self) -> None:
        self.start: float = 0.0
        self.end: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> Timer:
        self.start = time.perf_counter()
        return self

    def __exit__(self, *args: Any) -> None:
        self.end = time.perf_counter()
        self.elapsed = self.end - self.start


@dataclass
class PhaseTimings:
    """Суммарное время шагов за один запуск кластеризации."""

    t_assign_total: float = 0.0
    t_update_total: float = 0.0

    def add(self, t_assign: float, t_update: float) -> None:
        self.t_assign_total += t_assign
        self.t_update_total += t_update

    @property
    def t_iter_total(self) -> float:
        return self.t_assign_total + self.t_update_total
