"""
Загрузка и сохранение матриц данных для кластеризации.

Формат текстового файла:
# {"N": ..., "D": ..., "K": ...}      (необязательная строка метаданных)
x_11 x_12 ... x_1D                   (по строке на точку)
...
Прочие строки, начинающиеся с #, считаются комментариями.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import numpy as np


class Dataset:
    """
    Матрица данных X (N, D) с метаданными.

    Может быть загружена из файла (Dataset.from_file) или собрана в памяти
    (например, генератором make_blobs_dataset).
    """

    def __init__(
        self,
        X: np.ndarray,
        metadata: dict[str, Any] | None = None,
        labels_true: np.ndarray | None = None,
        centers: np.ndarray | None = None,
    ) -> None:
        self.X = np.asarray(X, dtype=np.float64)
        self.metadata: dict[str, Any] = dict(metadata or {})
        self.metadata.setdefault("N", int(self.X.shape[0]))
        self.metadata.setdefault("D", int(self.X.shape[1]) if self.X.ndim == 2 else 0)
        self.labels_true = labels_true
        self.centers = centers

    @property
    def N(self) -> int:
        return int(self.X.shape[0])

    @property
    def D(self) -> int:
        return int(self.X.shape[1])

    @classmethod
    def from_file(cls, path: str | Path) -> "Dataset":
        """Загружает датасет из текстового файла (см. формат в описании модуля)."""
        path = Path(path)
        logging.info(f"Loading dataset from {path}")

        metadata: dict[str, Any] = {}
        rows: list[list[float]] = []

        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                if line.startswith("#"):
                    body = line[1:].strip()
                    # JSON-метаданные допускаются только до первой строки данных
                    if not rows and body.startswith("{"):
                        metadata.update(json.loads(body))
                    continue
                rows.append([float(v) for v in line.split()])

        if not rows:
            raise ValueError(f"Dataset file {path} contains no data rows")

        widths = {len(r) for r in rows}
        if len(widths) != 1:
            raise ValueError(f"Inconsistent row widths in {path}: {sorted(widths)}")

        dataset = cls(np.array(rows, dtype=np.float64), metadata=metadata)
        logging.info(f"Dataset loaded: X.shape={dataset.X.shape}")
        return dataset


def save_dataset(dataset: Dataset, path: str | Path) -> Path:
    """Сохраняет датасет в текстовом формате, совместимом с Dataset.from_file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write("# " + json.dumps(dataset.metadata, ensure_ascii=False) + "\n")
        for row in dataset.X:
            f.write(" ".join(repr(float(v)) for v in row))
            f.write("\n")
    return path
