"""Синтетические датасеты для проверки и бенчмаркинга K-means."""

from __future__ import annotations

from sklearn.datasets import make_blobs
from sklearn.preprocessing import StandardScaler

from parallel_kmeans.data.dataset import Dataset


def make_blobs_dataset(
    N: int,
    D: int,
    K: int,
    cluster_std: float = 1.0,
    seed: int = 42,
    center_box: tuple[float, float] = (-10.0, 10.0),
    standardize: bool = False,
) -> Dataset:
    """
    Генерация гауссовых кластеров с помощью make_blobs.

    Args:
        N: Количество точек
        D: Размерность пространства
        K: Количество кластеров
        cluster_std: Стандартное отклонение кластеров
        seed: seed генератора
        center_box: Диапазон расположения центров
        standardize: Нормализовать признаки StandardScaler'ом

    Returns:
        Dataset с заполненными labels_true и centers
    """
    data, labels, centers = make_blobs(
        n_samples=N,
        n_features=D,
        centers=K,
        cluster_std=cluster_std,
        center_box=center_box,
        random_state=seed,
        return_centers=True,
    )

    if standardize:
        scaler = StandardScaler()
        data = scaler.fit_transform(data)
        centers = scaler.transform(centers)

    metadata = {
        "N": N,
        "D": D,
        "K": K,
        "cluster_std": cluster_std,
        "seed": seed,
        "source": "make_blobs",
    }
    return Dataset(data, metadata=metadata, labels_true=labels, centers=centers)
