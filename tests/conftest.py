"""
Общие фикстуры для всех тестов.
"""

import numpy as np
import pytest


@pytest.fixture(scope="session")
def random_seed():
    """Фикстура для установки глобального seed."""
    np.random.seed(42)
    return 42


@pytest.fixture
def small_dataset():
    """Фикстура с небольшим тестовым датасетом (2D, 2 кластера)."""
    np.random.seed(42)
    # Два явно разделённых кластера
    cluster1 = np.random.randn(30, 2) + [0, 0]
    cluster2 = np.random.randn(30, 2) + [5, 5]
    X = np.vstack([cluster1, cluster2])
    initial_centroids = np.array([
        [-1.0, -1.0],
        [6.0, 6.0],
    ])
    return X, initial_centroids


@pytest.fixture
def medium_dataset():
    """Фикстура со средним тестовым датасетом (10D, 3 кластера)."""
    np.random.seed(42)
    cluster1 = np.random.randn(50, 10) + [0] * 10
    cluster2 = np.random.randn(50, 10) + [5] * 10
    cluster3 = np.random.randn(50, 10) + [-5] * 10
    X = np.vstack([cluster1, cluster2, cluster3])
    initial_centroids = np.array([
        [-1.0] * 10,
        [6.0] * 10,
        [-6.0] * 10,
    ])
    return X, initial_centroids


@pytest.fixture
def overlapping_dataset():
    """
    Перекрывающиеся кластеры (4D, 5 кластеров по 3 гауссовым облакам).

    Много итераций до сходимости и много смен меток: хороший случай
    для проверки отсечения. Начальные центроиды — k-means++ с фиксированным seed.
    """
    from parallel_kmeans.core.seeding import initialize

    rng = np.random.default_rng(7)
    X = np.vstack([
        rng.normal(loc=0.0, scale=1.5, size=(200, 4)),
        rng.normal(loc=2.0, scale=1.5, size=(200, 4)),
        rng.normal(loc=[4.0, -2.0, 0.0, 1.0], scale=1.5, size=(200, 4)),
    ])
    initial_centroids = initialize(X, 5, strategy="k-means++", random_state=3)
    return X, initial_centroids


@pytest.fixture
def six_points():
    """
    Шесть 2D-точек: три около (0,0) и три около (10,10).

    Средние групп ровно (0,0) и (10,10), поэтому при старте из этих
    центроидов J не меняется и сходимость наступает на второй итерации.
    """
    X = np.array([
        [-1.0, 0.0],
        [1.0, 0.0],
        [0.0, 0.0],
        [9.0, 10.0],
        [11.0, 10.0],
        [10.0, 10.0],
    ])
    initial_centroids = np.array([
        [0.0, 0.0],
        [10.0, 10.0],
    ])
    return X, initial_centroids


@pytest.fixture(params=["lloyd", "light_elkan", "hamerly"])
def algorithm_name(request):
    """Параметризация по всем вариантам алгоритма."""
    return request.param


@pytest.fixture
def tied_points():
    """
    Целочисленные 1D-точки с равноудалёнными центроидами.

    На второй итерации точка x=2 находится ровно посередине между
    центроидами 3 и 1, и ничья должна разрешаться в пользу меньшего номера.
    """
    X = np.array([3, 3, 2, 0, 3, 0, 1, 5, 2, 3, 5, 1], dtype=np.float64).reshape(-1, 1)
    initial_centroids = np.array([[5.0], [3.0], [2.0]])
    return X, initial_centroids
