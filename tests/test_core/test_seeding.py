"""
Тесты инициализации центроидов.
"""

import numpy as np
import pytest

from parallel_kmeans.core.seeding import initialize
from parallel_kmeans.errors import InvalidArgumentError


class TestInitialize:
    """Тесты стратегий k-means++ и random."""

    @pytest.mark.parametrize("strategy", ["k-means++", "random"])
    def test_centroids_are_data_points(self, medium_dataset, strategy):
        """Начальные центроиды выбираются среди точек выборки."""
        X, _ = medium_dataset

        centroids = initialize(X, 3, n_workers=2, strategy=strategy, random_state=0)

        assert centroids.shape == (3, 10)
        for c in centroids:
            assert np.any(np.all(X == c, axis=1))

    @pytest.mark.parametrize("strategy", ["k-means++", "random"])
    def test_reproducible(self, medium_dataset, strategy):
        """Одинаковый random_state даёт одинаковые центроиды."""
        X, _ = medium_dataset

        c1 = initialize(X, 3, strategy=strategy, random_state=123)
        c2 = initialize(X, 3, strategy=strategy, random_state=123)

        np.testing.assert_array_equal(c1, c2)

    def test_workers_do_not_change_kmeans_plusplus(self, medium_dataset):
        """Количество воркеров не влияет на выбор центров."""
        X, _ = medium_dataset

        c1 = initialize(X, 3, n_workers=1, random_state=9)
        c4 = initialize(X, 3, n_workers=4, random_state=9)

        np.testing.assert_array_equal(c1, c4)

    def test_random_points_distinct(self):
        """random выбирает k различных точек."""
        X = np.arange(20, dtype=np.float64).reshape(10, 2)

        centroids = initialize(X, 10, strategy="random", random_state=1)

        assert len({tuple(c) for c in centroids}) == 10

    def test_kmeans_plusplus_spreads_centers(self):
        """k-means++ выбирает центры в разных удалённых группах."""
        rng = np.random.default_rng(0)
        X = np.vstack([
            rng.normal(0.0, 0.01, size=(50, 2)),
            rng.normal(100.0, 0.01, size=(50, 2)),
        ])

        centroids = initialize(X, 2, strategy="k-means++", random_state=4)

        assert abs(centroids[0, 0] - centroids[1, 0]) > 50.0

    def test_duplicate_points(self):
        """Совпадающие точки не ломают выбор (нулевые веса)."""
        X = np.ones((5, 3))

        centroids = initialize(X, 3, strategy="k-means++", random_state=0)

        np.testing.assert_array_equal(centroids, np.ones((3, 3)))

    def test_invalid_arguments(self, medium_dataset):
        """Неизвестная стратегия и k вне диапазона."""
        X, _ = medium_dataset

        with pytest.raises(InvalidArgumentError):
            initialize(X, 3, strategy="farthest")
        with pytest.raises(InvalidArgumentError):
            initialize(X, 0)
        with pytest.raises(InvalidArgumentError):
            initialize(X, X.shape[0] + 1)
