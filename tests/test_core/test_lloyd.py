"""
Unit-тесты шагов назначения и обновления алгоритма Ллойда.
"""

import numpy as np
import pytest

from parallel_kmeans.core.containers import UNASSIGNED, Containers
from parallel_kmeans.core.lloyd import Lloyd
from parallel_kmeans.core.parallel import parallelize
from parallel_kmeans.errors import EmptyClusterError


def _assign(alg, containers, X, centroids, n_workers):
    alg.prepare(containers, centroids)
    parallelize(n_workers, X.shape[0], alg.update_containers, containers, X, centroids)


class TestLloyd:
    """Тесты базовой функциональности Lloyd."""

    def test_create_containers(self):
        """Контейнеры имеют по слоту на воркера и все точки помечены как неназначенные."""
        containers = Lloyd().create_containers(3, 2, 10, 4)

        assert isinstance(containers, Containers)
        assert containers.shape == (10, 3, 2, 4)
        assert containers.new_centroids.shape == (4, 3, 2)
        assert containers.centroids_cnt.shape == (4, 3)
        assert containers.sum_of_squares.shape == (4,)
        assert np.all(containers.labels == UNASSIGNED)

    def test_update_containers(self, simple_points):
        """Шаг назначения пишет метки и квадраты расстояний."""
        X, centroids = simple_points
        alg = Lloyd()
        containers = alg.create_containers(2, 2, 6, 1)

        _assign(alg, containers, X, centroids, 1)

        np.testing.assert_array_equal(containers.labels, [0, 0, 0, 1, 1, 1])
        expected_costs = np.array([0.5, 0.5, 4.5, 2.0, 0.0, 2.0])
        np.testing.assert_allclose(containers.costs, expected_costs, rtol=1e-12)

    @pytest.mark.parametrize("n_workers", [1, 2, 3])
    def test_update_centroids(self, simple_points, n_workers):
        """Новые центроиды — средние групп, J — сумма стоимостей."""
        X, centroids = simple_points
        centroids = centroids.copy()
        alg = Lloyd()
        containers = alg.create_containers(2, 2, 6, n_workers)

        _assign(alg, containers, X, centroids, n_workers)
        J = alg.update_centroids(centroids, containers, X, n_workers)

        np.testing.assert_allclose(centroids[0], [1.0, 1.0], rtol=1e-10)
        np.testing.assert_allclose(centroids[1], [11.0, 11.0], rtol=1e-10)
        assert J == pytest.approx(9.5, rel=1e-12)
        # после свёртки слот 0 содержит итоговые счётчики
        np.testing.assert_array_equal(containers.centroids_cnt[0], [3, 3])

    def test_update_centroids_empty_cluster(self):
        """Пустой кластер даёт явную ошибку, а не NaN-центроид."""
        X = np.array([
            [0.0, 0.0],
            [1.0, 1.0],
            [2.0, 2.0],
        ])
        centroids = np.array([
            [1.0, 1.0],
            [100.0, 100.0],
        ])
        alg = Lloyd()
        containers = alg.create_containers(2, 2, 3, 1)

        _assign(alg, containers, X, centroids, 1)
        with pytest.raises(EmptyClusterError) as exc_info:
            alg.update_centroids(centroids, containers, X, 1, iteration=1)

        assert exc_info.value.clusters == [1]
        assert exc_info.value.iteration == 1
        # центроиды не испорчены
        assert np.all(np.isfinite(centroids))

    def test_stale_slots_are_reset(self, simple_points):
        """Повторное обновление не накапливает суммы прошлых итераций."""
        X, centroids = simple_points
        centroids = centroids.copy()
        alg = Lloyd()
        containers = alg.create_containers(2, 2, 6, 2)

        for _ in range(3):
            _assign(alg, containers, X, centroids, 2)
            alg.update_centroids(centroids, containers, X, 2)

        np.testing.assert_allclose(centroids, [[1.0, 1.0], [11.0, 11.0]], rtol=1e-10)


@pytest.fixture
def simple_points():
    """Очень простой 2D датасет для базовых тестов."""
    X = np.array([
        [0.0, 0.0],
        [1.0, 1.0],
        [2.0, 2.0],
        [10.0, 10.0],
        [11.0, 11.0],
        [12.0, 12.0],
    ])
    initial_centroids = np.array([
        [0.5, 0.5],
        [11.0, 11.0],
    ])
    return X, initial_centroids
