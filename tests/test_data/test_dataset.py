"""
Тесты загрузки, сохранения и генерации датасетов.
"""

import numpy as np
import pytest

from parallel_kmeans.data.dataset import Dataset, save_dataset
from parallel_kmeans.data.synthetic import make_blobs_dataset
from parallel_kmeans.data.validation import validate_dataset


class TestDatasetFile:
    """Тесты текстового формата."""

    def test_load_with_metadata(self, tmp_path):
        """JSON-заголовок читается как метаданные, комментарии пропускаются."""
        path = tmp_path / "points.txt"
        path.write_text(
            '# {"N": 3, "D": 2, "K": 2, "purpose": "test"}\n'
            "# произвольный комментарий\n"
            "0.0 0.0\n"
            "1.5 -2.0\n"
            "\n"
            "10 10\n",
            encoding="utf-8",
        )

        dataset = Dataset.from_file(path)

        np.testing.assert_array_equal(dataset.X, [[0.0, 0.0], [1.5, -2.0], [10.0, 10.0]])
        assert dataset.metadata["K"] == 2
        assert dataset.metadata["purpose"] == "test"
        validate_dataset(dataset)

    def test_metadata_defaults_from_shape(self, tmp_path):
        """Без заголовка N и D берутся из данных."""
        path = tmp_path / "plain.txt"
        path.write_text("1 2 3\n4 5 6\n", encoding="utf-8")

        dataset = Dataset.from_file(path)

        assert dataset.metadata == {"N": 2, "D": 3}
        assert dataset.N == 2 and dataset.D == 3

    def test_save_and_load(self, tmp_path):
        """Сохранённый датасет загружается без потери точности."""
        X = np.random.default_rng(1).normal(size=(20, 3))
        dataset = Dataset(X, metadata={"K": 4})

        path = save_dataset(dataset, tmp_path / "nested" / "data.txt")
        loaded = Dataset.from_file(path)

        np.testing.assert_array_equal(loaded.X, X)
        assert loaded.metadata == {"K": 4, "N": 20, "D": 3}

    def test_inconsistent_rows(self, tmp_path):
        """Строки разной длины дают ошибку."""
        path = tmp_path / "bad.txt"
        path.write_text("1 2\n3 4 5\n", encoding="utf-8")

        with pytest.raises(ValueError):
            Dataset.from_file(path)

    def test_empty_file(self, tmp_path):
        """Файл без данных отклоняется."""
        path = tmp_path / "empty.txt"
        path.write_text("# only comments\n", encoding="utf-8")

        with pytest.raises(ValueError):
            Dataset.from_file(path)


class TestSynthetic:
    """Тесты генерации make_blobs."""

    def test_make_blobs_dataset(self):
        """Форма данных, меток и центров соответствует параметрам."""
        dataset = make_blobs_dataset(N=300, D=4, K=3, seed=0)

        assert dataset.X.shape == (300, 4)
        assert dataset.labels_true.shape == (300,)
        assert dataset.centers.shape == (3, 4)
        assert dataset.metadata["K"] == 3
        validate_dataset(dataset)

    def test_reproducible(self):
        """Одинаковый seed даёт одинаковые данные."""
        a = make_blobs_dataset(N=50, D=2, K=2, seed=5)
        b = make_blobs_dataset(N=50, D=2, K=2, seed=5)

        np.testing.assert_array_equal(a.X, b.X)

    def test_standardize(self):
        """После стандартизации признаки центрированы."""
        dataset = make_blobs_dataset(N=500, D=3, K=4, seed=2, standardize=True)

        np.testing.assert_allclose(dataset.X.mean(axis=0), 0.0, atol=1e-10)


class TestValidation:
    """Тесты validate_dataset."""

    def test_shape_mismatch(self):
        """Несоответствие N метаданным."""
        dataset = Dataset(np.zeros((5, 2)), metadata={"N": 6})

        with pytest.raises(AssertionError):
            validate_dataset(dataset)

    def test_non_finite(self):
        """NaN в данных отклоняется."""
        X = np.zeros((3, 2))
        X[1, 1] = np.nan

        with pytest.raises(AssertionError):
            validate_dataset(Dataset(X))
