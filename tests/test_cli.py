"""
Тесты командной строки на маленьких синтетических данных.
"""

import json

import pytest

from main import build_parser, run_bench, run_cluster


class TestCli:
    """Тесты режимов cluster и bench."""

    def test_cluster_writes_result(self, tmp_path):
        """cluster сохраняет сводку, центроиды и метки в JSON."""
        out = tmp_path / "result.json"
        args = build_parser().parse_args([
            "cluster", "--n", "300", "--d", "3", "--k", "3",
            "--algorithm", "hamerly", "--workers", "2", "--output", str(out),
        ])

        assert run_cluster(args) == 0

        payload = json.loads(out.read_text(encoding="utf-8"))
        assert len(payload["centroids"]) == 3
        assert len(payload["assignments"]) == 300
        assert sum(payload["counts"]) == 300

    def test_cluster_reports_invalid_k(self):
        """Ошибка аргументов даёт код возврата 2, а не трассировку."""
        args = build_parser().parse_args(["cluster", "--n", "5", "--k", "10", "--workers", "1"])

        assert run_cluster(args) == 2

    def test_bench_ndjson(self, tmp_path):
        """bench пишет по записи на пару (алгоритм, воркеры)."""
        out = tmp_path / "bench.ndjson"
        args = build_parser().parse_args([
            "bench", "--n", "200", "--d", "2", "--k", "3",
            "--workers-list", "1", "2", "--repeats", "1", "--output", str(out),
        ])

        assert run_bench(args) == 0

        records = [json.loads(line) for line in out.read_text(encoding="utf-8").splitlines()]
        assert len(records) == 6
        assert {r["algorithm"] for r in records} == {"lloyd", "light_elkan", "hamerly"}
        assert all(r["matches_lloyd"] for r in records)

    def test_unknown_algorithm_rejected(self):
        """argparse отклоняет неизвестный вариант."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["cluster", "--algorithm", "elkan"])
