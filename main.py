"""
Командная строка для параллельного K-means.

Режимы работы:
1. cluster — одна кластеризация на датасете из файла или на синтетических данных
2. bench   — замеры всех вариантов алгоритма на разном числе воркеров
"""

import argparse
import json
import sys
from multiprocessing import cpu_count
from pathlib import Path

import numpy as np

from parallel_kmeans.config import KMeansConfig, ParallelConfig
from parallel_kmeans.core.kmeans import ALGORITHMS, kmeans
from parallel_kmeans.data.dataset import Dataset
from parallel_kmeans.data.synthetic import make_blobs_dataset
from parallel_kmeans.data.validation import validate_dataset
from parallel_kmeans.errors import KMeansError
from parallel_kmeans.metrics.metrics import efficiency, fit_time_stats, speedup, throughput
from parallel_kmeans.metrics.timers import Timer
from parallel_kmeans.utils.logging import format_run_prefix, setup_logger


def load_dataset(args: argparse.Namespace) -> Dataset:
    """Датасет из --data или синтетический из --n/--d/--k."""
    if args.data:
        dataset = Dataset.from_file(args.data)
    else:
        dataset = make_blobs_dataset(N=args.n, D=args.d, K=args.k, seed=args.seed)
    validate_dataset(dataset)
    return dataset


def run_cluster(args: argparse.Namespace) -> int:
    """
    Выполняет одну кластеризацию и печатает сводку.

    Returns:
        Код возврата процесса
    """
    logger = setup_logger()
    dataset = load_dataset(args)
    config = KMeansConfig(max_iters=args.max_iters, tol=args.tol, init=args.init, verbose=args.verbose)
    parallel = ParallelConfig(n_workers=args.workers)

    prefix = format_run_prefix(
        {"N": dataset.N, "D": dataset.D, "K": args.k, "algorithm": args.algorithm, "workers": parallel.n_workers}
    )
    logger.info(f"{prefix} Clustering started")

    try:
        config.validate()
        parallel.validate()
        result = kmeans(
            args.algorithm,
            dataset.X,
            args.k,
            n_workers=parallel.n_workers,
            init=config.init,
            max_iters=config.max_iters,
            tol=config.tol,
            verbose=config.verbose,
            random_state=args.seed,
            logger=logger,
        )
    except KMeansError as exc:
        logger.error(f"{prefix} Clustering failed: {exc}")
        return 2

    summary = result.summary()
    logger.info(
        f"{prefix} Done: totalcost={result.totalcost:.6e}, "
        f"iterations={result.iterations}, converged={result.converged}"
    )

    if args.output:
        out = Path(args.output)
        payload = dict(summary)
        payload["centroids"] = result.centroids.tolist()
        payload["assignments"] = result.assignments.tolist()
        out.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        logger.info(f"{prefix} Result saved to {out}")
    else:
        print(json.dumps(summary, ensure_ascii=False, indent=2))

    return 0


def run_bench(args: argparse.Namespace) -> int:
    """
    Замеряет все варианты алгоритма для каждого числа воркеров.

    Начальные центроиды общие для всех прогонов, поэтому результаты вариантов
    с отсечением сравниваются с Lloyd по меткам.
    """
    logger = setup_logger()
    dataset = load_dataset(args)
    X = dataset.X

    rng = np.random.default_rng(args.seed)
    initial_centroids = X[rng.choice(dataset.N, size=args.k, replace=False)]

    workers_list = sorted(set(args.workers_list or [1, cpu_count()]))
    records = []
    baseline_labels = None

    for name in ALGORITHMS:
        t_serial = None
        for n_workers in workers_list:
            prefix = format_run_prefix(
                {"N": dataset.N, "D": dataset.D, "K": args.k, "algorithm": name, "workers": n_workers}
            )
            times = []
            result = None
            for _ in range(args.repeats):
                with Timer() as t_fit:
                    result = kmeans(
                        name,
                        X,
                        args.k,
                        n_workers=n_workers,
                        max_iters=args.max_iters,
                        tol=args.tol,
                        initial_centroids=initial_centroids,
                    )
                times.append(t_fit.elapsed)

            stats = fit_time_stats(times)
            t_fit_min = stats["T_fit_min"]
            if n_workers == workers_list[0]:
                t_serial = t_fit_min
            sp = speedup(t_serial, t_fit_min)

            if baseline_labels is None:
                baseline_labels = result.assignments
            matches = bool(np.array_equal(result.assignments, baseline_labels))

            rec = {
                "algorithm": name,
                "workers": n_workers,
                **stats,
                "T_assign_total": result.t_assign_total,
                "T_update_total": result.t_update_total,
                "iterations": result.iterations,
                "converged": result.converged,
                "totalcost": result.totalcost,
                "speedup": sp,
                "efficiency": efficiency(sp, n_workers),
                "throughput_ops": throughput(dataset.N, args.k, dataset.D, result.iterations, t_fit_min),
                "matches_lloyd": matches,
            }
            records.append(rec)
            logger.info(
                f"{prefix} T_fit_min={t_fit_min:.6f}s, speedup={sp:.2f}, "
                f"iterations={result.iterations}, matches_lloyd={matches}"
            )

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            for rec in records:
                f.write(json.dumps(rec, ensure_ascii=False))
                f.write("\n")
        logger.info(f"Benchmark results saved to {args.output}")

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Параллельный K-means (Lloyd, Light-Elkan, Hamerly)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры использования:

  # Кластеризация синтетических данных
  python main.py cluster --n 100000 --d 10 --k 8 --algorithm hamerly --workers 4

  # Кластеризация датасета из файла с сохранением результата
  python main.py cluster --data points.txt --k 5 --output result.json

  # Сравнение вариантов на 1, 2 и 4 воркерах
  python main.py bench --n 200000 --d 20 --k 16 --workers-list 1 2 4
        """,
    )

    subparsers = parser.add_subparsers(dest="mode", help="Режим работы")

    def add_common(p: argparse.ArgumentParser) -> None:
        p.add_argument("--data", type=str, default=None, help="Путь к файлу датасета")
        p.add_argument("--n", type=int, default=10_000, help="Количество точек синтетических данных")
        p.add_argument("--d", type=int, default=2, help="Размерность синтетических данных")
        p.add_argument("--k", type=int, default=8, help="Количество кластеров")
        p.add_argument("--max-iters", type=int, default=300, help="Максимум итераций")
        p.add_argument("--tol", type=float, default=1e-6, help="Порог сходимости по J")
        p.add_argument("--seed", type=int, default=42, help="seed генерации и инициализации")
        p.add_argument("--output", type=str, default=None, help="Файл для сохранения результата")

    cluster_parser = subparsers.add_parser("cluster", help="Одна кластеризация")
    add_common(cluster_parser)
    cluster_parser.add_argument(
        "--algorithm",
        type=str,
        choices=sorted(ALGORITHMS),
        default="lloyd",
        help="Вариант алгоритма (по умолчанию: lloyd)",
    )
    cluster_parser.add_argument(
        "--workers", type=int, default=cpu_count(), help="Количество воркеров"
    )
    cluster_parser.add_argument(
        "--init",
        type=str,
        choices=["k-means++", "random"],
        default="k-means++",
        help="Стратегия инициализации",
    )
    cluster_parser.add_argument(
        "--verbose", action="store_true", help="Логировать ход итераций"
    )

    bench_parser = subparsers.add_parser("bench", help="Сравнение производительности вариантов")
    add_common(bench_parser)
    bench_parser.add_argument(
        "--workers-list", type=int, nargs="+", default=None, help="Список чисел воркеров"
    )
    bench_parser.add_argument(
        "--repeats", type=int, default=3, help="Количество повторов каждого замера"
    )

    return parser


def main() -> None:
    """Точка входа CLI."""
    parser = build_parser()
    args = parser.parse_args()

    if args.mode == "cluster":
        sys.exit(run_cluster(args))
    elif args.mode == "bench":
        sys.exit(run_bench(args))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
