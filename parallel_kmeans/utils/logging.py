import logging
from typing import Any, Dict

PROJECT_LOGGER = "parallel_kmeans"
LOG_FORMAT = "[%(asctime)s] %(levelname)s: %(message)s"


def setup_logger(level: int = logging.INFO, name: str = PROJECT_LOGGER) -> logging.Logger:
    """
    Логгер проекта с единственным StreamHandler.

    Повторный вызов не добавляет обработчиков, а только меняет уровень,
    поэтому CLI и kmeans(verbose=True) могут вызывать его независимо.

    :param level: минимальный уровень логирования
    :param name: имя логгера (по умолчанию ``parallel_kmeans``)
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)

    # без дублирования через root-логгер
    logger.propagate = False
    return logger


def format_run_prefix(meta: Dict[str, Any]) -> str:
    """Префикс строк лога: ``[N=.. D=.. K=.. alg=.. W=..]``."""
    return (
        f"[N={meta['N']} D={meta['D']} K={meta['K']} "
        f"alg={meta.get('algorithm', 'lloyd')} W={meta.get('workers', 1)}]"
    )
