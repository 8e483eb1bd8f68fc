"""Параллельный K-means с вариантами Lloyd, Light-Elkan и Hamerly."""

from .config import KMeansConfig, ParallelConfig
from .core import (
    Hamerly,
    KMeansResult,
    LightElkan,
    Lloyd,
    initialize,
    kmeans,
    kmeans_into,
)
from .errors import EmptyClusterError, InvalidArgumentError, KMeansError
from .model import KMeans

__version__ = "0.1.0"

__all__ = [
    "kmeans",
    "kmeans_into",
    "initialize",
    "Lloyd",
    "LightElkan",
    "Hamerly",
    "KMeans",
    "KMeansResult",
    "KMeansConfig",
    "ParallelConfig",
    "KMeansError",
    "InvalidArgumentError",
    "EmptyClusterError",
]
