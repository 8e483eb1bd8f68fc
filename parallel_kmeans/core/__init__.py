from .base import BoundedKMeansAlgorithm, KMeansAlgorithm
from .containers import Containers, HamerlyContainers, LightElkanContainers
from .hamerly import Hamerly
from .kmeans import ALGORITHMS, get_algorithm, kmeans, kmeans_into
from .light_elkan import LightElkan
from .lloyd import Lloyd
from .parallel import parallelize, splitter
from .result import KMeansResult
from .seeding import initialize

__all__ = [
    "KMeansAlgorithm",
    "BoundedKMeansAlgorithm",
    "Lloyd",
    "LightElkan",
    "Hamerly",
    "Containers",
    "LightElkanContainers",
    "HamerlyContainers",
    "KMeansResult",
    "ALGORITHMS",
    "get_algorithm",
    "kmeans",
    "kmeans_into",
    "initialize",
    "parallelize",
    "splitter",
]
