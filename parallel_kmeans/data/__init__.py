from .dataset import Dataset, save_dataset
from .synthetic import make_blobs_dataset
from .validation import validate_dataset

__all__ = ["Dataset", "save_dataset", "make_blobs_dataset", "validate_dataset"]
