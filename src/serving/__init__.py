"""
Serving Module
"""
from .dataset import DatasetError, check_dataset_health, read_dataset

__all__ = [
    "DatasetError",
    "check_dataset_health",
    "read_dataset",
]
