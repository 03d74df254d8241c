"""
Dataset File Access

Reads the static order dataset served by the API. The file is read on
every call so edits to the dataset are picked up without a restart.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import structlog

from src.config import get_settings

logger = structlog.get_logger(__name__)


class DatasetError(Exception):
    """The dataset file is missing, unreadable or malformed"""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.message = message
        self.path = str(path) if path is not None else None


def resolve_dataset_path(path: Optional[Union[str, Path]] = None) -> Path:
    """Absolute path of the configured (or given) dataset file"""
    return Path(path or get_settings().dataset.path).resolve()


def read_dataset(
    path: Optional[Union[str, Path]] = None,
    encoding: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Load the raw order records.

    Args:
        path: Dataset file, defaults to the configured path
        encoding: File encoding, defaults to the configured encoding

    Returns:
        Records exactly as stored in the file

    Raises:
        DatasetError: If the file cannot be read or is not a JSON array
    """
    dataset_path = resolve_dataset_path(path)
    encoding = encoding or get_settings().dataset.encoding

    try:
        raw = dataset_path.read_text(encoding=encoding)
    except OSError as e:
        raise DatasetError(f"Cannot read dataset file: {e}", path=dataset_path) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise DatasetError(f"Dataset file is not valid JSON: {e}", path=dataset_path) from e

    if not isinstance(data, list):
        raise DatasetError("Dataset file must contain a JSON array of orders", path=dataset_path)

    logger.debug("Dataset loaded", path=str(dataset_path), records=len(data))
    return data


def check_dataset_health(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Availability of the dataset file for health checks"""
    dataset_path = resolve_dataset_path(path)

    if not dataset_path.is_file():
        return {"status": "unhealthy", "path": str(dataset_path), "error": "Dataset file not found"}

    return {
        "status": "healthy",
        "path": str(dataset_path),
        "size_bytes": dataset_path.stat().st_size,
    }
