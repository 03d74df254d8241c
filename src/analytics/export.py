"""
Data Export

Serializes the (filtered) order collection to CSV or JSON and writes
export files.
"""

import json
import math
from datetime import datetime, timedelta, timezone
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Union

import polars as pl
import structlog

from .schema import ORDER_DATE

logger = structlog.get_logger(__name__)

DEFAULT_EXPORT_FILENAME = "walmart_data_export"
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class ExportFormat(str, Enum):
    """Supported export formats"""
    CSV = "csv"
    JSON = "json"


def iso_timestamp(epoch_ms: Union[int, float]) -> str:
    """Epoch milliseconds as an ISO-8601 UTC string, e.g. 2023-03-05T00:00:00.000Z"""
    moment = EPOCH + timedelta(milliseconds=epoch_ms)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def _quote(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def _format_number(value: Union[int, float]) -> str:
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def _format_field(column: str, value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return _quote(value)
    if isinstance(value, bool):
        return _quote(str(value).lower())
    if isinstance(value, (int, float)):
        if column == ORDER_DATE:
            return _quote(iso_timestamp(value))
        return _format_number(value)
    return _quote(str(value))


def _header(df: pl.DataFrame) -> List[str]:
    """Keys of the first record, i.e. the columns its row fills"""
    first = df.row(0, named=True)
    return [column for column in df.columns if first[column] is not None]


def _json_value(value: Any) -> Any:
    # Float columns widen integral source values; write them back as ints
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def to_csv(df: pl.DataFrame) -> str:
    """
    Render orders as CSV.

    The header is the first record's keys in column order; keys only later
    records carry are not exported. Strings are quoted with inner
    quotes doubled, numbers are bare, OrderDate is a quoted ISO timestamp
    and nulls are empty fields.
    """
    if df.is_empty():
        return ""

    columns = _header(df)
    lines = [",".join(columns)]
    for row in df.select(columns).iter_rows():
        lines.append(",".join(_format_field(column, value) for column, value in zip(columns, row)))

    return "\n".join(lines)


def to_json(df: pl.DataFrame) -> str:
    """
    Render orders as a pretty-printed JSON array (2-space indent).

    Integral floats are written as integers, so a record given as
    ``"Total Sales": 100`` exports as ``100`` rather than ``100.0``.
    """
    records = [
        {key: _json_value(value) for key, value in row.items()}
        for row in df.iter_rows(named=True)
    ]
    return json.dumps(records, indent=2, ensure_ascii=False)


def export_data(
    df: pl.DataFrame,
    fmt: Union[ExportFormat, str],
    filename: Optional[str] = None,
    directory: Union[str, Path] = ".",
) -> Optional[Path]:
    """
    Write orders to ``<directory>/<filename>.<format>``.

    Args:
        df: Orders to export
        fmt: "csv" or "json"
        filename: Base file name without extension
        directory: Target directory

    Returns:
        Path of the written file, or None when there was nothing to export
    """
    fmt = ExportFormat(fmt)

    if df.is_empty():
        logger.error("No data to export", format=fmt.value)
        return None

    content = to_csv(df) if fmt is ExportFormat.CSV else to_json(df)

    output_path = Path(directory) / f"{filename or DEFAULT_EXPORT_FILENAME}.{fmt.value}"
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")

    logger.info("Orders exported", path=str(output_path), rows=len(df), format=fmt.value)
    return output_path
