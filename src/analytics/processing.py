"""
Record Processing

Normalizes raw dataset records into an order frame and derives the
filter option lists from it.
"""

from typing import Any, Dict, Iterable, List, Mapping

import pandas as pd
import polars as pl
import structlog

from .schema import (
    COUNTRY,
    CATEGORY,
    ORDER_DATE,
    REGION,
    SEGMENT,
    STATE,
    FilterOptions,
    empty_orders,
)

logger = structlog.get_logger(__name__)


def to_timestamp(value: Any) -> Any:
    """
    Convert a date string into epoch milliseconds.

    Naive date strings are read as UTC. Non-string values (already epoch
    milliseconds, or null) are returned unchanged.
    """
    if not isinstance(value, str):
        return value

    ts = pd.Timestamp(value)
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    return int(ts.value // 1_000_000)


def process_records(records: Iterable[Mapping[str, Any]]) -> pl.DataFrame:
    """
    Build an order frame from raw dataset records.

    Each record keeps its own keys and key order; only OrderDate is
    rewritten to epoch milliseconds.

    Args:
        records: Raw records as decoded from the dataset JSON

    Returns:
        Order frame (empty frame with the dashboard schema if no records)
    """
    rows: List[Dict[str, Any]] = []
    for record in records:
        row = dict(record)
        if ORDER_DATE in row:
            row[ORDER_DATE] = to_timestamp(row[ORDER_DATE])
        rows.append(row)

    if not rows:
        return empty_orders()

    df = pl.DataFrame(rows, infer_schema_length=None)
    logger.debug("Processed order records", rows=len(df), columns=len(df.columns))
    return df


def unique_values(df: pl.DataFrame, field: str) -> List[str]:
    """Sorted unique string values of a column"""
    if df.is_empty() or field not in df.columns:
        return []

    series = df.get_column(field)
    if series.dtype != pl.Utf8:
        return []

    return series.drop_nulls().unique().sort().to_list()


def states_by_country(df: pl.DataFrame) -> Dict[str, List[str]]:
    """Map each country (first-seen order) to its sorted unique states"""
    if df.is_empty():
        return {}

    grouped = df.group_by(COUNTRY, maintain_order=True).agg(
        pl.col(STATE).drop_nulls().unique().sort().alias("states")
    )
    return {
        row[COUNTRY]: row["states"]
        for row in grouped.iter_rows(named=True)
    }


def build_filter_options(df: pl.DataFrame) -> FilterOptions:
    """
    Derive every filter dropdown from the base order collection.

    Always call this with the unfiltered frame so the options do not
    shrink as filters are applied.
    """
    return FilterOptions(
        countries=unique_values(df, COUNTRY),
        categories=unique_values(df, CATEGORY),
        segments=unique_values(df, SEGMENT),
        regions=unique_values(df, REGION),
        states_by_country=states_by_country(df),
    )
