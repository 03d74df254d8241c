"""
Sales Aggregations

Group-by, ranking and distribution functions over an order frame.

All functions are pure: they read the frame they are given and return a
freshly built result. Groups keep first-seen order, descending sorts are
stable, and empty input yields empty results or zero placeholders.
"""

import math
import re
from enum import Enum
from typing import Dict, List, Union

import polars as pl

from .schema import (
    CATEGORY,
    COUNTRY,
    CUSTOMER_NAME,
    MONTHS,
    ORDER_DATE,
    ORDER_ID,
    PRODUCT_NAME,
    PROFIT,
    SEGMENT,
    SHIP_MODE,
    SUB_CATEGORY,
    TOTAL_SALES,
    ChartData,
    CountrySales,
    ProductProfit,
    TopCustomer,
)

PERIOD = "period"
FIRST_SEEN = "first_seen"
ORDER_COUNT = "order_count"


class Granularity(str, Enum):
    """Sales trend period granularity"""
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


# =============================================================================
# HELPERS
# =============================================================================

def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity"""
    return int(math.floor(value + 0.5))


def percentage(part: float, whole: float) -> int:
    """Integer percentage of ``part`` in ``whole``; 0 when ``whole`` is 0"""
    if not whole:
        return 0
    return round_half_up((part / whole) * 100)


def _sales_by(df: pl.DataFrame, key: str) -> pl.DataFrame:
    """Sum Total Sales per group, groups in first-seen order"""
    return df.group_by(key, maintain_order=True).agg(pl.col(TOTAL_SALES).sum())


def _as_mapping(grouped: pl.DataFrame, key: str) -> Dict[str, float]:
    return dict(zip(grouped.get_column(key).to_list(), grouped.get_column(TOTAL_SALES).to_list()))


def _numeric_suffix(label: str) -> int:
    match = re.search(r"\d+", label)
    return int(match.group()) if match else 0


def period_key(granularity: Granularity) -> pl.Expr:
    """
    Expression deriving the period label of each order's date.

    Week numbers use ``ceil((dayOfYear + jan1Weekday + 1) / 7)`` with
    dayOfYear counted in whole days from Jan 1 and jan1Weekday 0 for Sunday.
    This is not ISO-8601 week numbering.
    """
    order_date = pl.from_epoch(pl.col(ORDER_DATE), time_unit="ms")

    if granularity is Granularity.WEEK:
        jan1 = pl.date(order_date.dt.year(), 1, 1)
        day_of_year = order_date.dt.ordinal_day().cast(pl.Int64) - 1
        jan1_weekday = jan1.dt.weekday().cast(pl.Int64) % 7  # polars: Monday=1 .. Sunday=7
        week = ((day_of_year + jan1_weekday + 1) / 7).ceil().cast(pl.Int64)
        return pl.format("Week {}", week)
    if granularity is Granularity.MONTH:
        return order_date.dt.strftime("%b")
    if granularity is Granularity.QUARTER:
        quarter = (order_date.dt.month().cast(pl.Int64) - 1) // 3 + 1
        return pl.format("Q{}", quarter)
    return order_date.dt.year().cast(pl.Utf8)


# =============================================================================
# TOTALS
# =============================================================================

def totals_by_field(df: pl.DataFrame, field: str) -> Dict[str, float]:
    """
    Sum Total Sales per value of a dimension.

    Args:
        df: Order frame
        field: Dimension column, e.g. "Category" or "Ship Mode"

    Returns:
        Mapping of every observed value to its sales total
    """
    if df.is_empty():
        return {}
    return _as_mapping(_sales_by(df, field), field)


def totals_by_period(
    df: pl.DataFrame,
    granularity: Union[Granularity, str] = Granularity.MONTH,
) -> Dict[str, float]:
    """
    Sum Total Sales per time period.

    Monthly results always carry all twelve months in calendar order,
    zero-filled. Week and quarter labels are ordered by their number,
    years ascending.

    Raises:
        ValueError: If granularity is not a known period
    """
    granularity = Granularity(granularity)

    totals: Dict[str, float] = {}
    if not df.is_empty():
        dated = df.filter(pl.col(ORDER_DATE).is_not_null())
        grouped = _sales_by(dated.with_columns(period_key(granularity).alias(PERIOD)), PERIOD)
        totals = _as_mapping(grouped, PERIOD)

    if granularity is Granularity.MONTH:
        return {month: totals.get(month, 0) for month in MONTHS}

    # Order is applied after grouping
    return dict(sorted(totals.items(), key=lambda item: _numeric_suffix(item[0])))


# =============================================================================
# COUNTRY RANKINGS
# =============================================================================

def _ranked_countries(df: pl.DataFrame) -> pl.DataFrame:
    return _sales_by(df, COUNTRY).sort(TOTAL_SALES, descending=True, maintain_order=True)


def _with_percentages(ranked: pl.DataFrame, denominator: float) -> List[CountrySales]:
    return [
        CountrySales(name=name, value=value, percentage=percentage(value, denominator))
        for name, value in ranked.select(COUNTRY, TOTAL_SALES).iter_rows()
    ]


def top_countries_by_sales(df: pl.DataFrame, limit: int = 5) -> List[CountrySales]:
    """
    Top countries by sales.

    Percentages are shares of the returned countries' combined sales,
    not of the grand total.
    """
    if df.is_empty():
        return []
    top = _ranked_countries(df).head(limit)
    return _with_percentages(top, top.get_column(TOTAL_SALES).sum())


def all_countries_by_sales(df: pl.DataFrame) -> List[CountrySales]:
    """Every country by sales, percentages as shares of the grand total"""
    if df.is_empty():
        return []
    ranked = _ranked_countries(df)
    return _with_percentages(ranked, ranked.get_column(TOTAL_SALES).sum())


# =============================================================================
# DISTRIBUTIONS
# =============================================================================

def _distribution(df: pl.DataFrame, field: str) -> Dict[str, int]:
    if df.is_empty():
        return {}
    grand_total = df.get_column(TOTAL_SALES).sum()
    return {
        label: percentage(sales, grand_total)
        for label, sales in totals_by_field(df, field).items()
    }


def segment_distribution(df: pl.DataFrame) -> Dict[str, int]:
    """Integer share of total sales per customer segment"""
    return _distribution(df, SEGMENT)


def ship_mode_distribution(df: pl.DataFrame) -> Dict[str, int]:
    """Integer share of total sales per ship mode"""
    return _distribution(df, SHIP_MODE)


def sub_category_distribution(df: pl.DataFrame) -> ChartData:
    """Sales per sub-category, highest first"""
    if df.is_empty():
        return ChartData()
    ranked = _sales_by(df, SUB_CATEGORY).sort(TOTAL_SALES, descending=True, maintain_order=True)
    return ChartData(
        labels=ranked.get_column(SUB_CATEGORY).to_list(),
        values=ranked.get_column(TOTAL_SALES).to_list(),
    )


# =============================================================================
# SINGLE-ENTITY SELECTORS
# =============================================================================

def _first_max(grouped: pl.DataFrame, metric: str) -> dict:
    """Row with the highest metric; the earliest group wins ties"""
    return (
        grouped.with_row_index(FIRST_SEEN)
        .sort([metric, FIRST_SEEN], descending=[True, False])
        .row(0, named=True)
    )


def most_profitable_product(df: pl.DataFrame) -> ProductProfit:
    """Product with the highest cumulative profit"""
    if df.is_empty():
        return ProductProfit()

    grouped = df.group_by(PRODUCT_NAME, maintain_order=True).agg(
        pl.col(PROFIT).sum(),
        pl.col(TOTAL_SALES).sum(),
        pl.col(CATEGORY).first(),
    )
    best = _first_max(grouped, PROFIT)

    return ProductProfit(
        product=best[PRODUCT_NAME],
        profit=best[PROFIT],
        sales=best[TOTAL_SALES],
        category=best[CATEGORY] or "",
    )


def top_customer(df: pl.DataFrame) -> TopCustomer:
    """Customer with the highest cumulative sales and their distinct order count"""
    if df.is_empty():
        return TopCustomer()

    grouped = df.group_by(CUSTOMER_NAME, maintain_order=True).agg(
        pl.col(TOTAL_SALES).sum(),
        pl.col(ORDER_ID).n_unique().alias(ORDER_COUNT),
    )
    best = _first_max(grouped, TOTAL_SALES)

    return TopCustomer(
        name=best[CUSTOMER_NAME],
        total_sales=best[TOTAL_SALES],
        order_count=best[ORDER_COUNT],
    )
