"""
Chart Data Adapter

Projects aggregation results into label/value series for the dashboard's
bar, line, doughnut and pie charts.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Union

import polars as pl

from .aggregations import (
    Granularity,
    all_countries_by_sales,
    segment_distribution,
    ship_mode_distribution,
    sub_category_distribution,
    top_countries_by_sales,
    totals_by_field,
    totals_by_period,
)
from .schema import CATEGORY, ChartData, CountrySales


def _from_mapping(mapping: Dict[str, float]) -> ChartData:
    return ChartData(labels=list(mapping.keys()), values=list(mapping.values()))


def category_chart(df: pl.DataFrame) -> ChartData:
    """Sales per category, categories in first-seen order"""
    return _from_mapping(totals_by_field(df, CATEGORY))


def sales_trend_chart(
    df: pl.DataFrame,
    granularity: Union[Granularity, str] = Granularity.MONTH,
) -> ChartData:
    """Sales per period; monthly series always span Jan..Dec"""
    return _from_mapping(totals_by_period(df, granularity))


def segment_chart(df: pl.DataFrame) -> ChartData:
    """Percentage share per segment"""
    return _from_mapping(segment_distribution(df))


def ship_mode_chart(df: pl.DataFrame) -> ChartData:
    """Percentage share per ship mode"""
    return _from_mapping(ship_mode_distribution(df))


def sub_category_chart(df: pl.DataFrame) -> ChartData:
    """Sales per sub-category, highest first"""
    return sub_category_distribution(df)


def country_pie_chart(countries: List[CountrySales], limit: int = 15) -> ChartData:
    """Sales of the leading countries of a full country ranking"""
    shown = countries[:limit]
    return ChartData(
        labels=[country.name for country in shown],
        values=[country.value for country in shown],
    )


@dataclass(frozen=True)
class ChartBundle:
    """Every chart series shown on the dashboard for one order frame"""
    category: ChartData
    sales_trend: ChartData
    segment: ChartData
    ship_mode: ChartData
    sub_category: ChartData
    country_pie: ChartData
    top_countries: List[CountrySales] = field(default_factory=list)
    all_countries: List[CountrySales] = field(default_factory=list)


def build_chart_bundle(
    df: pl.DataFrame,
    granularity: Union[Granularity, str] = Granularity.MONTH,
    top_countries_limit: int = 5,
    country_pie_limit: int = 15,
) -> ChartBundle:
    """
    Compute every dashboard chart from an (already filtered) order frame.

    Args:
        df: Filtered order frame
        granularity: Sales trend period
        top_countries_limit: Entries in the top countries ranking
        country_pie_limit: Slices in the country pie chart

    Returns:
        ChartBundle with all series
    """
    all_countries = all_countries_by_sales(df)

    return ChartBundle(
        category=category_chart(df),
        sales_trend=sales_trend_chart(df, granularity),
        segment=segment_chart(df),
        ship_mode=ship_mode_chart(df),
        sub_category=sub_category_chart(df),
        country_pie=country_pie_chart(all_countries, country_pie_limit),
        top_countries=top_countries_by_sales(df, top_countries_limit),
        all_countries=all_countries,
    )
