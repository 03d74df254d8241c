"""
Printable Report

Collects the figures shown on the printable dashboard report: KPI cards,
country and sub-category tables, category shares and the highlights.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

import polars as pl

from .aggregations import (
    all_countries_by_sales,
    most_profitable_product,
    sub_category_distribution,
    top_customer,
    totals_by_field,
)
from .schema import CATEGORY, CountrySales, ProductProfit, TopCustomer
from .summary import compute_totals


@dataclass(frozen=True)
class CategoryShare:
    """Category sales and share of total sales"""
    category: str
    sales: float
    percentage: float


@dataclass(frozen=True)
class SubCategorySales:
    sub_category: str
    sales: float


@dataclass(frozen=True)
class Report:
    """Printable dashboard report"""
    generated_at: datetime
    total_sales: float
    total_profit: float
    total_orders: int
    avg_order_value: float
    most_profitable_product: ProductProfit
    top_customer: TopCustomer
    countries: List[CountrySales] = field(default_factory=list)
    sub_categories: List[SubCategorySales] = field(default_factory=list)
    categories: List[CategoryShare] = field(default_factory=list)


def build_report(df: pl.DataFrame, generated_at: Optional[datetime] = None) -> Report:
    """
    Build the printable report for an order frame.

    Category percentages are unrounded shares of total sales (0 when there
    are no sales).
    """
    total_sales, total_profit, total_orders, avg_order_value = compute_totals(df)
    sub_categories = sub_category_distribution(df)

    return Report(
        generated_at=generated_at or datetime.now(),
        total_sales=total_sales,
        total_profit=total_profit,
        total_orders=total_orders,
        avg_order_value=avg_order_value,
        most_profitable_product=most_profitable_product(df),
        top_customer=top_customer(df),
        countries=all_countries_by_sales(df),
        sub_categories=[
            SubCategorySales(sub_category=label, sales=value)
            for label, value in zip(sub_categories.labels, sub_categories.values)
        ],
        categories=[
            CategoryShare(
                category=category,
                sales=sales,
                percentage=(sales / total_sales) * 100 if total_sales else 0.0,
            )
            for category, sales in totals_by_field(df, CATEGORY).items()
        ],
    )


def report_to_dict(report: Report) -> Dict[str, Any]:
    """JSON-ready representation of a report"""
    data = asdict(report)
    data["generated_at"] = report.generated_at.isoformat()
    return data
