"""
Summary KPIs

Headline metrics for the dashboard cards.

The period-over-period change figures are simulated: there is no
historical comparison data, so each change is drawn uniformly from a fixed
range per metric. Treat them as placeholders, never as measurements.
"""

import random
from dataclasses import dataclass
from typing import Optional, Tuple

import polars as pl

from .schema import ORDER_ID, PROFIT, TOTAL_SALES

# (min, max) percentage ranges for the simulated changes
SALES_CHANGE_RANGE: Tuple[float, float] = (5, 15)
PROFIT_CHANGE_RANGE: Tuple[float, float] = (-5, 15)
ORDERS_CHANGE_RANGE: Tuple[float, float] = (3, 10)
AOV_CHANGE_RANGE: Tuple[float, float] = (1, 5)


@dataclass(frozen=True)
class SummaryData:
    """Dashboard KPI cards"""
    total_sales: float
    total_profit: float
    total_orders: int
    avg_order_value: float
    sales_change: float = 0.0
    profit_change: float = 0.0
    orders_change: float = 0.0
    aov_change: float = 0.0


def simulate_change(low: float, high: float, rng: Optional[random.Random] = None) -> float:
    """Random change percentage in [low, high], one decimal place"""
    rng = rng or random
    return round(rng.uniform(low, high), 1)


def compute_totals(df: pl.DataFrame) -> Tuple[float, float, int, float]:
    """
    Total sales, total profit, distinct order count and average order value.

    Orders are counted by distinct Order ID, not by line item.
    """
    if df.is_empty():
        return 0, 0, 0, 0

    total_sales = df.get_column(TOTAL_SALES).sum()
    total_profit = df.get_column(PROFIT).sum()
    total_orders = df.get_column(ORDER_ID).n_unique()
    avg_order_value = total_sales / total_orders if total_orders > 0 else 0

    return total_sales, total_profit, total_orders, avg_order_value


def summarize(df: pl.DataFrame, rng: Optional[random.Random] = None) -> SummaryData:
    """
    Build the KPI summary for an order frame.

    Args:
        df: Filtered order frame
        rng: Random source for the simulated changes

    Returns:
        SummaryData with real totals and simulated changes
    """
    total_sales, total_profit, total_orders, avg_order_value = compute_totals(df)

    return SummaryData(
        total_sales=total_sales,
        total_profit=total_profit,
        total_orders=total_orders,
        avg_order_value=avg_order_value,
        sales_change=simulate_change(*SALES_CHANGE_RANGE, rng=rng),
        profit_change=simulate_change(*PROFIT_CHANGE_RANGE, rng=rng),
        orders_change=simulate_change(*ORDERS_CHANGE_RANGE, rng=rng),
        aov_change=simulate_change(*AOV_CHANGE_RANGE, rng=rng),
    )
