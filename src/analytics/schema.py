"""
Order Record Schema

Column names, dtypes and result shapes shared by the analytics layer.
Order records keep the dataset's own key names so exports reproduce the
source columns verbatim.
"""

from dataclasses import dataclass, field
from typing import Dict, List

import polars as pl


# =============================================================================
# COLUMNS
# =============================================================================

ORDER_ID = "Order ID"
ORDER_DATE = "OrderDate"
CUSTOMER_NAME = "Customer Name"
COUNTRY = "Country"
STATE = "State"
CITY = "City"
REGION = "Region"
SEGMENT = "Segment"
SHIP_MODE = "Ship Mode"
CATEGORY = "Category"
SUB_CATEGORY = "Sub-Category"
PRODUCT_NAME = "Product Name"
DISCOUNT = "Discount"
TOTAL_SALES = "Total Sales"
PROFIT = "Profit"
QUANTITY = "Quantity"
MONTH = "Month"

# OrderDate is held as epoch milliseconds (UTC)
ORDER_SCHEMA: Dict[str, pl.DataType] = {
    ORDER_ID: pl.Int64,
    ORDER_DATE: pl.Int64,
    CUSTOMER_NAME: pl.Utf8,
    COUNTRY: pl.Utf8,
    STATE: pl.Utf8,
    CITY: pl.Utf8,
    REGION: pl.Utf8,
    SEGMENT: pl.Utf8,
    SHIP_MODE: pl.Utf8,
    CATEGORY: pl.Utf8,
    SUB_CATEGORY: pl.Utf8,
    PRODUCT_NAME: pl.Utf8,
    DISCOUNT: pl.Float64,
    TOTAL_SALES: pl.Float64,
    PROFIT: pl.Float64,
    QUANTITY: pl.Int64,
    MONTH: pl.Utf8,
}

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def empty_orders() -> pl.DataFrame:
    """An order collection with no rows and the full dashboard schema"""
    return pl.DataFrame(schema=ORDER_SCHEMA)


# =============================================================================
# RESULT SHAPES
# =============================================================================

@dataclass(frozen=True)
class ChartData:
    """Parallel label/value series for a single chart"""
    labels: List[str] = field(default_factory=list)
    values: List[float] = field(default_factory=list)


@dataclass(frozen=True)
class CountrySales:
    """Country ranking entry"""
    name: str
    value: float
    percentage: int


@dataclass(frozen=True)
class ProductProfit:
    """Highest cumulative-profit product"""
    product: str = ""
    profit: float = 0.0
    sales: float = 0.0
    category: str = ""


@dataclass(frozen=True)
class TopCustomer:
    """Highest cumulative-sales customer"""
    name: str = ""
    total_sales: float = 0.0
    order_count: int = 0


@dataclass(frozen=True)
class FilterOptions:
    """Selectable values for each filter dropdown"""
    countries: List[str] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)
    segments: List[str] = field(default_factory=list)
    regions: List[str] = field(default_factory=list)
    states_by_country: Dict[str, List[str]] = field(default_factory=dict)


