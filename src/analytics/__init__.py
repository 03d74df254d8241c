"""
Sales Analytics Module
"""
from .aggregations import (
    Granularity,
    all_countries_by_sales,
    most_profitable_product,
    segment_distribution,
    ship_mode_distribution,
    sub_category_distribution,
    top_countries_by_sales,
    top_customer,
    totals_by_field,
    totals_by_period,
)
from .charts import ChartBundle, build_chart_bundle
from .export import ExportFormat, export_data, to_csv, to_json
from .filters import FilterCriteria, filter_orders
from .processing import build_filter_options, process_records, states_by_country, unique_values
from .report import Report, build_report
from .schema import ChartData, CountrySales, FilterOptions, ProductProfit, TopCustomer
from .summary import SummaryData, summarize
from .table import SortOption, TablePage, TableState, build_table_page

__all__ = [
    "Granularity",
    "all_countries_by_sales",
    "most_profitable_product",
    "segment_distribution",
    "ship_mode_distribution",
    "sub_category_distribution",
    "top_countries_by_sales",
    "top_customer",
    "totals_by_field",
    "totals_by_period",
    "ChartBundle",
    "build_chart_bundle",
    "ExportFormat",
    "export_data",
    "to_csv",
    "to_json",
    "FilterCriteria",
    "filter_orders",
    "build_filter_options",
    "process_records",
    "states_by_country",
    "unique_values",
    "Report",
    "build_report",
    "ChartData",
    "CountrySales",
    "FilterOptions",
    "ProductProfit",
    "TopCustomer",
    "SummaryData",
    "summarize",
    "SortOption",
    "TablePage",
    "TableState",
    "build_table_page",
]
