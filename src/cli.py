"""
Sales Insights Command Line Interface

Loads the order dataset (from a file or the dataset API), applies the
dashboard filters and prints the requested view as JSON.

Usage:
    sales-insights summary --country "United States"
    sales-insights charts --period quarter --start-date 2024-01-01
    sales-insights orders --search smith --sort total_desc --page 2
    sales-insights export --format csv --category Technology
"""

import argparse
import json
import sys
from dataclasses import asdict
from datetime import date
from typing import Any, List, Optional

import polars as pl

from src.analytics.aggregations import Granularity
from src.analytics.export import ExportFormat, export_data
from src.analytics.filters import FilterCriteria
from src.analytics.processing import build_filter_options, process_records
from src.analytics.report import build_report, report_to_dict
from src.analytics.table import SortOption, TableState
from src.config import get_settings
from src.config.logging import configure_logging, get_logger
from src.dashboard.client import DashboardClient, DatasetFetchError
from src.dashboard.state import DashboardState, build_dashboard
from src.serving.dataset import DatasetError, read_dataset

logger = get_logger(__name__)


def _dump(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str, ensure_ascii=False))


def _add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("filters")
    group.add_argument("--start-date", type=date.fromisoformat, help="First order date (YYYY-MM-DD)")
    group.add_argument("--end-date", type=date.fromisoformat, help="Last order date, inclusive (YYYY-MM-DD)")
    group.add_argument("--country", default="", help="Exact country")
    group.add_argument("--state", default="", help="Exact state (requires --country)")
    group.add_argument("--category", default="", help="Exact category")
    group.add_argument("--segment", default="", help="Exact customer segment")
    group.add_argument("--region", default="", help="Exact region")


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()

    parser = argparse.ArgumentParser(prog="sales-insights", description="Sales insights dashboard CLI")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--data", help=f"Dataset JSON file (default: {settings.dataset.path})")
    source.add_argument("--api-url", help="Fetch the dataset from this API instead of a file")
    parser.add_argument("--log-level", default="WARNING", help="Log level (default: WARNING)")

    commands = parser.add_subparsers(dest="command", required=True)

    summary = commands.add_parser("summary", help="KPI summary")
    _add_filter_arguments(summary)

    charts = commands.add_parser("charts", help="Chart series")
    _add_filter_arguments(charts)
    charts.add_argument(
        "--period",
        choices=[g.value for g in Granularity],
        default=settings.dashboard.default_trend_period,
        help="Sales trend granularity",
    )

    orders = commands.add_parser("orders", help="Orders table page")
    _add_filter_arguments(orders)
    orders.add_argument("--search", default="", help="Customer name or order id")
    orders.add_argument("--sort", choices=[s.value for s in SortOption], default=SortOption.DATE_DESC.value)
    orders.add_argument("--page", type=int, default=1)
    orders.add_argument("--page-size", type=int, default=settings.dashboard.page_size)

    report = commands.add_parser("report", help="Printable report")
    _add_filter_arguments(report)

    export = commands.add_parser("export", help="Export filtered orders")
    _add_filter_arguments(export)
    export.add_argument("--format", choices=[f.value for f in ExportFormat], default=ExportFormat.CSV.value)
    export.add_argument("--filename", default=settings.dashboard.export_filename)
    export.add_argument("--output-dir", default=".")

    commands.add_parser("options", help="Filter options")

    return parser


def load_orders(args: argparse.Namespace) -> pl.DataFrame:
    """Load the base order frame from the API or a dataset file"""
    if args.api_url:
        with DashboardClient(base_url=args.api_url) as client:
            return client.fetch_orders()
    return process_records(read_dataset(args.data))


def criteria_from_args(args: argparse.Namespace) -> FilterCriteria:
    return FilterCriteria(
        start_date=args.start_date,
        end_date=args.end_date,
        country=args.country,
        state=args.state,
        category=args.category,
        segment=args.segment,
        region=args.region,
    )


def run(args: argparse.Namespace) -> int:
    base = load_orders(args)

    if args.command == "options":
        _dump(asdict(build_filter_options(base)))
        return 0

    state = DashboardState.from_settings().with_criteria(criteria_from_args(args))

    if args.command == "charts":
        state = state.with_trend_period(args.period)
    elif args.command == "orders":
        state = state.with_table(
            TableState(
                search_term=args.search,
                sort_option=SortOption(args.sort),
                page=args.page,
                page_size=args.page_size,
            )
        )

    view = build_dashboard(base, state)

    if args.command == "summary":
        _dump(asdict(view.summary))
    elif args.command == "charts":
        _dump(asdict(view.charts))
    elif args.command == "orders":
        _dump(asdict(view.table))
    elif args.command == "report":
        _dump(report_to_dict(build_report(view.orders)))
    elif args.command == "export":
        path = export_data(view.orders, args.format, filename=args.filename, directory=args.output_dir)
        if path is None:
            print("No orders match the filters; nothing exported", file=sys.stderr)
        else:
            print(path)

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(log_level=args.log_level, log_format="console")

    try:
        return run(args)
    except (DatasetError, DatasetFetchError, ValueError) as e:
        logger.debug("Command failed", command=args.command, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
