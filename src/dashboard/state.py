"""
Dashboard State

Immutable dashboard state and the view derived from it.

Every interaction (changing a filter, the trend period or the table page)
produces a new DashboardState; build_dashboard recomputes the whole view
from the unchanged base order frame.
"""

import random
from dataclasses import dataclass, field, replace
from typing import Optional, Union

import polars as pl
import structlog

from src.analytics.aggregations import Granularity
from src.analytics.charts import ChartBundle, build_chart_bundle
from src.analytics.filters import FilterCriteria, filter_orders
from src.analytics.processing import build_filter_options
from src.analytics.schema import FilterOptions
from src.analytics.summary import SummaryData, summarize
from src.analytics.table import TablePage, TableState, build_table_page
from src.config import get_settings

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DashboardState:
    """Everything the user has selected on the dashboard"""
    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    trend_period: Granularity = Granularity.MONTH
    table: TableState = field(default_factory=TableState)

    @classmethod
    def from_settings(cls) -> "DashboardState":
        """Initial state using the configured defaults"""
        settings = get_settings()
        return cls(
            trend_period=Granularity(settings.dashboard.default_trend_period),
            table=TableState(page_size=settings.dashboard.page_size),
        )

    def with_criteria(self, criteria: FilterCriteria) -> "DashboardState":
        """Apply new filters; the table returns to its first page"""
        return replace(self, criteria=criteria, table=self.table.with_page(1))

    def with_trend_period(self, period: Union[Granularity, str]) -> "DashboardState":
        return replace(self, trend_period=Granularity(period))

    def with_table(self, table: TableState) -> "DashboardState":
        return replace(self, table=table)

    def cleared(self) -> "DashboardState":
        """Remove every filter"""
        return self.with_criteria(FilterCriteria())


@dataclass(frozen=True)
class DashboardView:
    """Everything rendered for one dashboard state"""
    options: FilterOptions
    orders: pl.DataFrame
    summary: SummaryData
    charts: ChartBundle
    table: TablePage


def build_dashboard(
    base: pl.DataFrame,
    state: DashboardState,
    rng: Optional[random.Random] = None,
) -> DashboardView:
    """
    Derive the full dashboard view.

    Filter options come from the unfiltered base frame; every other part is
    computed from the filtered orders.

    Args:
        base: Unfiltered order frame
        state: Current dashboard state
        rng: Random source for the simulated KPI changes

    Returns:
        DashboardView
    """
    settings = get_settings()
    orders = filter_orders(base, state.criteria)

    logger.info(
        "Building dashboard",
        rows=len(base),
        filtered_rows=len(orders),
        trend_period=state.trend_period.value,
    )

    return DashboardView(
        options=build_filter_options(base),
        orders=orders,
        summary=summarize(orders, rng=rng),
        charts=build_chart_bundle(
            orders,
            state.trend_period,
            top_countries_limit=settings.dashboard.top_countries_limit,
            country_pie_limit=settings.dashboard.country_pie_limit,
        ),
        table=build_table_page(orders, state.table, max_buttons=settings.dashboard.max_page_buttons),
    )
