"""
Unit Tests - Dashboard State and Dataset Client
"""
import random

import httpx
import pytest

from src.analytics.aggregations import Granularity
from src.analytics.filters import FilterCriteria
from src.analytics.table import TableState
from src.dashboard.client import DashboardClient, DatasetFetchError
from src.dashboard.state import DashboardState, build_dashboard


class TestDashboardState:
    """Tests for DashboardState"""

    def test_from_settings(self, monkeypatch):
        """Test initial state follows configuration"""
        monkeypatch.setenv("DASHBOARD_PAGE_SIZE", "10")
        monkeypatch.setenv("DASHBOARD_DEFAULT_TREND_PERIOD", "year")

        state = DashboardState.from_settings()

        assert state.table.page_size == 10
        assert state.trend_period is Granularity.YEAR
        assert state.criteria == FilterCriteria()

    def test_new_criteria_reset_page(self):
        """Test changing filters returns the table to page 1"""
        state = DashboardState(table=TableState(page=4, search_term="smith"))

        changed = state.with_criteria(FilterCriteria(country="Canada"))

        assert changed.table.page == 1
        assert changed.table.search_term == "smith"
        assert state.table.page == 4

    def test_trend_period_from_string(self):
        assert DashboardState().with_trend_period("week").trend_period is Granularity.WEEK

    def test_cleared(self):
        """Test clearing removes every filter"""
        state = DashboardState(criteria=FilterCriteria(country="Canada", segment="Consumer"))

        assert state.cleared().criteria == FilterCriteria()


class TestBuildDashboard:
    """Tests for build_dashboard"""

    def test_options_from_unfiltered_base(self, orders_df):
        """Test filter options do not shrink when filtering"""
        state = DashboardState().with_criteria(FilterCriteria(country="Canada"))

        view = build_dashboard(orders_df, state, rng=random.Random(0))

        assert view.options.countries == ["Canada", "Mexico", "United States"]
        assert len(view.orders) == 1
        assert view.summary.total_sales == 30.0
        assert view.charts.category.labels == ["Furniture"]
        assert view.table.total_rows == 1

    def test_trend_period_applied(self, orders_df):
        view = build_dashboard(orders_df, DashboardState(trend_period=Granularity.YEAR), rng=random.Random(0))

        assert view.charts.sales_trend.labels == ["2023", "2024"]

    def test_no_matches(self, orders_df):
        """Test a filter matching nothing yields an empty dashboard"""
        state = DashboardState(criteria=FilterCriteria(country="France"))

        view = build_dashboard(orders_df, state, rng=random.Random(0))

        assert view.orders.is_empty()
        assert view.summary.total_orders == 0
        assert view.charts.top_countries == []
        assert view.table.rows == []


def _client(handler) -> DashboardClient:
    return DashboardClient(base_url="http://testserver", transport=httpx.MockTransport(handler))


class TestDashboardClient:
    """Tests for DashboardClient"""

    def test_fetch_orders(self, sample_records):
        """Test records are fetched and processed"""
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/data"
            return httpx.Response(200, json=sample_records)

        with _client(handler) as client:
            df = client.fetch_orders()

        assert len(df) == len(sample_records)
        assert df["OrderDate"][0] == 1673740800000

    def test_server_error_details(self):
        """Test the error payload is surfaced"""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"error": "Failed to fetch data", "details": "file missing"})

        with _client(handler) as client:
            with pytest.raises(DatasetFetchError) as exc_info:
                client.fetch_records()

        assert exc_info.value.status_code == 500
        assert exc_info.value.details == "file missing"
        assert str(exc_info.value) == "Failed to fetch data: file missing"

    def test_network_error(self):
        """Test transport failures are reported once"""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with _client(handler) as client:
            with pytest.raises(DatasetFetchError) as exc_info:
                client.fetch_records()

        assert exc_info.value.status_code is None
        assert "connection refused" in exc_info.value.details

    def test_non_array_payload(self):
        """Test payloads that are not arrays are rejected"""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"orders": []})

        with _client(handler) as client:
            with pytest.raises(DatasetFetchError):
                client.fetch_records()

    def test_invalid_json(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>")

        with _client(handler) as client:
            with pytest.raises(DatasetFetchError):
                client.fetch_records()
