"""
Unit Tests - Sales Aggregations
"""
import pytest
import polars as pl

from src.analytics.aggregations import (
    Granularity,
    all_countries_by_sales,
    most_profitable_product,
    percentage,
    round_half_up,
    segment_distribution,
    ship_mode_distribution,
    sub_category_distribution,
    top_countries_by_sales,
    top_customer,
    totals_by_field,
    totals_by_period,
)
from src.analytics.processing import process_records
from src.analytics.schema import MONTHS, CountrySales, ProductProfit, TopCustomer, empty_orders


def _orders(*rows) -> pl.DataFrame:
    return process_records([dict(row) for row in rows])


class TestRounding:
    """Tests for percentage rounding"""

    def test_half_rounds_up(self):
        """Test .5 rounds towards positive infinity"""
        assert round_half_up(82.5) == 83
        assert round_half_up(7.5) == 8
        assert round_half_up(-2.5) == -2

    def test_percentage(self):
        """Test integer share"""
        assert percentage(150, 180) == 83
        assert percentage(30, 180) == 17

    def test_zero_denominator(self):
        """Test empty totals give 0 rather than an error"""
        assert percentage(10, 0) == 0


class TestTotalsByField:
    """Tests for totals_by_field"""

    def test_sum_per_country(self):
        """Test sales summed per value"""
        df = _orders(
            {"Country": "US", "Total Sales": 100.0},
            {"Country": "CA", "Total Sales": 30.0},
            {"Country": "US", "Total Sales": 50.0},
        )

        assert totals_by_field(df, "Country") == {"US": 150.0, "CA": 30.0}

    def test_first_seen_order(self, orders_df):
        """Test keys keep first-seen order"""
        totals = totals_by_field(orders_df, "Category")

        assert list(totals) == ["Technology", "Office Supplies", "Furniture"]
        assert totals == {"Technology": 220.0, "Office Supplies": 90.0, "Furniture": 90.0}

    def test_totals_sum_to_grand_total(self, orders_df):
        """Test no sales are lost or double counted"""
        for field in ["Category", "Country", "Segment", "Ship Mode", "Region"]:
            totals = totals_by_field(orders_df, field)
            assert sum(totals.values()) == pytest.approx(orders_df["Total Sales"].sum())

    def test_empty(self):
        """Test empty input"""
        assert totals_by_field(empty_orders(), "Category") == {}


class TestTotalsByPeriod:
    """Tests for totals_by_period"""

    def test_month_zero_filled(self, orders_df):
        """Test all twelve months in calendar order"""
        totals = totals_by_period(orders_df, Granularity.MONTH)

        assert list(totals) == MONTHS
        assert totals["Jan"] == 150.0
        assert totals["Feb"] == 40.0
        assert totals["Mar"] == 30.0
        assert totals["Jun"] == 120.0
        assert totals["Nov"] == 60.0
        assert totals["Dec"] == 0

    def test_two_months(self):
        """Test orders in two months still yield twelve labels"""
        df = _orders(
            {"OrderDate": "2023-01-10", "Total Sales": 10.0},
            {"OrderDate": "2023-03-10", "Total Sales": 20.0},
        )

        totals = totals_by_period(df, "month")

        assert len(totals) == 12
        assert sum(1 for value in totals.values() if value == 0) == 10

    def test_empty_month(self):
        """Test empty input still yields twelve zero months"""
        totals = totals_by_period(empty_orders())

        assert list(totals) == MONTHS
        assert all(value == 0 for value in totals.values())

    def test_quarter(self, orders_df):
        """Test quarter labels sorted by number"""
        totals = totals_by_period(orders_df, "quarter")

        assert totals == {"Q1": 220.0, "Q2": 120.0, "Q4": 60.0}
        assert list(totals) == ["Q1", "Q2", "Q4"]

    def test_year(self, orders_df):
        """Test years ascending"""
        totals = totals_by_period(orders_df, Granularity.YEAR)

        assert list(totals) == ["2023", "2024"]
        assert totals["2023"] == pytest.approx(300.0)
        assert totals["2024"] == pytest.approx(100.0)

    def test_week(self, orders_df):
        """Test week labels ordered numerically, not lexically"""
        totals = totals_by_period(orders_df, "week")

        assert list(totals) == ["Week 3", "Week 6", "Week 10", "Week 25", "Week 48"]
        assert totals["Week 3"] == 150.0

    def test_week_counts_jan1_weekday(self):
        """Test Jan 1 weekday offsets the week number (2023 starts on Sunday)"""
        df = _orders(
            {"OrderDate": "2023-01-07", "Total Sales": 1.0},
            {"OrderDate": "2023-01-08", "Total Sales": 2.0},
        )

        assert totals_by_period(df, "week") == {"Week 1": 1.0, "Week 2": 2.0}

    def test_null_dates_excluded(self):
        """Test rows without a date are not bucketed"""
        df = _orders(
            {"OrderDate": "2023-05-01", "Total Sales": 10.0},
            {"OrderDate": None, "Total Sales": 99.0},
        )

        assert totals_by_period(df, "year") == {"2023": 10.0}

    def test_unknown_granularity(self, orders_df):
        """Test unknown periods are rejected"""
        with pytest.raises(ValueError):
            totals_by_period(orders_df, "decade")


class TestCountryRankings:
    """Tests for country rankings"""

    def test_all_countries(self):
        """Test shares of the grand total"""
        df = _orders(
            {"Country": "US", "Total Sales": 100.0},
            {"Country": "CA", "Total Sales": 30.0},
            {"Country": "US", "Total Sales": 50.0},
        )

        assert all_countries_by_sales(df) == [
            CountrySales(name="US", value=150.0, percentage=83),
            CountrySales(name="CA", value=30.0, percentage=17),
        ]

    def test_all_countries_descending(self, orders_df):
        """Test ranking by sales"""
        ranked = all_countries_by_sales(orders_df)

        assert [c.name for c in ranked] == ["United States", "Mexico", "Canada"]
        assert [c.percentage for c in ranked] == [83, 10, 8]

    def test_top_countries_relative_to_shown(self, orders_df):
        """Test top-N percentages use the shown countries' sales"""
        top = top_countries_by_sales(orders_df, limit=2)

        assert [(c.name, c.value) for c in top] == [("United States", 330.0), ("Mexico", 40.0)]
        assert [c.percentage for c in top] == [89, 11]

    def test_ties_keep_first_seen_order(self):
        """Test equal sales keep input order"""
        df = _orders(
            {"Country": "B", "Total Sales": 10.0},
            {"Country": "A", "Total Sales": 10.0},
            {"Country": "C", "Total Sales": 20.0},
        )

        assert [c.name for c in all_countries_by_sales(df)] == ["C", "B", "A"]

    def test_empty(self):
        """Test empty input"""
        assert all_countries_by_sales(empty_orders()) == []
        assert top_countries_by_sales(empty_orders()) == []


class TestDistributions:
    """Tests for percentage distributions"""

    def test_segments(self, orders_df):
        """Test segment shares"""
        assert segment_distribution(orders_df) == {"Consumer": 53, "Corporate": 18, "Home Office": 30}

    def test_ship_modes(self, orders_df):
        """Test ship mode shares"""
        assert ship_mode_distribution(orders_df) == {"Standard Class": 63, "First Class": 8, "Second Class": 30}

    def test_zero_sales(self):
        """Test zero total sales give zero shares"""
        df = _orders({"Segment": "Consumer", "Total Sales": 0.0})

        assert segment_distribution(df) == {"Consumer": 0}

    def test_sub_categories_descending(self, orders_df):
        """Test sub-categories sorted by sales"""
        chart = sub_category_distribution(orders_df)

        assert chart.labels == ["Phones", "Tables", "Paper", "Binders", "Chairs"]
        assert chart.values == [220.0, 60.0, 50.0, 40.0, 30.0]


class TestSelectors:
    """Tests for single-entity selectors"""

    def test_most_profitable_product(self, orders_df):
        """Test profit summed across line items"""
        assert most_profitable_product(orders_df) == ProductProfit(
            product="Phone X", profit=35.0, sales=220.0, category="Technology",
        )

    def test_top_customer_counts_distinct_orders(self):
        """Test order count is distinct Order IDs"""
        df = _orders(
            {"Customer Name": "Alice", "Order ID": 1, "Total Sales": 60.0},
            {"Customer Name": "Alice", "Order ID": 1, "Total Sales": 40.0},
            {"Customer Name": "Bob", "Order ID": 2, "Total Sales": 30.0},
            {"Customer Name": "Alice", "Order ID": 3, "Total Sales": 10.0},
        )

        assert top_customer(df) == TopCustomer(name="Alice", total_sales=110.0, order_count=2)

    def test_tie_goes_to_first_seen(self):
        """Test the earliest customer wins a tie"""
        df = _orders(
            {"Customer Name": "Bob", "Order ID": 1, "Total Sales": 50.0},
            {"Customer Name": "Alice", "Order ID": 2, "Total Sales": 50.0},
        )

        assert top_customer(df).name == "Bob"

    def test_empty_placeholders(self):
        """Test empty input yields zero-valued placeholders"""
        assert most_profitable_product(empty_orders()) == ProductProfit(product="", profit=0.0, sales=0.0, category="")
        assert top_customer(empty_orders()) == TopCustomer(name="", total_sales=0.0, order_count=0)


class TestProperties:
    """Cross-function properties"""

    def test_top_customer_scenario(self):
        """Test larger single order beats more line items"""
        df = _orders(
            {"Customer Name": "Alice", "Order ID": 1, "Total Sales": 100.0},
            {"Customer Name": "Alice", "Order ID": 1, "Total Sales": 100.0},
            {"Customer Name": "Alice", "Order ID": 2, "Total Sales": 100.0},
            {"Customer Name": "Bob", "Order ID": 3, "Total Sales": 400.0},
        )

        assert top_customer(df) == TopCustomer(name="Bob", total_sales=400.0, order_count=1)

    @pytest.mark.parametrize("limit", [1, 2, 3])
    def test_top_percentages_sum_to_100(self, orders_df, limit):
        """Test top-N shares add to 100 within rounding"""
        top = top_countries_by_sales(orders_df, limit=limit)

        assert abs(sum(c.percentage for c in top) - 100) <= len(top)
