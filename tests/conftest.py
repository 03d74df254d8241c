"""
Test Suite Configuration
"""
import json
from pathlib import Path
from typing import Any, Dict, List

import pytest
import polars as pl

from src.analytics.processing import process_records
from src.config import get_settings


def _record(
    order_id: int,
    order_date: str,
    customer: str,
    country: str,
    state: str,
    city: str,
    region: str,
    segment: str,
    ship_mode: str,
    category: str,
    sub_category: str,
    product: str,
    discount: float,
    sales: float,
    profit: float,
    quantity: int,
    month: str,
) -> Dict[str, Any]:
    return {
        "Order ID": order_id,
        "OrderDate": order_date,
        "Customer Name": customer,
        "Country": country,
        "State": state,
        "City": city,
        "Region": region,
        "Segment": segment,
        "Ship Mode": ship_mode,
        "Category": category,
        "Sub-Category": sub_category,
        "Product Name": product,
        "Discount": discount,
        "Total Sales": sales,
        "Profit": profit,
        "Quantity": quantity,
        "Month": month,
    }


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Each test sees settings built from its own environment"""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_records() -> List[Dict[str, Any]]:
    """
    Six line items across five orders.

    Totals: sales 400, profit 35, 5 distinct orders.
    """
    return [
        _record(1, "2023-01-15", "Alice Smith", "United States", "New York", "New York City", "East",
                "Consumer", "Standard Class", "Technology", "Phones", "Phone X", 0.0, 100.0, 20.0, 1, "January"),
        _record(1, "2023-01-15", "Alice Smith", "United States", "New York", "New York City", "East",
                "Consumer", "Standard Class", "Office Supplies", "Paper", "Paper A", 0.1, 50.0, 5.0, 2, "January"),
        _record(2, "2023-03-10", "Bob Jones", "Canada", "Ontario", "Toronto", "East",
                "Corporate", "First Class", "Furniture", "Chairs", "Chair B", 0.0, 30.0, -3.0, 1, "March"),
        _record(3, "2023-06-20", "Carol White", "United States", "California", "Los Angeles", "West",
                "Home Office", "Second Class", "Technology", "Phones", "Phone X", 0.2, 120.0, 15.0, 2, "June"),
        _record(4, "2024-02-05", "Bob Jones", "Mexico", "Jalisco", "Guadalajara", "Central",
                "Corporate", "Standard Class", "Office Supplies", "Binders", "Binder C", 0.0, 40.0, 8.0, 4, "February"),
        _record(5, "2024-11-30", 'Dave "The Buyer" Brown', "United States", "California", "San Francisco", "West",
                "Consumer", "Standard Class", "Furniture", "Tables", "Table D", 0.3, 60.0, -10.0, 1, "November"),
    ]


@pytest.fixture
def orders_df(sample_records) -> pl.DataFrame:
    """Processed order frame of the sample records"""
    return process_records(sample_records)


@pytest.fixture
def dataset_file(tmp_path, monkeypatch, sample_records) -> Path:
    """Sample records written to a dataset file the settings point at"""
    path = tmp_path / "data.json"
    path.write_text(json.dumps(sample_records), encoding="utf-8")
    monkeypatch.setenv("DATASET_PATH", str(path))
    get_settings.cache_clear()
    return path


@pytest.fixture
def missing_dataset(tmp_path, monkeypatch) -> Path:
    """Settings point at a dataset file that does not exist"""
    path = tmp_path / "missing.json"
    monkeypatch.setenv("DATASET_PATH", str(path))
    get_settings.cache_clear()
    return path
