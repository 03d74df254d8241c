"""
Synthetic Order Data Generator

Generates a retail order dataset in the dashboard's record format for
development and demos:
- Customers with a fixed segment and home location
- A product catalog across categories and sub-categories
- Orders of one or more line items sharing an Order ID
"""

import json
import random
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import numpy as np
import structlog
from faker import Faker

logger = structlog.get_logger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================

CATEGORIES = [
    ("Furniture", ["Bookcases", "Chairs", "Furnishings", "Tables"]),
    ("Office Supplies", ["Appliances", "Art", "Binders", "Paper", "Storage"]),
    ("Technology", ["Accessories", "Copiers", "Machines", "Phones"]),
]

# country -> region -> states
GEOGRAPHY = {
    "United States": {
        "East": ["New York", "Pennsylvania", "Massachusetts"],
        "West": ["California", "Washington", "Oregon"],
        "Central": ["Texas", "Illinois", "Michigan"],
        "South": ["Florida", "Georgia", "Virginia"],
    },
    "Canada": {
        "East": ["Ontario", "Quebec"],
        "West": ["British Columbia", "Alberta"],
    },
    "Mexico": {
        "Central": ["Jalisco", "Mexico City"],
        "South": ["Yucatan", "Oaxaca"],
    },
}

COUNTRY_WEIGHTS = {"United States": 0.70, "Canada": 0.20, "Mexico": 0.10}
SEGMENTS = {"Consumer": 0.50, "Corporate": 0.30, "Home Office": 0.20}
SHIP_MODES = {"Standard Class": 0.60, "Second Class": 0.20, "First Class": 0.15, "Same Day": 0.05}
DISCOUNTS = [0.0, 0.0, 0.0, 0.1, 0.2, 0.3]

PRICE_RANGES = {
    "Furniture": (40, 900),
    "Office Supplies": (3, 250),
    "Technology": (20, 1500),
}


# =============================================================================
# GENERATOR
# =============================================================================

class OrderGenerator:
    """
    Generate order line items.

    Output is deterministic for a given seed.

    Example:
        records = OrderGenerator(seed=7).generate(n_orders=500)
    """

    def __init__(
        self,
        seed: int = 42,
        n_customers: int = 200,
        n_products: int = 150,
    ):
        self.random = random.Random(seed)
        self.np_random = np.random.default_rng(seed)
        self.fake = Faker()
        self.fake.seed_instance(seed)

        self.customers = self._build_customers(n_customers)
        self.products = self._build_products(n_products)

    def _choice(self, weighted: Dict[str, float]) -> str:
        return self.random.choices(list(weighted.keys()), weights=list(weighted.values()))[0]

    def _build_customers(self, n: int) -> List[Dict[str, str]]:
        customers = []
        for _ in range(n):
            country = self._choice(COUNTRY_WEIGHTS)
            region = self.random.choice(list(GEOGRAPHY[country].keys()))
            customers.append({
                "Customer Name": self.fake.name(),
                "Country": country,
                "State": self.random.choice(GEOGRAPHY[country][region]),
                "City": self.fake.city(),
                "Region": region,
                "Segment": self._choice(SEGMENTS),
            })
        return customers

    def _build_products(self, n: int) -> List[Dict[str, Any]]:
        products = []
        for _ in range(n):
            category, sub_categories = self.random.choice(CATEGORIES)
            sub_category = self.random.choice(sub_categories)
            low, high = PRICE_RANGES[category]
            products.append({
                "Category": category,
                "Sub-Category": sub_category,
                "Product Name": f"{self.fake.word().title()} {sub_category}",
                "unit_price": round(self.random.uniform(low, high), 2),
                "margin": self.random.uniform(0.05, 0.35),
            })
        return products

    def _line_item(self, product: Dict[str, Any]) -> Dict[str, Any]:
        quantity = int(self.np_random.choice([1, 2, 3, 4, 5], p=[0.45, 0.25, 0.15, 0.10, 0.05]))
        discount = self.random.choice(DISCOUNTS)

        total_sales = round(product["unit_price"] * quantity * (1 - discount), 2)
        # Deep discounts can turn a line unprofitable
        profit = round(total_sales * (product["margin"] - discount), 2)

        return {
            "Discount": discount,
            "Total Sales": total_sales,
            "Profit": profit,
            "Quantity": quantity,
        }

    def generate(
        self,
        n_orders: int = 1000,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[Dict[str, Any]]:
        """
        Generate order line items.

        Args:
            n_orders: Number of orders (each has 1-4 line items)
            start_date: First possible order date
            end_date: Last possible order date

        Returns:
            Records in the dataset's key order, OrderDate as YYYY-MM-DD
        """
        end_date = end_date or date(2024, 12, 31)
        start_date = start_date or end_date - timedelta(days=3 * 365)
        span_days = (end_date - start_date).days

        records = []
        for order_id in range(1, n_orders + 1):
            customer = self.random.choice(self.customers)
            order_date = start_date + timedelta(days=self.random.randint(0, span_days))
            ship_mode = self._choice(SHIP_MODES)

            n_items = int(self.np_random.choice([1, 2, 3, 4], p=[0.55, 0.25, 0.12, 0.08]))
            for product in self.random.sample(self.products, n_items):
                records.append({
                    "Order ID": order_id,
                    "OrderDate": order_date.isoformat(),
                    "Customer Name": customer["Customer Name"],
                    "Country": customer["Country"],
                    "State": customer["State"],
                    "City": customer["City"],
                    "Region": customer["Region"],
                    "Segment": customer["Segment"],
                    "Ship Mode": ship_mode,
                    "Category": product["Category"],
                    "Sub-Category": product["Sub-Category"],
                    "Product Name": product["Product Name"],
                    **self._line_item(product),
                    "Month": order_date.strftime("%B"),
                })

        logger.info("Generated order records", orders=n_orders, records=len(records))
        return records


def save_records(records: List[Dict[str, Any]], path: Union[str, Path]) -> Path:
    """Write records as a JSON array, creating parent directories"""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(records, indent=2), encoding="utf-8")
    return output_path
