"""
Sample Dataset Generator
Writes a synthetic order dataset to the configured dataset path.

Usage:
    python scripts/generate_dataset.py --orders 5000 --seed 42
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config import get_settings
from src.config.logging import configure_logging
from src.data.generators import OrderGenerator, save_records


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Generate a sample order dataset")
    parser.add_argument("--orders", type=int, default=2000, help="Number of orders (default: 2000)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument(
        "--output",
        default=settings.dataset.path,
        help=f"Output JSON file (default: {settings.dataset.path})",
    )
    args = parser.parse_args()

    configure_logging(log_format="console")

    records = OrderGenerator(seed=args.seed).generate(n_orders=args.orders)
    output_path = save_records(records, args.output)

    size = output_path.stat().st_size / 1024 / 1024
    print(f"✅ {output_path}: {len(records):,} line items from {args.orders:,} orders ({size:.2f} MB)")


if __name__ == "__main__":
    main()
