"""
Data Generation Module
"""
from .generators import OrderGenerator, save_records

__all__ = [
    "OrderGenerator",
    "save_records",
]
